from .client_creator import (
    create_test_client,
    TEST_RPC_URL,
    TEST_PRIV_KEY,
)

__all__ = ["create_test_client", "TEST_RPC_URL", "TEST_PRIV_KEY"]
