"""
Signers hold the key material used to sign transactions.
"""
from typing import Any, Dict, Protocol


class Signer(Protocol):
    """Protocol for transaction signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


from .local import LocalSigner, signer_from_env  # noqa: E402

__all__ = ["Signer", "LocalSigner", "signer_from_env"]
