"""
Exceptions for skale-ops.
"""


class SkaleOpsError(Exception):
    """Base exception for all skale-ops errors"""
    pass


class ConfigError(SkaleOpsError):
    """Raised when settings, the ABI file or signer credentials are missing or invalid"""
    pass


class NetworkError(SkaleOpsError):
    """Raised when the node cannot be reached or serves an unexpected chain"""
    pass


class TransactionError(SkaleOpsError):
    """Raised when a transaction cannot be signed, is rejected, or never lands"""

    def __init__(self, message: str, tx_hash: str = None):
        self.tx_hash = tx_hash
        super().__init__(message)
