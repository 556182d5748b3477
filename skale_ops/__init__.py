"""
skale-ops - operator tooling for the SKALE Manager contracts.
"""
from .client import ManagerClient
from .commands import grant_role, delete_schain, calculate_normal_bounty
from .config import Settings, NetworkConfig
from .exceptions import SkaleOpsError, ConfigError, NetworkError, TransactionError
from .models import RawTransaction, TxReceipt, CommandResult
from .signer import Signer, LocalSigner, signer_from_env
from .submitter import TransactionSubmitter, build_raw_transaction, submit
from .version import __version__

__all__ = [
    "ManagerClient",
    "Settings",
    "NetworkConfig",
    "TransactionSubmitter",
    "build_raw_transaction",
    "submit",
    "grant_role",
    "delete_schain",
    "calculate_normal_bounty",
    "Signer",
    "LocalSigner",
    "signer_from_env",
    "RawTransaction",
    "TxReceipt",
    "CommandResult",
    "SkaleOpsError",
    "ConfigError",
    "NetworkError",
    "TransactionError",
    "__version__",
]
