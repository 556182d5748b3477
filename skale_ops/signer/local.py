"""
Local signer backed by a private key held in memory.
"""
import os
import logging
from typing import Any, Dict, Mapping, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)


class LocalSigner:
    """Signs transactions locally; the key never leaves the process"""

    def __init__(self, priv_key: str):
        """
        Args:
            priv_key: Hex private key, with or without 0x prefix

        Raises:
            ConfigError: If the key cannot be parsed
        """
        key = priv_key.strip()
        if not key.startswith("0x"):
            key = "0x" + key
        try:
            self._account: LocalAccount = Account.from_key(key)
        except (ValueError, TypeError) as e:
            # Never echo the key itself
            raise ConfigError(f"Invalid private key: {type(e).__name__}") from None
        self.address = self._account.address

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """
        Sign a transaction dict.

        Returns:
            eth_account SignedTransaction with raw_transaction and hash
        """
        return self._account.sign_transaction(transaction_dict)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address})"


def signer_from_env(
    account_var: str,
    key_var: str,
    env: Optional[Mapping[str, str]] = None
) -> LocalSigner:
    """
    Build a signer from a pair of environment variables.

    Both variables are required and the account must match the key, so a
    misconfigured operator shell fails before any node is contacted.

    Args:
        account_var: Variable holding the account address
        key_var: Variable holding the hex private key
        env: Environment mapping (defaults to os.environ)

    Returns:
        LocalSigner for the key

    Raises:
        ConfigError: If a variable is missing or the account does not match the key
    """
    env = os.environ if env is None else env
    missing = [name for name in (account_var, key_var) if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing environment variables: {', '.join(missing)}")

    account = env[account_var].strip()
    if not Web3.is_address(account):
        raise ConfigError(f"{account_var} is not a valid address: {account}")

    signer = LocalSigner(env[key_var])
    if Web3.to_checksum_address(account) != signer.address:
        raise ConfigError(f"{account_var} does not match the address derived from {key_var}")

    logger.debug(f"Loaded signer {signer.address} from {account_var}/{key_var}")
    return signer
