"""
ManagerClient - chain handle and contract bindings for the SKALE Manager.
"""
import logging
import urllib.parse
from typing import Dict, Any, Optional

import requests
from web3 import Web3
from web3.contract import Contract

from .config import Settings
from .contracts import (
    SKALE_MANAGER, SCHAINS_INTERNAL, BOUNTY,
    load_abi_file, contract_address, contract_abi,
)
from .exceptions import ConfigError, NetworkError
from .signer import Signer


class ManagerClient:
    """
    Explicitly constructed context for operator commands.

    Holds:
    1. The Web3 connection to the node
    2. Contract bindings built from the deployment ABI file
    3. The settings (network, gas parameters, timeouts)
    4. An optional default signer

    Nothing here is global; build one per process and pass it around.
    """

    def __init__(
        self,
        settings: Settings,
        abi_data: Dict[str, Any],
        w3: Optional[Web3] = None,
        signer: Optional[Signer] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ManagerClient

        Args:
            settings: Runtime settings
            abi_data: Parsed deployment ABI file
            w3: Web3 instance (built from settings.endpoint if omitted)
            signer: Default signer for write commands
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ConfigError: If no endpoint is available to build a Web3 instance
        """
        self.settings = settings
        self.abi_data = abi_data
        self.signer = signer
        self.logger = logger or logging.getLogger(__name__)

        if w3 is None:
            if not settings.endpoint:
                raise ConfigError("No endpoint configured. Set ENDPOINT or pass --endpoint")
            self._check_endpoint(settings.endpoint)
            w3 = Web3(Web3.HTTPProvider(settings.endpoint))
        self.w3 = w3

        self._contracts: Dict[str, Contract] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        signer: Optional[Signer] = None,
        logger: Optional[logging.Logger] = None
    ) -> "ManagerClient":
        """
        Build a client from settings alone, reading the ABI file they name.

        Raises:
            ConfigError: If the ABI file is not configured or cannot be read
        """
        if not settings.abi_filepath:
            raise ConfigError("No ABI file configured. Set ABI_FILEPATH or pass --abi")
        return cls(settings, load_abi_file(settings.abi_filepath), signer=signer, logger=logger)

    def _check_endpoint(self, endpoint: str) -> None:
        parsed = urllib.parse.urlparse(endpoint)
        if parsed.scheme not in ("http", "https"):
            raise ConfigError(f"Endpoint must be an http(s) URL (got: {endpoint})")
        host = parsed.netloc.split(":")[0]
        if parsed.scheme != "https" and host not in ("localhost", "127.0.0.1"):
            self.logger.warning(f"Endpoint {endpoint} is not using https")

    def contract(self, name: str) -> Contract:
        """
        Contract binding for a deployed contract, built once per client.

        Args:
            name: Contract key in the ABI file (e.g. "skale_manager")
        """
        if name not in self._contracts:
            self._contracts[name] = self.w3.eth.contract(
                address=contract_address(self.abi_data, name),
                abi=contract_abi(self.abi_data, name)
            )
        return self._contracts[name]

    @property
    def skale_manager(self) -> Contract:
        return self.contract(SKALE_MANAGER)

    @property
    def schains_internal(self) -> Contract:
        return self.contract(SCHAINS_INTERNAL)

    @property
    def bounty(self) -> Contract:
        return self.contract(BOUNTY)

    def assert_chain_id(self) -> None:
        """
        Verify the node serves the configured chain.

        Raises:
            NetworkError: If the chain id differs or cannot be read
        """
        expected = self.settings.chain_id
        try:
            actual = self.w3.eth.chain_id
        except requests.RequestException as e:
            raise NetworkError(f"Node unreachable at {self.settings.endpoint}: {e}") from e
        except Exception as e:
            raise NetworkError(f"Failed to validate chain ID: {e}") from e

        if actual != expected:
            raise NetworkError(
                f"Chain ID mismatch: network '{self.settings.network}' expects {expected}, "
                f"node reports {actual}"
            )
        self.logger.debug(f"Connected to chain {actual}")
