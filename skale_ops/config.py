"""
Configuration for skale-ops.

Settings come from three layers, highest precedence first: explicit keyword
overrides (the CLI flags), environment variables, and the defaults below.
"""
import json
import logging
import os
import importlib.resources
from typing import Dict, Any, Optional, Mapping

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "rinkeby"
DEFAULT_CHAIN_ID = 4
DEFAULT_GAS_PRICE = 10000000000  # 10 gwei
DEFAULT_GAS_LIMIT = 8000000
DEFAULT_RECEIPT_TIMEOUT = 120
DEFAULT_POLL_LATENCY = 0.1

# Environment variable -> Settings field
ENV_VARS = {
    "ENDPOINT": "endpoint",
    "ABI_FILEPATH": "abi_filepath",
    "SKALE_OPS_NETWORK": "network",
    "SKALE_OPS_CHAIN_ID": "chain_id",
    "SKALE_OPS_GAS_PRICE": "gas_price",
    "SKALE_OPS_GAS_LIMIT": "gas_limit",
    "SKALE_OPS_RECEIPT_TIMEOUT": "receipt_timeout",
    "SKALE_OPS_POLL_LATENCY": "poll_latency",
}


class NetworkConfig:
    """Known networks bundled with the package (networks.json)"""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load the network table, caching it after the first read.

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is None:
            resource = importlib.resources.files("skale_ops").joinpath("networks.json")
            cls._networks_cache = json.loads(resource.read_text(encoding="utf-8"))
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get one network's configuration.

        Raises:
            ConfigError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ConfigError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_rpc_url(
        cls,
        network: str,
        override: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None
    ) -> Optional[str]:
        """
        Resolve the RPC URL for a network.

        Precedence: override, then <NETWORK>_RPC_URL, then the bundled table.
        """
        if override:
            return override
        env = os.environ if env is None else env
        env_key = network.upper().replace("-", "_") + "_RPC_URL"
        if env.get(env_key):
            return env[env_key]
        return cls.get_network(network).get("rpc")


class Settings(BaseModel):
    """Runtime settings shared by the client, the submitter and the commands"""
    endpoint: Optional[str] = None
    abi_filepath: Optional[str] = None
    network: str = DEFAULT_NETWORK
    chain_id: int = Field(DEFAULT_CHAIN_ID, gt=0)
    gas_price: int = Field(DEFAULT_GAS_PRICE, gt=0)
    gas_limit: int = Field(DEFAULT_GAS_LIMIT, gt=0)
    receipt_timeout: float = Field(DEFAULT_RECEIPT_TIMEOUT, gt=0)
    poll_latency: float = Field(DEFAULT_POLL_LATENCY, gt=0)

    class Config:
        frozen = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, **overrides: Any) -> "Settings":
        """
        Build settings from environment variables and explicit overrides.

        The chain id follows the selected network unless it is set explicitly,
        and the endpoint falls back to the network's RPC URL.

        Args:
            env: Environment mapping (defaults to os.environ)
            **overrides: Field values that win over the environment; None is ignored

        Returns:
            Validated Settings

        Raises:
            ConfigError: If a value is invalid or the network is unknown
        """
        env = os.environ if env is None else env
        values: Dict[str, Any] = {}
        for var, field in ENV_VARS.items():
            if env.get(var):
                values[field] = env[var]
        given = {k: v for k, v in overrides.items() if v is not None}
        values.update(given)

        network = values.get("network", DEFAULT_NETWORK)
        # A network chosen by override brings its own chain id unless one is given with it
        network_overridden = "network" in given and "chain_id" not in given
        if "chain_id" not in values or network_overridden:
            values["chain_id"] = NetworkConfig.get_chain_id(network)
        if "endpoint" not in values:
            values["endpoint"] = NetworkConfig.get_rpc_url(network, env=env)

        try:
            settings = cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e

        logger.debug(
            f"Settings: network={settings.network} chain_id={settings.chain_id} "
            f"gas_price={settings.gas_price} gas_limit={settings.gas_limit}"
        )
        return settings
