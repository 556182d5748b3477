"""
Loading deployed contract addresses and ABIs.

The ABI file is the JSON document produced when the SKALE Manager contracts
are deployed: one ``<name>_address`` and one ``<name>_abi`` key per contract.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Union

from web3 import Web3

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

SKALE_MANAGER = "skale_manager"
SCHAINS_INTERNAL = "schains_internal"
BOUNTY = "bounty"


def load_abi_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read the deployment ABI file.

    Args:
        path: Location of the JSON file

    Returns:
        Parsed JSON document

    Raises:
        ConfigError: If the file is missing or is not a JSON object
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"ABI file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"ABI file {path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"ABI file {path} must contain a JSON object, got {type(data).__name__}")

    logger.debug(f"Loaded ABI file {path} with {len(data)} keys")
    return data


def contract_address(abi_data: Dict[str, Any], name: str) -> str:
    """Checksummed address of a deployed contract"""
    key = f"{name}_address"
    if key not in abi_data:
        raise ConfigError(f"ABI file has no '{key}' entry")
    address = abi_data[key]
    if not Web3.is_address(address):
        raise ConfigError(f"'{key}' is not a valid address: {address}")
    return Web3.to_checksum_address(address)


def contract_abi(abi_data: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    """ABI of a deployed contract"""
    key = f"{name}_abi"
    if key not in abi_data:
        raise ConfigError(f"ABI file has no '{key}' entry")
    abi = abi_data[key]
    if not isinstance(abi, list):
        raise ConfigError(f"'{key}' must be a list, got {type(abi).__name__}")
    return abi
