"""
Pytest fixtures for the skale-ops tests.
"""
import pytest
from unittest.mock import MagicMock
from eth_account import Account
from web3 import Web3
from web3.providers.rpc import HTTPProvider

from skale_ops.client import ManagerClient
from skale_ops.config import Settings
from skale_ops.signer import LocalSigner

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_CHAIN_ID = 4
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_ADMIN_KEY = "0x" + "11" * 32
TEST_MANAGER = "0x1234567890123456789012345678901234567890"
TEST_SCHAINS_INTERNAL = "0x2345678901234567890123456789012345678901"
TEST_BOUNTY = "0x3456789012345678901234567890123456789012"
TEST_GRANTEE = "0x00000000000000000000000000000000000000ab"
TEST_TX_HASH = bytes.fromhex("ab" * 32)
TEST_BLOCK_HASH = bytes.fromhex("cd" * 32)

# Just the functions the commands touch
SKALE_MANAGER_ABI = [
    {
        "inputs": [],
        "name": "ADMIN_ROLE",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "bytes32", "name": "role", "type": "bytes32"},
            {"internalType": "address", "name": "account", "type": "address"}
        ],
        "name": "hasRole",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "bytes32", "name": "role", "type": "bytes32"},
            {"internalType": "address", "name": "account", "type": "address"}
        ],
        "name": "grantRole",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "string", "name": "name", "type": "string"}],
        "name": "deleteSchainByRoot",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]

SCHAINS_INTERNAL_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "schainHash", "type": "bytes32"}],
        "name": "isSchainExist",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    }
]

BOUNTY_ABI = [
    {
        "inputs": [{"internalType": "uint256", "name": "nodeIndex", "type": "uint256"}],
        "name": "calculateNormalBounty",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]

TEST_ABI_DATA = {
    "skale_manager_address": TEST_MANAGER,
    "skale_manager_abi": SKALE_MANAGER_ABI,
    "schains_internal_address": TEST_SCHAINS_INTERNAL,
    "schains_internal_abi": SCHAINS_INTERNAL_ABI,
    "bounty_address": TEST_BOUNTY,
    "bounty_abi": BOUNTY_ABI,
}


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None, _=None):      # signature match
        if method in {"eth_chainId"}:
            return {"jsonrpc": "2.0", "id": 1, "result": hex(TEST_CHAIN_ID)}
        # everything else – return something harmless
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


def make_receipt(status=1, tx_hash=TEST_TX_HASH, sender=None, to=TEST_MANAGER):
    """Receipt shaped like the AttributeDict web3 returns"""
    return {
        "transactionHash": tx_hash,
        "blockNumber": 12345,
        "blockHash": TEST_BLOCK_HASH,
        "status": status,
        "gasUsed": 85000,
        "from": sender or Account.from_key(TEST_PRIV_KEY).address,
        "to": to,
        "logs": [],
    }


@pytest.fixture
def settings():
    return Settings(endpoint=TEST_RPC_URL, network="rinkeby", chain_id=TEST_CHAIN_ID)


@pytest.fixture
def signer():
    return LocalSigner(TEST_PRIV_KEY)


@pytest.fixture
def admin_signer():
    return LocalSigner(TEST_ADMIN_KEY)


@pytest.fixture
def mock_w3():
    """Mock Web3 instance with a node that mines everything it is sent"""
    mock = MagicMock(spec=Web3)
    eth = MagicMock()
    eth.chain_id = TEST_CHAIN_ID
    eth.get_transaction_count = MagicMock(return_value=5)
    eth.send_raw_transaction = MagicMock(return_value=TEST_TX_HASH)
    eth.wait_for_transaction_receipt = MagicMock(return_value=make_receipt())
    mock.eth = eth
    return mock


@pytest.fixture
def mock_contracts(mock_w3):
    """MagicMock contract bindings, one per deployed address"""
    by_address = {}
    for address in (TEST_MANAGER, TEST_SCHAINS_INTERNAL, TEST_BOUNTY):
        contract = MagicMock()
        contract.address = Web3.to_checksum_address(address)
        by_address[contract.address] = contract

    mock_w3.eth.contract = MagicMock(side_effect=lambda address, abi: by_address[address])
    return by_address


@pytest.fixture
def client(settings, mock_w3, signer):
    """ManagerClient wired to the mocked node"""
    return ManagerClient(settings, TEST_ABI_DATA, w3=mock_w3, signer=signer)
