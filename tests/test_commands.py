"""
Tests for the operator commands.
"""
import logging
import pytest
from unittest.mock import MagicMock
from web3 import Web3

from skale_ops.commands import (
    grant_role, delete_schain, calculate_normal_bounty, schain_id,
    GRANT_ROLE, DELETE_SCHAIN, CALCULATE_NORMAL_BOUNTY,
)
from skale_ops.exceptions import ConfigError
from skale_ops.client import ManagerClient
from skale_ops.models import TxReceipt
from tests.conftest import (
    TEST_ABI_DATA, TEST_MANAGER, TEST_SCHAINS_INTERNAL, TEST_BOUNTY, TEST_GRANTEE,
    make_receipt,
)

ADMIN_ROLE = b"\x01" * 32


def _manager(mock_contracts):
    return mock_contracts[Web3.to_checksum_address(TEST_MANAGER)]


def test_grant_role(client, mock_w3, mock_contracts, signer):
    """Role checked, grantRole sent to SkaleManager, role re-checked"""
    manager = _manager(mock_contracts)
    manager.functions.ADMIN_ROLE.return_value.call.return_value = ADMIN_ROLE
    manager.functions.hasRole.return_value.call.side_effect = [False, True]
    manager.encode_abi.return_value = "0x2f2ff15d"

    result = grant_role(client, TEST_GRANTEE)

    assert result.command == GRANT_ROLE
    assert result.target == Web3.to_checksum_address(TEST_GRANTEE)
    assert result.before is False
    assert result.after is True
    assert result.success is True
    assert result.receipt.status == 1

    manager.encode_abi.assert_called_once_with(
        "grantRole", args=[ADMIN_ROLE, Web3.to_checksum_address(TEST_GRANTEE)]
    )
    manager.functions.hasRole.assert_called_with(ADMIN_ROLE, Web3.to_checksum_address(TEST_GRANTEE))
    mock_w3.eth.get_transaction_count.assert_called_once_with(signer.address)


def test_grant_role_reverted(client, mock_w3, mock_contracts, caplog):
    manager = _manager(mock_contracts)
    manager.functions.ADMIN_ROLE.return_value.call.return_value = ADMIN_ROLE
    manager.functions.hasRole.return_value.call.return_value = False
    manager.encode_abi.return_value = "0x2f2ff15d"
    mock_w3.eth.wait_for_transaction_receipt.return_value = make_receipt(status=0)

    with caplog.at_level(logging.ERROR, logger="skale_ops.commands"):
        result = grant_role(client, TEST_GRANTEE)

    assert result.success is False
    assert result.after is False
    assert "reverted" in caplog.text


def test_grant_role_without_signer(settings, mock_w3, mock_contracts):
    client = ManagerClient(settings, TEST_ABI_DATA, w3=mock_w3)
    manager = _manager(mock_contracts)
    manager.encode_abi.return_value = "0x2f2ff15d"

    with pytest.raises(ConfigError, match="No signer"):
        grant_role(client, TEST_GRANTEE)
    mock_w3.eth.send_raw_transaction.assert_not_called()


def test_grant_role_uses_explicit_submitter(client, mock_contracts, admin_signer):
    manager = _manager(mock_contracts)
    manager.functions.hasRole.return_value.call.return_value = True
    manager.encode_abi.return_value = "0x2f2ff15d"
    submitter = MagicMock()
    submitter.send_transaction.return_value = TxReceipt(
        transactionHash="0xab", blockNumber=1, blockHash="0xcd", status=1,
        gasUsed=21000, from_address=admin_signer.address, logs=[]
    )

    result = grant_role(client, TEST_GRANTEE, signer=admin_signer, submitter=submitter)

    assert result.receipt.tx_hash == "0xab"
    submitter.send_transaction.assert_called_once_with(
        admin_signer, "0x2f2ff15d", Web3.to_checksum_address(TEST_MANAGER)
    )


def test_schain_id_matches_solidity_keccak():
    assert schain_id("my-schain") == Web3.keccak(text="my-schain")


def test_delete_schain(client, mock_w3, mock_contracts, admin_signer):
    """Existence checked on SchainsInternal, deleteSchainByRoot sent by the admin"""
    manager = _manager(mock_contracts)
    schains = mock_contracts[Web3.to_checksum_address(TEST_SCHAINS_INTERNAL)]
    schains.functions.isSchainExist.return_value.call.side_effect = [True, False]
    manager.encode_abi.return_value = "0xabcdef"

    result = delete_schain(client, "my-schain", signer=admin_signer)

    assert result.command == DELETE_SCHAIN
    assert result.target == "my-schain"
    assert result.before is True
    assert result.after is False
    assert result.success is True

    schains.functions.isSchainExist.assert_called_with(Web3.keccak(text="my-schain"))
    manager.encode_abi.assert_called_once_with("deleteSchainByRoot", args=["my-schain"])
    mock_w3.eth.get_transaction_count.assert_called_once_with(admin_signer.address)


def test_calculate_normal_bounty(client, mock_w3, mock_contracts):
    bounty = mock_contracts[Web3.to_checksum_address(TEST_BOUNTY)]
    bounty.functions.calculateNormalBounty.return_value.call.return_value = 4200000000000000000

    result = calculate_normal_bounty(client, 7)

    assert result.command == CALCULATE_NORMAL_BOUNTY
    assert result.target == "7"
    assert result.after == 4200000000000000000
    assert result.success is True
    assert result.receipt is None
    bounty.functions.calculateNormalBounty.assert_called_once_with(7)
    mock_w3.eth.send_raw_transaction.assert_not_called()
