"""
Operator commands against the SKALE Manager contracts.

Each command reads on-chain state, optionally submits one write, re-reads the
state to show the effect and returns a CommandResult.
"""
import logging
from typing import Optional, Union

from web3 import Web3

from .client import ManagerClient
from .exceptions import ConfigError
from .models import CommandResult, TxReceipt
from .signer import Signer
from .submitter import TransactionSubmitter

logger = logging.getLogger(__name__)

GRANT_ROLE = "grant-role"
DELETE_SCHAIN = "delete-schain"
CALCULATE_NORMAL_BOUNTY = "calculate-normal-bounty"


def _send(
    client: ManagerClient,
    signer: Optional[Signer],
    payload: Union[str, bytes],
    destination: str,
    submitter: Optional[TransactionSubmitter]
) -> TxReceipt:
    signer = signer or client.signer
    if signer is None:
        raise ConfigError("No signer available for this command")
    submitter = submitter or TransactionSubmitter(client)
    receipt = submitter.send_transaction(signer, payload, destination)
    if not receipt.succeeded:
        logger.error(f"Transaction {receipt.tx_hash} reverted in block {receipt.block_number}")
    logger.info(f"Transaction was successful: {receipt.succeeded}")
    return receipt


def schain_id(schain_name: str) -> bytes:
    """Schain id as stored by SchainsInternal: keccak256 of the packed name"""
    return Web3.solidity_keccak(["string"], [schain_name])


def grant_role(
    client: ManagerClient,
    address: str,
    signer: Optional[Signer] = None,
    submitter: Optional[TransactionSubmitter] = None
) -> CommandResult:
    """
    Grant SkaleManager's ADMIN_ROLE to an address.

    Args:
        client: Connected ManagerClient
        address: Account receiving the role
        signer: Sending account (defaults to the client's signer)
        submitter: Submitter to use (a fresh one by default)

    Returns:
        CommandResult with hasRole before and after the transaction
    """
    address = Web3.to_checksum_address(address)
    manager = client.skale_manager

    admin_role = manager.functions.ADMIN_ROLE().call()
    before = manager.functions.hasRole(admin_role, address).call()
    logger.info(f"Is this address has admin role: {before}")

    payload = manager.encode_abi("grantRole", args=[admin_role, address])
    receipt = _send(client, signer, payload, manager.address, submitter)

    after = manager.functions.hasRole(admin_role, address).call()
    logger.info(f"Is this address has admin role after transaction: {after}")

    return CommandResult(
        command=GRANT_ROLE,
        target=address,
        before=before,
        after=after,
        receipt=receipt,
        success=receipt.succeeded,
    )


def delete_schain(
    client: ManagerClient,
    schain_name: str,
    signer: Optional[Signer] = None,
    submitter: Optional[TransactionSubmitter] = None
) -> CommandResult:
    """
    Delete an schain through SkaleManager.deleteSchainByRoot.

    The caller must hold the role SkaleManager requires; the chain enforces it.

    Args:
        client: Connected ManagerClient
        schain_name: Name the schain was registered with
        signer: Admin account (defaults to the client's signer)
        submitter: Submitter to use (a fresh one by default)

    Returns:
        CommandResult with schain existence before and after the transaction
    """
    schains_internal = client.schains_internal
    manager = client.skale_manager
    sid = schain_id(schain_name)

    before = schains_internal.functions.isSchainExist(sid).call()
    logger.info(f"Check is schain exist: {before}")

    payload = manager.encode_abi("deleteSchainByRoot", args=[schain_name])
    receipt = _send(client, signer, payload, manager.address, submitter)

    after = schains_internal.functions.isSchainExist(sid).call()
    logger.info(f"Check is schain exist after transaction: {after}")

    return CommandResult(
        command=DELETE_SCHAIN,
        target=schain_name,
        before=before,
        after=after,
        receipt=receipt,
        success=receipt.succeeded,
    )


def calculate_normal_bounty(client: ManagerClient, node_index: int) -> CommandResult:
    """Read-only: normal bounty the Bounty contract computes for a node"""
    logger.info(f"Should show normal bounty for {node_index} node")
    bounty = client.bounty.functions.calculateNormalBounty(node_index).call()
    logger.info(f"Normal bounty: {bounty}")
    return CommandResult(
        command=CALCULATE_NORMAL_BOUNTY,
        target=str(node_index),
        after=bounty,
        success=True,
    )
