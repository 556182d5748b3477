"""
Transaction submission: nonce, build, sign, broadcast, await receipt.
"""
import logging
from typing import Any, Dict, Optional, Union

import requests
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception

from .client import ManagerClient
from .exceptions import NetworkError, TransactionError
from .models import RawTransaction, TxReceipt
from .signer import Signer


def build_raw_transaction(
    sender: str,
    nonce: int,
    payload: Union[str, bytes],
    destination: str,
    gas_price: int,
    gas_limit: int
) -> RawTransaction:
    """
    Build the unsigned transaction record.

    Args:
        sender: Sender address (checksummed on the way in)
        nonce: Sender's transaction count
        payload: ABI-encoded call data, hex string or bytes
        destination: Target contract address
        gas_price: Gas price in wei
        gas_limit: Gas limit

    Returns:
        RawTransaction with the nonce hex-encoded
    """
    return RawTransaction(
        from_address=Web3.to_checksum_address(sender),
        nonce=hex(nonce),
        data=Web3.to_hex(payload) if isinstance(payload, bytes) else payload,
        to=Web3.to_checksum_address(destination),
        gas_price=gas_price,
        gas=gas_limit,
    )


class TransactionSubmitter:
    """
    Signs and broadcasts contract calls for a ManagerClient.

    Gas price, gas limit and chain id come from the client's settings; there
    is no estimation, no retry and one transaction in flight at a time.
    """

    def __init__(self, client: ManagerClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.w3 = client.w3
        self.settings = client.settings
        self.logger = logger or logging.getLogger(__name__)

    def send_transaction(
        self,
        signer: Signer,
        payload: Union[str, bytes],
        destination: str
    ) -> TxReceipt:
        """
        Sign, broadcast and wait for one transaction.

        Args:
            signer: Signer for the sending account
            payload: ABI-encoded call data
            destination: Target contract address

        Returns:
            Receipt of the mined transaction, whatever its status

        Raises:
            NetworkError: If the node cannot be reached
            TransactionError: If signing fails, the node rejects the
                transaction, or no receipt arrives within the timeout
        """
        self.logger.info("Transaction generating started")

        try:
            nonce = self.w3.eth.get_transaction_count(signer.address)
        except requests.RequestException as e:
            raise NetworkError(f"Failed to fetch nonce: {e}") from e
        self.logger.debug(f"Nonce for {signer.address}: {nonce}")

        raw_tx = build_raw_transaction(
            signer.address, nonce, payload, destination,
            self.settings.gas_price, self.settings.gas_limit
        )
        self.logger.debug(f"Raw transaction: {raw_tx.to_dict()}")

        try:
            signed_tx = signer.sign_transaction(raw_tx.to_signable(self.settings.chain_id))
        except Exception as e:
            self.logger.error(f"Transaction signing failed: {e}")
            raise TransactionError(f"Failed to sign transaction: {str(e)}") from e

        serialized = Web3.to_hex(signed_tx.raw_transaction)
        self.logger.debug(f"Serialized transaction: {serialized}")

        try:
            tx_hash = self.w3.eth.send_raw_transaction(serialized)
        except requests.RequestException as e:
            raise NetworkError(f"Failed to send transaction: {e}") from e
        except (Web3Exception, ValueError) as e:
            self.logger.error(f"Node rejected transaction: {e}")
            raise TransactionError(f"Node rejected transaction: {str(e)}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        self.logger.info(f"Transaction sent: {tx_hash_hex}")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.settings.receipt_timeout,
                poll_latency=self.settings.poll_latency
            )
        except TimeExhausted as e:
            raise TransactionError(
                f"No receipt for {tx_hash_hex} after {self.settings.receipt_timeout}s",
                tx_hash=tx_hash_hex
            ) from e

        result = self._convert_receipt(receipt)
        self.logger.info(f"Transaction receipt is - {result.model_dump(by_alias=True)}")
        return result

    def submit(self, signer: Signer, payload: Union[str, bytes], destination: str) -> bool:
        """
        Send a transaction and report whether it executed successfully.

        Returns:
            True when the receipt status is 1, False when the call reverted
        """
        receipt = self.send_transaction(signer, payload, destination)
        if not receipt.succeeded:
            self.logger.error(f"Transaction {receipt.tx_hash} reverted in block {receipt.block_number}")
        return receipt.succeeded

    def _convert_receipt(self, web3_receipt: Any) -> TxReceipt:
        """
        Convert Web3 receipt to our TxReceipt model

        Args:
            web3_receipt: The Web3 transaction receipt

        Returns:
            Our TxReceipt model
        """
        receipt_dict: Dict[str, Any] = dict(web3_receipt)

        # Convert bytes to hex strings
        for key, value in list(receipt_dict.items()):
            if isinstance(value, bytes):
                receipt_dict[key] = Web3.to_hex(value)
        receipt_dict["logs"] = [dict(log) for log in receipt_dict.get("logs", [])]

        return TxReceipt.model_validate(receipt_dict)


def submit(client: ManagerClient, signer: Signer, payload: Union[str, bytes], destination: str) -> bool:
    """Submit one transaction through a fresh TransactionSubmitter"""
    return TransactionSubmitter(client).submit(signer, payload, destination)
