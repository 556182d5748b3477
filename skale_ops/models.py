"""
Data models for skale-ops.
"""
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field


class RawTransaction(BaseModel):
    """Unsigned legacy transaction record, immutable once built"""
    from_address: str = Field(..., alias="from")
    nonce: str
    data: str
    to: str
    gas_price: int = Field(..., alias="gasPrice")
    gas: int

    class Config:
        populate_by_name = True
        frozen = True

    def to_dict(self) -> Dict[str, Any]:
        """Wire-style field names, exactly as built"""
        return self.model_dump(by_alias=True)

    def to_signable(self, chain_id: int) -> Dict[str, Any]:
        """
        Transaction dict accepted by eth_account signers.

        Args:
            chain_id: EIP-155 chain identifier baked into the signature

        Returns:
            Dictionary with integer nonce, zero value and the chain id
        """
        return {
            "from": self.from_address,
            "nonce": int(self.nonce, 16),
            "data": self.data,
            "to": self.to,
            "gasPrice": self.gas_price,
            "gas": self.gas,
            "value": 0,
            "chainId": chain_id,
        }


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: str = Field(..., alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]]

    class Config:
        populate_by_name = True

    @property
    def succeeded(self) -> bool:
        return self.status == 1


class CommandResult(BaseModel):
    """Outcome of one operator command"""
    command: str
    target: str
    before: Any = None
    after: Any = None
    receipt: Optional[TxReceipt] = None
    success: bool
