from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Transaction(BaseModel):
    hash: str
    from_address: str = Field(alias="from")
    # None for contract creations
    to_address: str | None = Field(alias="to")
    block_number: str = Field(alias="blockNumber")

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "hash": "0x5c504ed432cb51138bcf09aa5e8a410dd4a1e204ef84bfed1be16dfba1b22060",
                "from": "0xa1e4380a3b1f749673e270229993ee55f35663b4",
                "to": "0x5df9b87991262f6ba471f09758cde1c0fc1de734",
                "blockNumber": "0xb443",
            }
        },
    )


class NodeTransaction(BaseModel):
    """Subset of an ``eth_getBlockByNumber`` full transaction object."""

    hash: str
    from_address: str = Field(alias="from")
    to_address: str | None = Field(alias="to")

    model_config = ConfigDict(strict=True, extra="ignore")

    def stamped(self, block_number: int) -> Transaction:
        return Transaction(
            hash=self.hash,
            from_address=self.from_address,
            to_address=self.to_address,
            block_number=hex(block_number),
        )
