from __future__ import annotations

from pydantic import BaseModel, computed_field

from ethwatch.models.transaction import Transaction


class _WindowMixin(BaseModel):
    latest_block: int | None = None
    from_block: int | None = None
    to_block: int | None = None
    blocks_scanned: int = 0
    failed_blocks: list[int] = []

    @computed_field
    @property
    def completeness(self) -> str:
        """full, partial (some blocks failed) or error (every block failed)."""
        if not self.failed_blocks:
            return "full"
        if len(self.failed_blocks) >= self.blocks_scanned:
            return "error"
        return "partial"


class ScanResult(_WindowMixin):
    address: str
    transactions: list[Transaction] = []

    model_config = {
        "json_schema_extra": {
            "example": {
                "address": "0x0000000000000000000000000000000000000011",
                "latest_block": 100,
                "from_block": 98,
                "to_block": 100,
                "blocks_scanned": 3,
                "failed_blocks": [99],
                "completeness": "partial",
                "transactions": [
                    {
                        "hash": "0xaa",
                        "from": "0x0000000000000000000000000000000000000011",
                        "to": "0x22",
                        "blockNumber": "0x64",
                    }
                ],
            }
        }
    }


class SubscriptionScanResult(_WindowMixin):
    matches: dict[str, list[Transaction]] = {}

    @property
    def total_matches(self) -> int:
        return sum(len(txs) for txs in self.matches.values())


class SubscribeResponse(BaseModel):
    address: str
    subscribed: bool


class SubscriptionList(BaseModel):
    addresses: list[str] = []
    count: int = 0


class LatestBlock(BaseModel):
    block_number: int
    block_number_hex: str
