from __future__ import annotations

import pytest

from ethwatch.models.transaction import Transaction
from ethwatch.utils.errors import ChainClientError, TransportError


class FakeChain:
    """In-memory chain provider recording every call made to it."""

    def __init__(
        self,
        height: int | Exception = 100,
        blocks: dict[int, list[Transaction] | Exception] | None = None,
    ):
        self.height = height
        self.blocks = blocks or {}
        self.height_calls = 0
        self.block_calls: list[int] = []

    async def current_height(self, request_id: int | None = None) -> int:
        self.height_calls += 1
        if isinstance(self.height, Exception):
            raise self.height
        return self.height

    async def block_transactions(
        self, block_number: int, request_id: int | None = None
    ) -> list[Transaction]:
        self.block_calls.append(block_number)
        block = self.blocks.get(block_number, [])
        if isinstance(block, Exception):
            raise block
        return list(block)


@pytest.fixture
def make_tx():
    """Factory fixture for creating Transaction instances."""

    def _make(
        hash: str = "0xaa",
        from_address: str = "0x11",
        to_address: str | None = "0x22",
        block_number: str = "0x64",
    ) -> Transaction:
        return Transaction(
            hash=hash,
            from_address=from_address,
            to_address=to_address,
            block_number=block_number,
        )

    return _make


@pytest.fixture
def make_chain():
    """Factory fixture for creating FakeChain providers."""

    def _make(
        height: int | Exception = 100,
        blocks: dict[int, list[Transaction] | Exception] | None = None,
    ) -> FakeChain:
        return FakeChain(height=height, blocks=blocks)

    return _make


@pytest.fixture
def transport_error() -> ChainClientError:
    return TransportError("connection refused")
