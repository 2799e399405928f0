"""Capability contracts the scanner and routes depend on.

Any object with matching methods satisfies these; the JSON-RPC client and the
in-memory registry are the defaults, tests substitute fakes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ethwatch.models.transaction import Transaction


@runtime_checkable
class HeightProvider(Protocol):
    async def current_height(self, request_id: int | None = None) -> int:
        """Latest block number. Raises ChainClientError on failure."""
        ...


@runtime_checkable
class BlockProvider(Protocol):
    async def block_transactions(
        self, block_number: int, request_id: int | None = None
    ) -> list[Transaction]:
        """
        Transactions of one block, each stamped with ``hex(block_number)``.

        Returns an empty list for a block without a transactions array (not an
        error). Raises ChainClientError on failure.
        """
        ...


@runtime_checkable
class ChainProvider(HeightProvider, BlockProvider, Protocol):
    ...


@runtime_checkable
class SubscriberStore(Protocol):
    def subscribe(self, address: str) -> bool:
        """Add ``address``; True if it was not already present."""
        ...

    def list_subscribed(self) -> list[str]:
        ...
