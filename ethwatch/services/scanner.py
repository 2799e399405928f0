from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Iterable

from ethwatch.config import settings
from ethwatch.models.response import ScanResult, SubscriptionScanResult
from ethwatch.models.transaction import Transaction
from ethwatch.services.base import ChainProvider, SubscriberStore
from ethwatch.utils.address import tx_touches

logger = logging.getLogger("scanner")


def block_window(latest: int, range_size: int) -> range:
    """Descending block numbers ``latest .. latest - range_size + 1``, stopping at genesis."""
    if range_size <= 0:
        return range(0)
    return range(latest, max(latest - range_size, -1), -1)


class Scanner:
    """Walks a trailing window of blocks and collects transactions touching addresses.

    Per-block fetch failures are logged and recorded in ``failed_blocks``; only a
    failure to resolve the current height aborts a scan.
    """

    def __init__(
        self,
        chain: ChainProvider,
        subscribers: SubscriberStore | None = None,
        case_sensitive: bool | None = None,
    ):
        self._chain = chain
        self._subscribers = subscribers
        self._case_sensitive = (
            case_sensitive if case_sensitive is not None else settings.match_case_sensitive
        )

    async def current_height(self, request_id: int | None = None) -> int:
        return await self._chain.current_height(request_id)

    async def _open_window(
        self,
        result: ScanResult | SubscriptionScanResult,
        range_size: int,
        request_id: int | None,
    ) -> range:
        # Height errors propagate: no reference point, no partial result
        latest = await self._chain.current_height(request_id)
        window = block_window(latest, range_size)
        result.latest_block = latest
        if window:
            result.to_block = window[0]
            result.from_block = window[-1]
        return window

    async def _walk(
        self,
        window: range,
        result: ScanResult | SubscriptionScanResult,
        request_id: int | None,
    ) -> AsyncIterator[list[Transaction]]:
        for block_number in window:
            result.blocks_scanned += 1
            try:
                txs = await self._chain.block_transactions(block_number, request_id)
            except Exception as e:
                logger.error(
                    f"Failed to fetch transactions for block {block_number}: "
                    f"{type(e).__name__}: {e}"
                )
                result.failed_blocks.append(block_number)
                continue
            yield txs

    async def scan(
        self, address: str, range_size: int, request_id: int | None = None
    ) -> ScanResult:
        result = ScanResult(address=address)
        if range_size <= 0:
            return result

        start_time = time.monotonic()
        window = await self._open_window(result, range_size, request_id)

        async for txs in self._walk(window, result, request_id):
            result.transactions.extend(
                tx for tx in txs if tx_touches(tx, address, self._case_sensitive)
            )

        logger.info(
            f"Scan of {address} complete: {result.blocks_scanned} blocks, "
            f"{len(result.transactions)} matches, "
            f"{len(result.failed_blocks)} failed, "
            f"{time.monotonic() - start_time:.1f}s"
        )
        return result

    async def scan_addresses(
        self,
        addresses: Iterable[str],
        range_size: int,
        request_id: int | None = None,
    ) -> SubscriptionScanResult:
        """Scan once for several addresses; each block is fetched a single time."""
        wanted = list(dict.fromkeys(addresses))
        result = SubscriptionScanResult(matches={a: [] for a in wanted})
        if range_size <= 0 or not wanted:
            return result

        start_time = time.monotonic()
        window = await self._open_window(result, range_size, request_id)

        async for txs in self._walk(window, result, request_id):
            for tx in txs:
                for address in wanted:
                    if tx_touches(tx, address, self._case_sensitive):
                        result.matches[address].append(tx)

        logger.info(
            f"Scan of {len(wanted)} addresses complete: "
            f"{result.blocks_scanned} blocks, {result.total_matches} matches, "
            f"{len(result.failed_blocks)} failed, "
            f"{time.monotonic() - start_time:.1f}s"
        )
        return result

    async def scan_subscribed(
        self, range_size: int, request_id: int | None = None
    ) -> SubscriptionScanResult:
        if self._subscribers is None:
            raise RuntimeError("Scanner was created without a subscriber store")
        return await self.scan_addresses(
            self._subscribers.list_subscribed(), range_size, request_id
        )
