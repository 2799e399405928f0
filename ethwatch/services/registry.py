from __future__ import annotations

import logging
import threading

logger = logging.getLogger("registry")


class SubscriptionRegistry:
    """In-memory set of subscribed addresses, safe for concurrent use."""

    def __init__(self):
        # dict keeps insertion order for listing
        self._addresses: dict[str, None] = {}
        self._lock = threading.Lock()

    def subscribe(self, address: str) -> bool:
        with self._lock:
            if address in self._addresses:
                return False
            self._addresses[address] = None
        logger.info(f"Subscribed {address}")
        return True

    def list_subscribed(self) -> list[str]:
        with self._lock:
            return list(self._addresses)

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return address in self._addresses

    def __len__(self) -> int:
        with self._lock:
            return len(self._addresses)
