from __future__ import annotations

import threading

from ethwatch.services.base import SubscriberStore
from ethwatch.services.registry import SubscriptionRegistry

ADDR_1 = "0x0000000000000000000000000000000000000011"
ADDR_2 = "0x0000000000000000000000000000000000000012"


class TestSubscribe:
    def test_new_address_added(self):
        registry = SubscriptionRegistry()
        assert registry.subscribe(ADDR_1) is True

    def test_duplicate_returns_false(self):
        registry = SubscriptionRegistry()
        assert registry.subscribe(ADDR_1) is True
        assert registry.subscribe(ADDR_1) is False
        assert registry.list_subscribed() == [ADDR_1]

    def test_case_variants_are_distinct(self):
        registry = SubscriptionRegistry()
        registry.subscribe("0xabc")
        assert registry.subscribe("0xABC") is True
        assert len(registry) == 2

    def test_contains(self):
        registry = SubscriptionRegistry()
        registry.subscribe(ADDR_1)
        assert ADDR_1 in registry
        assert ADDR_2 not in registry


class TestListSubscribed:
    def test_empty(self):
        assert SubscriptionRegistry().list_subscribed() == []

    def test_insertion_order(self):
        registry = SubscriptionRegistry()
        registry.subscribe(ADDR_2)
        registry.subscribe(ADDR_1)
        assert registry.list_subscribed() == [ADDR_2, ADDR_1]

    def test_returns_copy(self):
        registry = SubscriptionRegistry()
        registry.subscribe(ADDR_1)
        listed = registry.list_subscribed()
        listed.append(ADDR_2)
        assert registry.list_subscribed() == [ADDR_1]


class TestConcurrency:
    def test_concurrent_subscribe_same_address_added_once(self):
        registry = SubscriptionRegistry()
        results: list[bool] = []
        results_lock = threading.Lock()
        barrier = threading.Barrier(16)

        def _worker():
            barrier.wait()
            added = registry.subscribe(ADDR_1)
            with results_lock:
                results.append(added)

        threads = [threading.Thread(target=_worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        assert registry.list_subscribed() == [ADDR_1]

    def test_concurrent_distinct_addresses_all_present(self):
        registry = SubscriptionRegistry()
        addresses = [f"0x{i:040x}" for i in range(200)]

        def _worker(chunk):
            for a in chunk:
                registry.subscribe(a)
                registry.list_subscribed()

        threads = [
            threading.Thread(target=_worker, args=(addresses[i::4],)) for i in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(registry.list_subscribed()) == sorted(addresses)


def test_registry_satisfies_subscriber_store():
    assert isinstance(SubscriptionRegistry(), SubscriberStore)
