"""Unit tests for the shared statistics registry."""

import threading

from stats import StatsRegistry, StatsSnapshot


def test_new_registry_starts_at_zero() -> None:
    registry = StatsRegistry()

    assert registry.snapshot() == StatsSnapshot(requests_handled=0, bytes_received=0, bytes_sent=0)



def test_registry_accumulates_each_counter() -> None:
    registry = StatsRegistry()

    registry.increment_requests()
    registry.record_request(40)
    registry.add_bytes_received(2)
    registry.add_bytes_sent(100)

    snapshot = registry.snapshot()

    assert snapshot.requests_handled == 2
    assert snapshot.bytes_received == 42
    assert snapshot.bytes_sent == 100



def test_negative_amounts_never_decrease_counters() -> None:
    registry = StatsRegistry()
    registry.add_bytes_sent(10)

    registry.add_bytes_sent(-5)
    registry.add_bytes_received(-1)

    assert registry.snapshot().bytes_sent == 10
    assert registry.snapshot().bytes_received == 0



def test_concurrent_updates_are_not_lost() -> None:
    registry = StatsRegistry()
    thread_count = 16
    iterations = 2000

    def _worker() -> None:
        for _ in range(iterations):
            registry.record_request(3)
            registry.add_bytes_sent(5)

    threads = [threading.Thread(target=_worker) for _ in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    snapshot = registry.snapshot()
    total = thread_count * iterations

    assert snapshot.requests_handled == total
    assert snapshot.bytes_received == total * 3
    assert snapshot.bytes_sent == total * 5
