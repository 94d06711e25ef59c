"""Tests for per-connection handler task spawning."""

import threading

import pytest

from task_spawner import TaskSpawner


def test_spawn_runs_handler_on_its_own_thread() -> None:
    seen: list[tuple[object, tuple[str, int], str]] = []
    done = threading.Event()

    def _handler(sock: object, address: tuple[str, int]) -> None:
        seen.append((sock, address, threading.current_thread().name))
        done.set()

    spawner = TaskSpawner(max_tasks=4, handler=_handler)
    marker = object()

    assert spawner.spawn(marker, ("127.0.0.1", 1234)) is True
    assert done.wait(timeout=2)
    assert spawner.wait_for_drain(timeout=2)

    sock, address, thread_name = seen[0]
    assert sock is marker
    assert address == ("127.0.0.1", 1234)
    assert thread_name.startswith("http-handler-")
    assert spawner.active_tasks == 0



def test_spawn_returns_false_at_ceiling_and_recovers() -> None:
    release = threading.Event()
    started = threading.Event()

    def _handler(_sock: object, _address: tuple[str, int]) -> None:
        started.set()
        release.wait(timeout=5)

    spawner = TaskSpawner(max_tasks=1, handler=_handler)

    assert spawner.spawn(object(), ("127.0.0.1", 1)) is True
    assert started.wait(timeout=2)
    assert spawner.spawn(object(), ("127.0.0.1", 2)) is False

    release.set()
    assert spawner.wait_for_drain(timeout=2)
    assert spawner.spawn(object(), ("127.0.0.1", 3)) is True
    assert spawner.wait_for_drain(timeout=2)



def test_handler_errors_release_the_slot() -> None:
    def _handler(_sock: object, _address: tuple[str, int]) -> None:
        raise RuntimeError("boom")

    spawner = TaskSpawner(max_tasks=1, handler=_handler)

    assert spawner.spawn(object(), ("127.0.0.1", 1)) is True
    assert spawner.wait_for_drain(timeout=2)
    assert spawner.active_tasks == 0



def test_wait_for_drain_times_out_while_busy() -> None:
    release = threading.Event()
    spawner = TaskSpawner(max_tasks=2, handler=lambda _sock, _addr: release.wait(timeout=5))

    spawner.spawn(object(), ("127.0.0.1", 1))
    try:
        assert spawner.wait_for_drain(timeout=0.2) is False
    finally:
        release.set()
    assert spawner.wait_for_drain(timeout=2) is True



def test_shutdown_refuses_new_tasks() -> None:
    spawner = TaskSpawner(max_tasks=2, handler=lambda _sock, _addr: None)
    spawner.shutdown()

    assert spawner.spawn(object(), ("127.0.0.1", 1)) is False



def test_max_tasks_must_be_positive() -> None:
    with pytest.raises(ValueError, match="max_tasks must be positive"):
        TaskSpawner(max_tasks=0, handler=lambda _sock, _addr: None)
