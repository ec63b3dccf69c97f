"""Pytest configuration for core adapter unit tests."""

from __future__ import annotations

from typing import Any, Iterator

import pytest


class FakeWatch:
    """Stands in for ``kubernetes.watch.Watch``.

    Replays the configured raw events from ``stream()`` and records the
    call arguments and whether ``stop()`` was called.
    """

    def __init__(self, events: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self._events = list(events or [])
        self._error = error
        self.stream_calls: list[tuple[Any, dict[str, Any]]] = []
        self.stopped = False

    def __call__(self) -> FakeWatch:
        return self

    def stream(self, func: Any, **kwargs: Any) -> Iterator[dict[str, Any]]:
        self.stream_calls.append((func, kwargs))
        yield from self._events
        if self._error is not None:
            raise self._error

    def stop(self) -> None:
        self.stopped = True


@pytest.fixture
def fake_watch_factory():
    """Provide a FakeWatch factory for KubernetesOrchestratorAdapter.

    Example:
        def test_watch(fake_watch_factory):
            pod_watch = fake_watch_factory([{"type": "MODIFIED", "object": pod}])
            adapter = KubernetesOrchestratorAdapter(api, watch_factory=pod_watch)
    """
    return FakeWatch
