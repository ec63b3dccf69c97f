"""
Root conftest.py for the peer-watch test suite.

Enforces TRA (Test Responsibility Anchor) and tier markers, and provides the
fixtures shared by the core, adapter and BDD suites.

Usage:
    @pytest.mark.tier(1)
    @pytest.mark.tra("UseCase.ChangeStreamProcessor")
    def test_something():
        ...

Configuration:
    TRA_ENFORCE=0 / TIER_ENFORCE=0  disable enforcement
    TRA_ENFORCE=1 / TIER_ENFORCE=1  fail collection instead of warning
    TIER_TIMEOUT_MULTIPLIER         scale tier timeouts (needs pytest-timeout)
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from peerwatch.adapters.fakes import FakeMetricsAdapter, FakeOrchestrator
from peerwatch.domain.peer import WatchScope
from peerwatch.usecases.initialization_gate import InitializationGate

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.nodes import Item


VALID_TRA_PREFIXES = frozenset(
    [
        "Domain.Invariant.",
        "Domain.Policy.",
        "UseCase.",
        "Port.",
        "Adapter.",
        "Contract.",
    ]
)

# Tier timeout limits in seconds, 0 means no limit
TIER_TIMEOUTS: dict[int, float] = {
    0: 0.1,
    1: 2.0,
    2: 30.0,
    3: 300.0,
    4: 0,
}


def pytest_configure(config: Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "tra(anchor): Test Responsibility Anchor. Must start with one of: "
        "Domain.Invariant, Domain.Policy, UseCase, Port, Adapter, Contract",
    )
    config.addinivalue_line(
        "markers",
        "tier(level): Test tier (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )
    config.addinivalue_line("markers", "unit: Unit tests (no cluster)")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")
    config.addinivalue_line("markers", "concurrency: Tests exercising several threads")
    config.addinivalue_line(
        "markers", "no_parallel: Tests that cannot run in parallel (shared state)"
    )


def _get_tier(item: Item) -> int | None:
    for marker in item.iter_markers(name="tier"):
        if marker.args:
            tier = marker.args[0]
            if isinstance(tier, int) and 0 <= tier <= 4:
                return tier
    return None


def _tra_errors(items: list[Item]) -> list[str]:
    if os.environ.get("TRA_ENFORCE", "warn") == "0":
        return []

    errors = []
    for item in items:
        markers = list(item.iter_markers(name="tra"))
        if not markers:
            errors.append(f"{item.nodeid}: Missing @pytest.mark.tra('...')")
        elif len(markers) > 1:
            errors.append(f"{item.nodeid}: Multiple @tra markers found")
        elif not markers[0].args or not any(
            str(markers[0].args[0]).startswith(prefix) for prefix in VALID_TRA_PREFIXES
        ):
            errors.append(f"{item.nodeid}: Invalid TRA anchor {markers[0].args!r}")
    return errors


def _tier_errors(items: list[Item]) -> list[str]:
    if os.environ.get("TIER_ENFORCE", "warn") == "0":
        return []
    return [
        f"{item.nodeid}: Missing or invalid @pytest.mark.tier()"
        for item in items
        if _get_tier(item) is None
    ]


def _apply_tier_timeouts(items: list[Item]) -> None:
    """Apply a timeout per tier when pytest-timeout is installed."""
    try:
        import pytest_timeout as _  # type: ignore[import-untyped]  # noqa: F401
    except ImportError:
        return

    multiplier = float(os.environ.get("TIER_TIMEOUT_MULTIPLIER", "1.0"))
    for item in items:
        tier = _get_tier(item)
        if tier is None or any(item.iter_markers(name="timeout")):
            continue
        timeout = TIER_TIMEOUTS.get(tier, 0)
        if timeout > 0:
            item.add_marker(pytest.mark.timeout(timeout * multiplier))


def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    """Check TRA and tier markers at collection time."""
    errors = _tra_errors(items) + _tier_errors(items)
    if errors:
        strict = (
            os.environ.get("TRA_ENFORCE") == "1"
            or os.environ.get("TIER_ENFORCE") == "1"
        )
        if strict:
            pytest.fail(
                "TRA/Tier Enforcement Errors:\n"
                + "\n".join(f"  - {e}" for e in errors),
                pytrace=False,
            )
        print("\nTRA/Tier Enforcement Warnings:")
        for error in errors[:20]:
            print(f"  {error}")

    _apply_tier_timeouts(items)


@pytest.hookimpl(trylast=True)
def pytest_report_header(config: Config) -> str:
    tra_enforce = os.environ.get("TRA_ENFORCE", "warn")
    tier_enforce = os.environ.get("TIER_ENFORCE", "warn")
    return f"TRA enforcement: {tra_enforce} | Tier enforcement: {tier_enforce}"


# ============================================================================
# Shared fixtures
# ============================================================================


@pytest.fixture
def scope() -> WatchScope:
    return WatchScope(namespace="default", label_selector="app=peer-watch")


@pytest.fixture
def fake_orchestrator():
    """FakeOrchestrator whose watch stream is closed at teardown."""
    orchestrator = FakeOrchestrator()
    yield orchestrator
    orchestrator.close()


@pytest.fixture
def fake_metrics() -> FakeMetricsAdapter:
    return FakeMetricsAdapter()


@pytest.fixture
def gate():
    """Closed InitializationGate, cancelled at teardown."""
    initialization_gate = InitializationGate()
    yield initialization_gate
    initialization_gate.cancel()
