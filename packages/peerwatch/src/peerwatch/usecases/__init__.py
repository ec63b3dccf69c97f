"""Use cases: Application logic layer."""

from peerwatch.usecases.change_stream_processor import ChangeStreamProcessor
from peerwatch.usecases.initialization_gate import InitializationGate
from peerwatch.usecases.membership_store import MembershipStore
from peerwatch.usecases.notifier import Notifier, NotifyFunc
from peerwatch.usecases.readiness_evaluator import ReadinessEvaluator
from peerwatch.usecases.snapshot_fetcher import SnapshotFetcher

__all__ = [
    "ChangeStreamProcessor",
    "InitializationGate",
    "MembershipStore",
    "Notifier",
    "NotifyFunc",
    "ReadinessEvaluator",
    "SnapshotFetcher",
]
