"""Unit tests for the peerwatch exception hierarchy."""

import pytest

from peerwatch.domain.exceptions import (
    EmptyPeerSetError,
    PeerListError,
    PeerWatchConfigError,
    PeerWatchError,
)


@pytest.mark.unit
@pytest.mark.tier(0)
@pytest.mark.tra("Domain.Invariant.Exceptions")
class TestExceptions:
    """Test exception hierarchy and attributes."""

    @pytest.mark.parametrize(
        "exc_class", [PeerWatchConfigError, PeerListError, EmptyPeerSetError]
    )
    def test_all_errors_derive_from_base(self, exc_class: type) -> None:
        assert issubclass(exc_class, PeerWatchError)

    def test_peer_list_error_keeps_original_error(self) -> None:
        cause = ConnectionError("connection refused")
        error = PeerListError("could not list", original_error=cause)
        assert error.message == "could not list"
        assert error.original_error is cause
        assert str(error) == "could not list"

    def test_peer_list_error_without_cause(self) -> None:
        assert PeerListError("boom").original_error is None

    def test_empty_peer_set_error_default_message(self) -> None:
        assert str(EmptyPeerSetError()) == "no peers detected, not even self"
