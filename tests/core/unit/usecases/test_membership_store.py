"""Unit tests for MembershipStore use case."""

import threading

import pytest
from hypothesis import given, strategies as st

from peerwatch.usecases.membership_store import MembershipStore

SELF = "10.0.0.1"


@pytest.mark.unit
@pytest.mark.tier(0)
@pytest.mark.tra("UseCase.MembershipStore")
class TestMembershipStore:
    """Test MembershipStore use case."""

    def test_self_is_always_member(self) -> None:
        store = MembershipStore(SELF)
        assert store.snapshot_sorted() == [SELF]
        assert SELF in store

    def test_seeded_from_initial(self) -> None:
        store = MembershipStore(SELF, ["10.0.0.3", "10.0.0.2", SELF])
        assert store.snapshot_sorted() == [SELF, "10.0.0.2", "10.0.0.3"]
        assert len(store) == 3

    def test_add_reports_new_members_only(self) -> None:
        store = MembershipStore(SELF)
        assert store.add("10.0.0.2") is True
        assert store.add("10.0.0.2") is False
        assert store.snapshot_sorted() == [SELF, "10.0.0.2"]

    def test_remove_reports_existing_members_only(self) -> None:
        store = MembershipStore(SELF, ["10.0.0.2"])
        assert store.remove("10.0.0.2") is True
        assert store.remove("10.0.0.2") is False
        assert store.snapshot_sorted() == [SELF]

    def test_self_cannot_be_removed(self) -> None:
        store = MembershipStore(SELF)
        assert store.remove(SELF) is False
        assert store.contains(SELF)

    def test_empty_self_address_rejected(self) -> None:
        with pytest.raises(ValueError, match="self_address cannot be empty"):
            MembershipStore("")

    def test_empty_address_rejected(self) -> None:
        store = MembershipStore(SELF)
        with pytest.raises(ValueError, match="address cannot be empty"):
            store.add("")
        with pytest.raises(ValueError):
            MembershipStore(SELF, [""])

    def test_snapshot_is_a_copy(self) -> None:
        store = MembershipStore(SELF)
        snapshot = store.snapshot_sorted()
        snapshot.append("10.9.9.9")
        assert store.snapshot_sorted() == [SELF]

    def test_non_string_not_contained(self) -> None:
        assert 42 not in MembershipStore(SELF)

    def test_repr_lists_members(self) -> None:
        assert repr(MembershipStore(SELF)) == "MembershipStore(['10.0.0.1'])"


addresses = st.lists(
    st.from_regex(r"10\.0\.[0-9]{1,3}\.[0-9]{1,3}", fullmatch=True), max_size=30
)


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.property
@pytest.mark.tra("UseCase.MembershipStore")
class TestMembershipStoreProperties:
    """Property-based tests for MembershipStore."""

    @given(added=addresses, removed=addresses)
    def test_snapshot_sorted_unique_and_contains_self(
        self, added: list[str], removed: list[str]
    ) -> None:
        store = MembershipStore(SELF)
        for address in added:
            store.add(address)
        for address in removed:
            store.remove(address)

        snapshot = store.snapshot_sorted()
        assert snapshot == sorted(set(snapshot))
        assert SELF in snapshot
        expected = ({SELF} | set(added)) - (set(removed) - {SELF})
        assert set(snapshot) == expected


@pytest.mark.unit
@pytest.mark.tier(2)
@pytest.mark.concurrency
@pytest.mark.no_parallel
@pytest.mark.tra("UseCase.MembershipStore")
class TestMembershipStoreConcurrency:
    """Readers see consistent snapshots while a writer mutates the store."""

    def test_concurrent_readers_during_writes(self) -> None:
        store = MembershipStore(SELF)
        errors: list[Exception] = []
        done = threading.Event()

        def writer() -> None:
            for i in range(2000):
                address = f"10.1.{i % 50}.1"
                if i % 2:
                    store.remove(address)
                else:
                    store.add(address)
            done.set()

        def reader() -> None:
            try:
                while not done.is_set():
                    snapshot = store.snapshot_sorted()
                    assert SELF in snapshot
                    assert len(snapshot) == len(set(snapshot))
            except Exception as exc:
                errors.append(exc)

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for thread in readers:
            thread.start()
        writer()
        for thread in readers:
            thread.join(timeout=5)

        assert errors == []
        assert SELF in store
