import pytest

from soksol_core.moves import START, Action
from solver.frontier import FrontierEntry, FrontierStore, SearchMemoryError
from solver.visited import VisitedSet, state_hash


def _entry(board=b"\x12\x04", player=b"\x00\x01", prev=0, action=START):
    return FrontierEntry(board, player, prev, action)


def test_frontier_is_fifo():
    f = FrontierStore()
    assert f.is_empty()
    assert f.append(_entry(player=b"\x00\x00")) == 0
    assert f.append(_entry(player=b"\x00\x01")) == 1
    idx, e = f.dequeue()
    assert idx == 0 and e.player == b"\x00\x00"
    assert f.pending() == 1
    f.append(_entry(player=b"\x00\x02"))
    assert [f.dequeue()[0], f.dequeue()[0]] == [1, 2]
    assert f.is_empty() and f.cursor == 3
    # expanded entries stay addressable for backpointer walks
    assert f[0].player == b"\x00\x00"
    assert len(f) == 3


def test_dequeue_exhausted():
    f = FrontierStore()
    with pytest.raises(IndexError):
        f.dequeue()


def test_release_drops_everything():
    f = FrontierStore()
    f.append(_entry())
    f.release()
    assert len(f) == 0 and f.is_empty()


def test_duplicate_rejected():
    f = FrontierStore()
    v = VisitedSet(f)
    assert v.insert_if_absent(_entry()) is True
    # same key, different predecessor and action: still a duplicate
    assert v.insert_if_absent(_entry(prev=5, action=Action("up"))) is False
    assert len(f) == 1
    assert len(v) == 1


def test_distinct_keys_both_inserted():
    f = FrontierStore()
    v = VisitedSet(f)
    assert v.insert_if_absent(_entry(player=b"\x00\x01"))
    assert v.insert_if_absent(_entry(player=b"\x01\x00"))
    assert v.insert_if_absent(_entry(board=b"\x12\x00"))
    assert len(f) == 3
    assert (b"\x01\x00", b"\x12\x04") in v
    assert (b"\x01\x01", b"\x12\x04") not in v


def test_collisions_in_single_bucket():
    f = FrontierStore()
    v = VisitedSet(f, bucket_count=1)
    keys = [bytes([i, j]) for i in range(4) for j in range(4)]
    for k in keys:
        assert v.insert_if_absent(_entry(player=k))
    for k in keys:
        assert not v.insert_if_absent(_entry(player=k))
    assert len(f) == len(keys)


def test_hash_in_range():
    for n in (1, 7, 313507):
        assert 0 <= state_hash(b"\x03\x09", b"\xff" * 40, n) < n


def test_bucket_count_positive():
    with pytest.raises(ValueError):
        VisitedSet(FrontierStore(), bucket_count=0)


class _CappedList(list):
    """List whose append fails once it holds `cap` items."""

    def __init__(self, items=(), cap=0):
        super().__init__(items)
        self.cap = cap

    def append(self, item):
        if len(self) >= self.cap:
            raise MemoryError
        super().append(item)


def test_frontier_out_of_memory():
    f = FrontierStore()
    f.append(_entry(player=b"\x00\x00"))
    f._entries = _CappedList(f._entries, cap=1)
    with pytest.raises(SearchMemoryError, match="frontier store exhausted memory at 1 states") as ei:
        f.append(_entry(player=b"\x00\x01"))
    assert isinstance(ei.value, MemoryError)
    assert isinstance(ei.value.__cause__, MemoryError)


def test_visited_chain_out_of_memory():
    f = FrontierStore()
    v = VisitedSet(f, bucket_count=1)
    assert v.insert_if_absent(_entry(player=b"\x00\x00"))
    v._buckets[0] = _CappedList(v._buckets[0], cap=1)
    with pytest.raises(SearchMemoryError, match="visited set exhausted memory at 1 states"):
        v.insert_if_absent(_entry(player=b"\x00\x01"))
    assert len(v) == 1
