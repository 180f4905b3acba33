"""Tests for the transposition table."""

from minimate.engine.transposition import Bound, TranspositionTable, TTEntry


class TestTTEntry:
    def test_exact_entry_serves_shallower_queries(self) -> None:
        entry = TTEntry(score=50, depth=3)
        assert entry.usable(3, -100, 100)
        assert entry.usable(1, -100, 100)
        assert not entry.usable(4, -100, 100)

    def test_lower_bound_only_on_fail_high(self) -> None:
        entry = TTEntry(score=120, depth=2, bound=Bound.LOWER)
        assert entry.usable(2, 0, 100)
        assert not entry.usable(2, 0, 200)

    def test_upper_bound_only_on_fail_low(self) -> None:
        entry = TTEntry(score=-30, depth=2, bound=Bound.UPPER)
        assert entry.usable(2, 0, 100)
        assert not entry.usable(2, -50, 100)


class TestTranspositionTable:
    def test_get_missing(self) -> None:
        assert TranspositionTable().get("nope") is None

    def test_put_and_get(self) -> None:
        table = TranspositionTable()
        table.put("k", 10, 2)
        assert table.get("k") == TTEntry(score=10, depth=2, bound=Bound.EXACT)
        assert "k" in table
        assert len(table) == 1

    def test_deeper_entry_is_kept(self) -> None:
        table = TranspositionTable()
        table.put("k", 10, 3)
        table.put("k", 99, 1)
        assert table.get("k") == TTEntry(score=10, depth=3)

    def test_deeper_store_overwrites(self) -> None:
        table = TranspositionTable()
        table.put("k", 10, 1)
        table.put("k", 99, 3)
        assert table.get("k") == TTEntry(score=99, depth=3)

    def test_exact_beats_bound_at_same_depth(self) -> None:
        table = TranspositionTable()
        table.put("k", 10, 2, Bound.EXACT)
        table.put("k", 40, 2, Bound.LOWER)
        assert table.get("k").bound == Bound.EXACT
        table.put("k", 12, 2, Bound.EXACT)
        assert table.get("k").score == 12

    def test_clear(self) -> None:
        table = TranspositionTable()
        table.put("a", 1, 1)
        table.clear()
        assert len(table) == 0

    def test_overflow_starts_over(self) -> None:
        table = TranspositionTable(max_entries=2)
        table.put("a", 1, 1)
        table.put("b", 2, 1)
        table.put("c", 3, 1)
        assert len(table) == 1
        assert table.get("c") is not None
        assert table.get("a") is None
