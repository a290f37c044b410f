"""
Tests for hyptrack.matrix - impact x uncertainty grid.
"""

from hyptrack.matrix import priority_matrix, rank_by_priority
from tests.core.graph_test_helpers import make_hypothesis


class TestPriorityMatrix:
    """Tests for priority_matrix()."""

    def test_full_grid_when_empty(self):
        grid = priority_matrix([])

        assert len(grid) == 25
        assert all(cell == [] for cell in grid.values())

    def test_row_order_high_impact_first(self):
        keys = list(priority_matrix([]))

        assert keys[0] == (5, 1)
        assert keys[4] == (5, 5)
        assert keys[-1] == (1, 5)

    def test_bucketing_keeps_input_order(self):
        a = make_hypothesis("A", impact=5, uncertainty=4)
        b = make_hypothesis("B", impact=2, uncertainty=1)
        c = make_hypothesis("C", impact=5, uncertainty=4)

        grid = priority_matrix([a, b, c])

        assert [h.id for h in grid[(5, 4)]] == ["A", "C"]
        assert [h.id for h in grid[(2, 1)]] == ["B"]


class TestRankByPriority:
    """Tests for rank_by_priority()."""

    def test_highest_priority_first(self):
        ranked = rank_by_priority(
            [
                make_hypothesis("low", impact=1, uncertainty=2),
                make_hypothesis("top", impact=5, uncertainty=5),
                make_hypothesis("mid", impact=3, uncertainty=3),
            ]
        )

        assert [h.id for h in ranked] == ["top", "mid", "low"]

    def test_ties_broken_by_impact_then_id(self):
        ranked = rank_by_priority(
            [
                make_hypothesis("b", impact=2, uncertainty=4),
                make_hypothesis("c", impact=4, uncertainty=2),
                make_hypothesis("a", impact=2, uncertainty=4),
            ]
        )

        assert [h.id for h in ranked] == ["c", "a", "b"]
