"""Tests for roadmap progress aggregation."""

import random

import pytest

from hyptrack.roadmap import RoadmapState, aggregate_progress, compute_roadmap_states
from hyptrack.roadmap.progress import ProgressSummary, round_percent
from tests.core.graph_test_helpers import make_steps

C = RoadmapState.COMPLETED
P = RoadmapState.IN_PROGRESS
CUR = RoadmapState.CURRENT
L = RoadmapState.LOCKED
S = RoadmapState.SKIPPED


class TestRoundPercent:
    """Tests for round_percent()."""

    @pytest.mark.parametrize(
        "count, total, expected",
        [
            (0, 0, 0),
            (0, 5, 0),
            (1, 3, 33),
            (2, 3, 67),
            (1, 2, 50),
            (1, 8, 13),  # 12.5 rounds half up
            (3, 8, 38),
            (5, 5, 100),
            (199, 200, 99),  # 99.5 would round to 100 but not all are done
            (1, 200, 1),  # 0.5 rounds half up
        ],
    )
    def test_values(self, count, total, expected):
        assert round_percent(count, total) == expected


class TestAggregateProgress:
    """Tests for aggregate_progress()."""

    def test_empty_roadmap(self):
        summary = aggregate_progress([])

        assert isinstance(summary, ProgressSummary)
        assert summary.completed_percent == 0
        assert summary.in_progress_percent == 0
        assert not summary.all_completed
        assert summary.is_empty

    def test_mixed_states(self):
        summary = aggregate_progress([C, P, CUR])

        assert summary.total_steps == 3
        assert summary.completed_count == 1
        assert summary.in_progress_count == 1
        assert summary.completed_percent == 33
        assert summary.in_progress_percent == 33
        assert not summary.all_completed

    def test_all_completed(self):
        summary = aggregate_progress([C, C, C, C])

        assert summary.completed_percent == 100
        assert summary.all_completed

    def test_state_counts_cover_every_state(self):
        summary = aggregate_progress([C, S, L, L])

        assert summary.state_counts == {C: 1, CUR: 0, P: 0, L: 2, S: 1}

    def test_accepts_generator(self):
        summary = aggregate_progress(state for state in [C, L])

        assert summary.total_steps == 2
        assert summary.completed_percent == 50

    def test_end_to_end_status_aware(self):
        steps = make_steps([1, 1, 0], ["confirmed", "verifying", "unverified"])

        summary = aggregate_progress(compute_roadmap_states(steps))

        assert summary.completed_percent == 33
        assert summary.in_progress_percent == 33

    @pytest.mark.parametrize("seed", range(30))
    def test_hundred_percent_iff_all_completed(self, seed):
        rng = random.Random(seed)
        size = rng.randint(1, 400)
        states = [C] * size
        if rng.random() < 0.7:
            states[rng.randrange(size)] = rng.choice([P, CUR, L, S])

        summary = aggregate_progress(states)

        all_done = all(state == C for state in states)
        assert (summary.completed_percent == 100) == all_done
        assert summary.all_completed == all_done
