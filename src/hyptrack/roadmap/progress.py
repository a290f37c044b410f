"""Roadmap progress summary.

Aggregates per-step states into the completion figures shown above a
roadmap, and the all-done flag that triggers the celebration banner.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from hyptrack.roadmap.states import RoadmapState


def round_percent(count: int, total: int) -> int:
    """Percentage of count in total, rounded half up; 0 when total is 0.

    A partial count never rounds up to 100, so 100 always means "all".
    """
    if total <= 0:
        return 0
    percent = (200 * count + total) // (2 * total)
    if count < total:
        return min(percent, 99)
    return percent


@dataclass
class ProgressSummary:
    """Aggregated progress for a roadmap.

    Attributes:
        total_steps: Number of steps on the roadmap.
        completed_count: Steps in COMPLETED state.
        in_progress_count: Steps in IN_PROGRESS state.
        completed_percent: Rounded share of completed steps (0-100).
        in_progress_percent: Rounded share of in-progress steps (0-100).
        state_counts: Count per state, for breakdown displays.
    """

    total_steps: int = 0
    completed_count: int = 0
    in_progress_count: int = 0
    completed_percent: int = 0
    in_progress_percent: int = 0
    state_counts: dict[RoadmapState, int] = field(default_factory=dict)

    @property
    def all_completed(self) -> bool:
        """True if every step is completed and there is at least one."""
        return self.total_steps > 0 and self.completed_count == self.total_steps

    @property
    def is_empty(self) -> bool:
        """True for a roadmap without steps."""
        return self.total_steps == 0


def aggregate_progress(states: Iterable[RoadmapState]) -> ProgressSummary:
    """Summarize per-step states.

    Args:
        states: States as returned by compute_roadmap_states().

    Returns:
        ProgressSummary; all zeros and all_completed False for no states.
    """
    counts = Counter(states)
    total = sum(counts.values())
    completed = counts.get(RoadmapState.COMPLETED, 0)
    in_progress = counts.get(RoadmapState.IN_PROGRESS, 0)
    return ProgressSummary(
        total_steps=total,
        completed_count=completed,
        in_progress_count=in_progress,
        completed_percent=round_percent(completed, total),
        in_progress_percent=round_percent(in_progress, total),
        state_counts={state: counts.get(state, 0) for state in RoadmapState},
    )


__all__ = ["ProgressSummary", "aggregate_progress", "round_percent"]
