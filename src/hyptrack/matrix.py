"""Impact x uncertainty priority matrix.

Hypotheses with high impact and high uncertainty are the ones worth
testing first. This module buckets hypotheses into the 5x5 grid used by
the map view and ranks them by priority score.
"""

from __future__ import annotations

from typing import Iterable

from hyptrack.ingest import SCORE_MAX, SCORE_MIN
from hyptrack.models import Hypothesis

Cell = tuple[int, int]


def priority_matrix(hypotheses: Iterable[Hypothesis]) -> dict[Cell, list[Hypothesis]]:
    """Bucket hypotheses by (impact, uncertainty).

    Every cell of the grid is present, empty cells included, so callers
    can render the full grid without key checks.

    Args:
        hypotheses: Hypotheses with scores already clamped to 1-5.

    Returns:
        Mapping of (impact, uncertainty) to hypotheses in input order.
    """
    grid: dict[Cell, list[Hypothesis]] = {
        (impact, uncertainty): []
        for impact in range(SCORE_MAX, SCORE_MIN - 1, -1)
        for uncertainty in range(SCORE_MIN, SCORE_MAX + 1)
    }
    for hyp in hypotheses:
        grid[(hyp.impact, hyp.uncertainty)].append(hyp)
    return grid


def rank_by_priority(hypotheses: Iterable[Hypothesis]) -> list[Hypothesis]:
    """Sort by priority (highest first), then impact, then id."""
    return sorted(hypotheses, key=lambda h: (-h.priority, -h.impact, h.id))


__all__ = ["Cell", "priority_matrix", "rank_by_priority"]
