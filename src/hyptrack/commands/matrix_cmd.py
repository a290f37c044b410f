"""
hyptrack.commands.matrix_cmd - Impact x uncertainty grid.
"""

from __future__ import annotations

import argparse

from hyptrack.ingest import SCORE_MAX, SCORE_MIN, load_dataset
from hyptrack.matrix import priority_matrix, rank_by_priority


def run(args: argparse.Namespace) -> int:
    """Run the matrix command."""
    dataset = load_dataset(args.data)
    grid = priority_matrix(dataset.hypotheses)

    header = "".join(f"{u:>5}" for u in range(SCORE_MIN, SCORE_MAX + 1))
    print(f"impact \\ uncertainty{header}")
    for impact in range(SCORE_MAX, SCORE_MIN - 1, -1):
        row = "".join(
            f"{len(grid[(impact, u)]):>5}" for u in range(SCORE_MIN, SCORE_MAX + 1)
        )
        print(f"{impact:>20}{row}")

    if args.top:
        print()
        print(f"Top {args.top} by priority:")
        for hyp in rank_by_priority(dataset.hypotheses)[: args.top]:
            print(f"  {hyp.priority:>2}  {hyp}")
    return 0
