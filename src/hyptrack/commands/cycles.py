"""
hyptrack.commands.cycles - Report circular hypothesis links.
"""

from __future__ import annotations

import argparse

from hyptrack.graph import build_graph, detect_cycles
from hyptrack.ingest import load_dataset


def run(args: argparse.Namespace) -> int:
    """Run the cycles command. Returns 1 when cycles exist."""
    dataset = load_dataset(args.data)
    graph = build_graph(dataset.hypotheses, dataset.links)
    info = detect_cycles(graph)

    if not info.has_cycles:
        print("✓ No circular links found")
        return 0

    print(f"Circular links ({len(info.cycle_paths)}):")
    print("-" * 40)
    for path in info.cycle_paths:
        print(f"  {' -> '.join(path)}")
    print()
    print(f"Hypotheses involved: {', '.join(sorted(info.cycle_members))}")
    return 1
