"""
hyptrack.commands.tree - Show the hypothesis link forest.
"""

from __future__ import annotations

import argparse
import json
import sys

from hyptrack.graph import build_graph, entry_points, traverse
from hyptrack.ingest import load_dataset
from hyptrack.serialize import serialize_traversal

STATUS_ICONS = {
    "unverified": "?",
    "verifying": "~",
    "confirmed": "✓",
    "refuted": "✗",
}


def run(args: argparse.Namespace) -> int:
    """Run the tree command."""
    dataset = load_dataset(args.data)
    graph = build_graph(dataset.hypotheses, dataset.links)

    if args.root:
        if args.root not in graph:
            print(f"Error: Unknown hypothesis: {args.root}", file=sys.stderr)
            return 1
        starts = [args.root]
    else:
        starts = entry_points(graph)

    if args.json:
        forest = [
            {"root": start, "entries": serialize_traversal(traverse(graph, start))}
            for start in starts
        ]
        print(json.dumps(forest, indent=2, ensure_ascii=False))
        return 0

    if not starts:
        print("No hypotheses found")
        return 0

    for start in starts:
        if not args.root and not graph[start].is_root:
            print(f"(no root; entering cycle at {start})")
        for entry in traverse(graph, start):
            prefix = "  " * entry.depth
            label = f" [{entry.via.label}]" if entry.via and entry.via.label else ""
            if entry.cyclic:
                print(f"{prefix}↻ {entry.id}{label} (cycle: {' -> '.join(entry.cycle_path)})")
                continue
            icon = STATUS_ICONS.get(entry.node.status.value, "?")
            print(f"{prefix}{icon} {entry.node.hypothesis}{label}")
        print()

    dangling = graph.dangling_links()
    if dangling and args.verbose:
        print(f"Ignored {len(dangling)} link(s) to missing hypotheses:")
        for d in dangling:
            print(f"  {d}")

    return 0
