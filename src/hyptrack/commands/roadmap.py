"""
hyptrack.commands.roadmap - Show roadmap step states and progress.
"""

from __future__ import annotations

import argparse
import json

from hyptrack.config import load_config
from hyptrack.ingest import load_dataset
from hyptrack.roadmap import RoadmapPolicy, RoadmapState, aggregate_progress, compute_roadmap_states
from hyptrack.serialize import roadmap_to_csv, serialize_roadmap

STATE_ICONS = {
    RoadmapState.COMPLETED: "✓",
    RoadmapState.IN_PROGRESS: "⚗",
    RoadmapState.CURRENT: "★",
    RoadmapState.SKIPPED: "→",
    RoadmapState.LOCKED: "·",
}


def run(args: argparse.Namespace) -> int:
    """Run the roadmap command."""
    config = load_config(args.config)
    policy = RoadmapPolicy.from_name(args.policy or config.get("roadmap.policy"))
    tag = args.tag or config.get("roadmap.tag")

    dataset = load_dataset(args.data)
    steps = dataset.roadmap_steps(tag=tag)
    states = compute_roadmap_states(steps, policy)
    summary = aggregate_progress(states)

    if args.format == "json":
        print(json.dumps(serialize_roadmap(steps, states, summary, policy.value), indent=2, ensure_ascii=False))
        return 0
    if args.format == "csv":
        print(roadmap_to_csv(steps, states), end="")
        return 0

    if summary.is_empty:
        print(f"No roadmap: no hypotheses tagged '{tag}'")
        return 0

    print(f"Hypothesis Roadmap ({policy.value})")
    print("=" * 60)
    for step, state in zip(steps, states):
        icon = STATE_ICONS[state]
        print(
            f"{step.position + 1:>3}. {icon} {step.hypothesis}"
            f"  [{state.value}, {step.verification_count} validation(s), priority {step.priority}]"
        )
    print()
    print(f"Completed:   {summary.completed_percent}%")
    if policy is RoadmapPolicy.STATUS_AWARE:
        print(f"In progress: {summary.in_progress_percent}%")
    if summary.all_completed:
        print("All hypotheses on the roadmap are validated.")
    return 0
