"""Roadmap module - Step states and progress.

Exports:
- RoadmapState: Lifecycle state enum
- RoadmapStep: Hypothesis annotated with position and validation count
- RoadmapPolicy: Named state derivation policies
- compute_roadmap_states: Derive one state per step
- ProgressSummary / aggregate_progress: Completion figures
"""

from hyptrack.roadmap.progress import ProgressSummary, aggregate_progress
from hyptrack.roadmap.states import (
    RoadmapPolicy,
    RoadmapState,
    RoadmapStep,
    compute_roadmap_states,
)

__all__ = [
    "RoadmapState",
    "RoadmapStep",
    "RoadmapPolicy",
    "compute_roadmap_states",
    "ProgressSummary",
    "aggregate_progress",
]
