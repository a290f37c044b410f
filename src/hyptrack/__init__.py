"""
hyptrack - Hypothesis dependency graph and roadmap progression

hyptrack holds the algorithmic core of a business-hypothesis tracker:
hypotheses linked into a directed graph and walked as a forest with cycle
protection, and an ordered roadmap whose per-step validation states and
progress are derived from status and validation counts.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hyptrack")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from hyptrack.graph import GraphNode, HypothesisGraph, TraversalEntry, build_graph, traverse
from hyptrack.models import Hypothesis, HypothesisLink, HypothesisStatus, Validation
from hyptrack.roadmap import (
    ProgressSummary,
    RoadmapPolicy,
    RoadmapState,
    RoadmapStep,
    aggregate_progress,
    compute_roadmap_states,
)

__all__ = [
    "__version__",
    "Hypothesis",
    "HypothesisLink",
    "HypothesisStatus",
    "Validation",
    "GraphNode",
    "HypothesisGraph",
    "TraversalEntry",
    "build_graph",
    "traverse",
    "RoadmapState",
    "RoadmapStep",
    "RoadmapPolicy",
    "compute_roadmap_states",
    "ProgressSummary",
    "aggregate_progress",
]
