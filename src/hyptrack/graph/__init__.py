"""Graph module - Hypothesis dependency graph.

Exports:
- GraphNode: Node wrapping one hypothesis with parent/child link refs
- LinkRef: Neighbour reference through a specific link
- DanglingLink: Link dropped because an endpoint is missing
- HypothesisGraph: Built graph with node map and roots
- GraphBuilder / build_graph: Construction from flat records
- CycleGuard / CycleInfo / detect_cycles: Cycle handling
- TraversalEntry / traverse / entry_points / walk_forest: Safe traversal
"""

from hyptrack.graph.builder import GraphBuilder, HypothesisGraph, build_graph
from hyptrack.graph.cycles import CycleGuard, CycleInfo, detect_cycles
from hyptrack.graph.GraphNode import GraphNode
from hyptrack.graph.relations import DanglingLink, LinkRef
from hyptrack.graph.traversal import TraversalEntry, entry_points, traverse, walk_forest

__all__ = [
    "GraphNode",
    "LinkRef",
    "DanglingLink",
    "HypothesisGraph",
    "GraphBuilder",
    "build_graph",
    "CycleGuard",
    "CycleInfo",
    "detect_cycles",
    "TraversalEntry",
    "traverse",
    "entry_points",
    "walk_forest",
]
