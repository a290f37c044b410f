"""Serialization - Export graphs, traversals and roadmaps.

This module provides functions to turn core results into JSON-compatible
dicts for the rendering layer, plus a CSV export of roadmap steps.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from hyptrack.roadmap.progress import ProgressSummary

if TYPE_CHECKING:
    from hyptrack.graph.builder import HypothesisGraph
    from hyptrack.graph.GraphNode import GraphNode
    from hyptrack.graph.relations import LinkRef
    from hyptrack.graph.traversal import TraversalEntry
    from hyptrack.models import Hypothesis
    from hyptrack.roadmap.states import RoadmapState, RoadmapStep


def serialize_hypothesis(hyp: Hypothesis) -> dict[str, Any]:
    """Serialize a Hypothesis to a JSON-compatible dict."""
    return {
        "id": hyp.id,
        "title": hyp.title,
        "assumption": hyp.assumption,
        "expected_effect": hyp.expected_effect,
        "type": hyp.type,
        "status": hyp.status.value,
        "phase": hyp.phase.value,
        "impact": hyp.impact,
        "uncertainty": hyp.uncertainty,
        "confidence": hyp.confidence,
        "priority": hyp.priority,
        "created_at": hyp.created_at.isoformat() if hyp.created_at else None,
    }


def _serialize_ref(ref: LinkRef) -> dict[str, Any]:
    return {"id": ref.id, "link_id": ref.link_id, "label": ref.label}


def serialize_node(node: GraphNode) -> dict[str, Any]:
    """Serialize a GraphNode with its link references."""
    result = serialize_hypothesis(node.hypothesis)
    result["children"] = [_serialize_ref(ref) for ref in node.iter_children()]
    result["parents"] = [_serialize_ref(ref) for ref in node.iter_parents()]
    return result


def serialize_graph(graph: HypothesisGraph) -> dict[str, Any]:
    """Serialize a HypothesisGraph to a JSON-compatible dict.

    Returns:
        Dict with nodes, roots, dangling links and metadata.
    """
    nodes = {node.id: serialize_node(node) for node in graph.all_nodes()}
    dangling = graph.dangling_links()
    return {
        "nodes": nodes,
        "roots": graph.roots,
        "dangling_links": [
            {
                "id": d.link.id,
                "from_id": d.link.from_id,
                "to_id": d.link.to_id,
                "missing": list(d.missing_ids),
            }
            for d in dangling
        ],
        "metadata": {
            "node_count": graph.node_count(),
            "root_count": graph.root_count(),
            "link_count": graph.link_count(),
            "dangling_count": len(dangling),
        },
    }


def serialize_traversal(entries: Iterable[TraversalEntry]) -> list[dict[str, Any]]:
    """Flatten a traversal into rows for tree display."""
    rows = []
    for entry in entries:
        rows.append(
            {
                "id": entry.id,
                "title": entry.node.title,
                "status": entry.node.status.value,
                "depth": entry.depth,
                "cyclic": entry.cyclic,
                "link_id": entry.via.link_id if entry.via else None,
                "label": entry.via.label if entry.via else None,
            }
        )
    return rows


def serialize_progress(summary: ProgressSummary) -> dict[str, Any]:
    """Serialize a ProgressSummary."""
    return {
        "total_steps": summary.total_steps,
        "completed_percent": summary.completed_percent,
        "in_progress_percent": summary.in_progress_percent,
        "all_completed": summary.all_completed,
        "state_counts": {state.value: count for state, count in summary.state_counts.items()},
    }


def serialize_roadmap(
    steps: Sequence[RoadmapStep],
    states: Sequence[RoadmapState],
    summary: ProgressSummary,
    policy: str,
) -> dict[str, Any]:
    """Serialize roadmap steps with their states and the progress summary.

    Raises:
        ValueError: If steps and states differ in length.
    """
    if len(steps) != len(states):
        raise ValueError(f"Got {len(steps)} steps but {len(states)} states")
    return {
        "policy": policy,
        "steps": [
            {
                "position": step.position,
                "id": step.id,
                "title": step.hypothesis.title,
                "status": step.status.value,
                "verification_count": step.verification_count,
                "priority": step.priority,
                "state": state.value,
            }
            for step, state in zip(steps, states)
        ],
        "progress": serialize_progress(summary),
    }


def roadmap_to_csv(steps: Sequence[RoadmapStep], states: Sequence[RoadmapState]) -> str:
    """Generate a CSV export of roadmap steps.

    Returns:
        CSV string with one row per step.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(["position", "id", "title", "status", "verifications", "priority", "state"])
    for step, state in zip(steps, states):
        writer.writerow(
            [
                step.position,
                step.id,
                step.hypothesis.title,
                step.status.value,
                step.verification_count,
                step.priority,
                state.value,
            ]
        )
    return output.getvalue()


__all__ = [
    "serialize_hypothesis",
    "serialize_node",
    "serialize_graph",
    "serialize_traversal",
    "serialize_progress",
    "serialize_roadmap",
    "roadmap_to_csv",
]
