"""Traversal of the hypothesis graph with cycle protection.

The graph is presented as a forest: each root is walked depth-first
(pre-order) through its child links. A node reachable through two
different paths appears once per path. When a path would re-enter one of
its own ancestors, the traversal yields a terminal entry marked cyclic and
does not descend further on that branch; sibling branches carry on.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Mapping

from hyptrack.graph.cycles import CycleGuard
from hyptrack.graph.GraphNode import GraphNode
from hyptrack.graph.relations import LinkRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraversalEntry:
    """One step of a traversal.

    Attributes:
        node: The node reached.
        depth: Distance from the traversal root (0 for the root).
        cyclic: True if this entry re-enters an ancestor. Cyclic entries
            are leaves: their children are not visited.
        via: The child link used to reach this node (None for the root).
        path: Ancestor IDs leading to this node, root first.
    """

    node: GraphNode
    depth: int
    cyclic: bool = False
    via: LinkRef | None = None
    path: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def cycle_path(self) -> tuple[str, ...]:
        """The closed loop for a cyclic entry, empty otherwise."""
        if not self.cyclic:
            return ()
        return CycleGuard(self.path).cycle_path(self.node.id)


def traverse(graph: Mapping[str, GraphNode], root_id: str) -> Iterator[TraversalEntry]:
    """Walk the graph depth-first from root_id.

    Entries are produced lazily in pre-order with children in link order.
    Each call starts a fresh walk; the generator terminates on any input,
    including graphs with cycles and self-links.

    Args:
        graph: HypothesisGraph or any mapping of ID to GraphNode.
        root_id: ID to start from. It does not have to be a root; any node
            can be used as an entry point.

    Yields:
        TraversalEntry for every node on every path from root_id.

    Raises:
        KeyError: If root_id is not in the graph.
    """
    if root_id not in graph:
        raise KeyError(root_id)
    return _traverse(graph, root_id)


def _traverse(graph: Mapping[str, GraphNode], root_id: str) -> Iterator[TraversalEntry]:
    # Each frame carries its own guard; guards are never shared mutably
    stack: list[tuple[str, LinkRef | None, CycleGuard]] = [(root_id, None, CycleGuard())]

    while stack:
        node_id, via, guard = stack.pop()
        node = graph[node_id]

        if guard.would_cycle(node_id):
            logger.debug("Cycle at %s via path %s", node_id, " -> ".join(guard.path))
            yield TraversalEntry(node=node, depth=guard.depth, cyclic=True, via=via, path=guard.path)
            continue

        yield TraversalEntry(node=node, depth=guard.depth, via=via, path=guard.path)

        child_guard = guard.descend(node_id)
        for ref in reversed(node.children):
            if ref.id in graph:
                stack.append((ref.id, ref, child_guard))


def entry_points(graph: Mapping[str, GraphNode]) -> list[str]:
    """Choose start IDs that together reach every node.

    Roots come first, in input order. Nodes not reachable from any root
    (possible only inside cycles with no outside parent) get the first
    such node in input order as an extra entry point, repeated until every
    node is covered.

    Args:
        graph: HypothesisGraph or any mapping of ID to GraphNode.

    Returns:
        List of node IDs to pass to traverse().
    """
    starts = [node_id for node_id in graph if graph[node_id].is_root]
    reached: set[str] = set()
    for start in starts:
        _mark_reachable(graph, start, reached)

    for node_id in graph:
        if node_id not in reached:
            starts.append(node_id)
            _mark_reachable(graph, node_id, reached)

    return starts


def walk_forest(graph: Mapping[str, GraphNode]) -> Iterator[tuple[str, TraversalEntry]]:
    """Traverse from every entry point in turn.

    Yields:
        (entry_point_id, entry) pairs.
    """
    for start in entry_points(graph):
        for entry in traverse(graph, start):
            yield start, entry


def _mark_reachable(graph: Mapping[str, GraphNode], start: str, reached: set[str]) -> None:
    """Breadth-first reachability, visiting each node once."""
    queue: deque[str] = deque([start])
    reached.add(start)
    while queue:
        node_id = queue.popleft()
        for ref in graph[node_id].iter_children():
            if ref.id in graph and ref.id not in reached:
                reached.add(ref.id)
                queue.append(ref.id)


__all__ = ["TraversalEntry", "traverse", "entry_points", "walk_forest"]
