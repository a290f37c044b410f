"""Cycle handling for hypothesis graphs.

Centralized cycle utilities:
- CycleGuard: per-path revisit check used during traversal
- CycleInfo / detect_cycles: whole-graph cycle report for diagnostics

Traversal does not need detect_cycles(); the guard alone guarantees
termination. detect_cycles() exists for reporting which hypotheses are
caught in loops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from hyptrack.graph.GraphNode import GraphNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleGuard:
    """Ancestor path of one traversal branch.

    The guard is immutable: descend() returns a new guard, so sibling
    branches each extend their own copy of the path and backtracking
    needs no cleanup.

    Attributes:
        path: Ancestor IDs from the traversal root down to the current
            branch point, root first.
    """

    path: tuple[str, ...] = ()

    @property
    def depth(self) -> int:
        """Depth of a node entered under this guard (0 at the root)."""
        return len(self.path)

    def would_cycle(self, node_id: str) -> bool:
        """True if entering node_id would revisit an ancestor on this path."""
        return node_id in self.path

    def descend(self, node_id: str) -> CycleGuard:
        """Return the guard for the children of node_id."""
        return CycleGuard(path=self.path + (node_id,))

    def cycle_path(self, node_id: str) -> tuple[str, ...]:
        """Return the loop closed by re-entering node_id.

        Args:
            node_id: An ID already on the path.

        Returns:
            IDs from the earlier occurrence of node_id through the end of
            the path, closed by node_id again (e.g. ("A", "B", "A")).

        Raises:
            ValueError: If node_id is not on the path.
        """
        start = self.path.index(node_id)
        return self.path[start:] + (node_id,)


@dataclass
class CycleInfo:
    """Pure data structure for cycle detection results."""

    cycle_members: set[str] = field(default_factory=set)
    cycle_paths: list[list[str]] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycle_paths)


def detect_cycles(graph: Mapping[str, GraphNode]) -> CycleInfo:
    """Detect circular links. PURE - no mutation.

    cycle_members holds every node that can reach itself through child
    links: members of a strongly connected component with more than one
    node, plus self-linked nodes. cycle_paths lists example loops, one per
    back edge met by a depth-first search; parallel links closing the same
    loop are reported once. Not every member has to appear in a path.

    Args:
        graph: HypothesisGraph or any mapping of ID to GraphNode.

    Returns:
        CycleInfo with cycle_members and cycle_paths.
    """
    visited: set[str] = set()
    cycle_members: set[str] = set()
    cycle_paths: list[list[str]] = []
    seen_paths: set[tuple[str, ...]] = set()

    for start_id in graph:
        if start_id in visited:
            continue

        visited.add(start_id)
        path: list[str] = [start_id]
        on_path: set[str] = {start_id}
        stack: list[tuple[str, Iterator[str]]] = [(start_id, _child_ids(graph, start_id))]

        while stack:
            node_id, children = stack[-1]
            for child_id in children:
                if child_id in on_path:
                    cycle = path[path.index(child_id) :] + [child_id]
                    key = tuple(cycle)
                    if key not in seen_paths:
                        seen_paths.add(key)
                        cycle_paths.append(cycle)
                        logger.debug("Cycle detected: %s", " -> ".join(cycle))
                elif child_id not in visited:
                    visited.add(child_id)
                    path.append(child_id)
                    on_path.add(child_id)
                    stack.append((child_id, _child_ids(graph, child_id)))
                    break
            else:
                stack.pop()
                path.pop()
                on_path.discard(node_id)

    for component in _strongly_connected(graph):
        if len(component) > 1 or graph[component[0]].is_self_linked:
            cycle_members.update(component)

    return CycleInfo(cycle_members=cycle_members, cycle_paths=cycle_paths)


def _strongly_connected(graph: Mapping[str, GraphNode]) -> list[list[str]]:
    """Tarjan's strongly connected components over child links.

    Runs on an explicit work stack so deep graphs do not hit the
    recursion limit. Components come out in reverse topological order.
    """
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    on_stack: set[str] = set()
    component_stack: list[str] = []
    components: list[list[str]] = []

    def enter(node_id: str) -> None:
        index[node_id] = lowlink[node_id] = len(index)
        component_stack.append(node_id)
        on_stack.add(node_id)

    for start_id in graph:
        if start_id in index:
            continue

        enter(start_id)
        work: list[tuple[str, Iterator[str]]] = [(start_id, _child_ids(graph, start_id))]

        while work:
            node_id, children = work[-1]
            for child_id in children:
                if child_id not in index:
                    enter(child_id)
                    work.append((child_id, _child_ids(graph, child_id)))
                    break
                if child_id in on_stack:
                    lowlink[node_id] = min(lowlink[node_id], index[child_id])
            else:
                work.pop()
                if work:
                    parent_id = work[-1][0]
                    lowlink[parent_id] = min(lowlink[parent_id], lowlink[node_id])
                if lowlink[node_id] == index[node_id]:
                    component: list[str] = []
                    while True:
                        member = component_stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node_id:
                            break
                    components.append(component)

    return components


def _child_ids(graph: Mapping[str, GraphNode], node_id: str) -> Iterator[str]:
    """Iterate child IDs that exist in the graph."""
    for ref in graph[node_id].iter_children():
        if ref.id in graph:
            yield ref.id


__all__ = ["CycleGuard", "CycleInfo", "detect_cycles"]
