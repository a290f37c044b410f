"""Graph Builder - Constructs HypothesisGraph from hypotheses and links.

This module provides the builder pattern for turning a flat list of
hypotheses and a flat list of directed links into an adjacency
structure with identified roots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from hyptrack.graph.GraphNode import GraphNode
from hyptrack.graph.relations import DanglingLink, LinkRef
from hyptrack.models import Hypothesis, HypothesisLink

logger = logging.getLogger(__name__)


@dataclass
class HypothesisGraph:
    """Container for a built hypothesis graph.

    Provides indexed access to all nodes. The graph is a forest of DAGs
    in the common case but may contain cycles; use
    hyptrack.graph.traversal.traverse() to walk it safely.
    """

    # Internal storage (prefixed) - excluded from constructor
    _index: dict[str, GraphNode] = field(default_factory=dict, init=False, repr=False)
    _roots: list[str] = field(default_factory=list, init=False)
    _dangling_links: list[DanglingLink] = field(default_factory=list, init=False, repr=False)

    @property
    def node_map(self) -> dict[str, GraphNode]:
        """Mapping of node ID to GraphNode (copy of the index)."""
        return dict(self._index)

    @property
    def roots(self) -> list[str]:
        """IDs of nodes without parents, in input order."""
        return list(self._roots)

    def iter_roots(self) -> Iterator[GraphNode]:
        """Iterate root nodes."""
        for root_id in self._roots:
            yield self._index[root_id]

    def root_count(self) -> int:
        """Return number of root nodes."""
        return len(self._roots)

    def has_root(self, node_id: str) -> bool:
        """Check if a node ID is a root."""
        return node_id in self._roots

    def find_by_id(self, node_id: str) -> GraphNode | None:
        """Find node by ID.

        Args:
            node_id: The node ID to find.

        Returns:
            The matching GraphNode, or None if not found.
        """
        return self._index.get(node_id)

    def __getitem__(self, node_id: str) -> GraphNode:
        return self._index[node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __iter__(self) -> Iterator[str]:
        """Iterate node IDs in input order."""
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def all_nodes(self) -> Iterator[GraphNode]:
        """Iterate all nodes in input order."""
        yield from self._index.values()

    def node_count(self) -> int:
        """Return total number of nodes in the graph."""
        return len(self._index)

    def link_count(self) -> int:
        """Return number of resolved links (parallel links counted separately)."""
        return sum(node.child_count() for node in self._index.values())

    def dangling_links(self) -> list[DanglingLink]:
        """Get links dropped during build because an endpoint was missing."""
        return list(self._dangling_links)

    def has_dangling_links(self) -> bool:
        """Check if any links were dropped during build."""
        return len(self._dangling_links) > 0


class GraphBuilder:
    """Builder for constructing HypothesisGraph from records.

    Usage:
        builder = GraphBuilder()
        builder.add_hypotheses(hypotheses)
        builder.add_links(links)
        graph = builder.build()

    Links are queued and resolved in build(), so hypotheses and links can
    be added in any order.
    """

    def __init__(self) -> None:
        """Initialize an empty builder."""
        self._hypotheses: dict[str, Hypothesis] = {}
        self._pending_links: list[HypothesisLink] = []

    def add_hypothesis(self, hypothesis: Hypothesis) -> None:
        """Add a hypothesis node.

        A repeated ID replaces the earlier record but keeps its position.

        Args:
            hypothesis: The hypothesis to add.
        """
        if hypothesis.id in self._hypotheses:
            logger.warning("Duplicate hypothesis id %s, keeping the last record", hypothesis.id)
        self._hypotheses[hypothesis.id] = hypothesis

    def add_hypotheses(self, hypotheses: Iterable[Hypothesis]) -> None:
        """Add several hypothesis nodes."""
        for hypothesis in hypotheses:
            self.add_hypothesis(hypothesis)

    def add_link(self, link: HypothesisLink) -> None:
        """Queue a link for resolution at build time."""
        self._pending_links.append(link)

    def add_links(self, links: Iterable[HypothesisLink]) -> None:
        """Queue several links."""
        self._pending_links.extend(links)

    def build(self) -> HypothesisGraph:
        """Build the final HypothesisGraph.

        Creates one node per hypothesis, resolves all pending links and
        identifies root nodes. Links with an unknown endpoint are recorded
        as dangling and otherwise ignored.

        Returns:
            Complete HypothesisGraph.
        """
        nodes = {hyp_id: GraphNode(hypothesis=hyp) for hyp_id, hyp in self._hypotheses.items()}
        dangling: list[DanglingLink] = []

        for link in self._pending_links:
            parent = nodes.get(link.from_id)
            child = nodes.get(link.to_id)

            if parent and child:
                parent.add_child(LinkRef(id=link.to_id, link_id=link.id, label=link.label))
                child.add_parent(LinkRef(id=link.from_id, link_id=link.id, label=link.label))
            else:
                missing = tuple(
                    node_id for node_id in (link.from_id, link.to_id) if node_id not in nodes
                )
                dangling.append(DanglingLink(link=link, missing_ids=missing))
                logger.debug("Dropping link %s: unknown endpoint(s) %s", link.id, missing)

        # Roots are decided only after every link is in place
        roots = [node.id for node in nodes.values() if node.is_root]

        graph = HypothesisGraph()
        graph._index = nodes
        graph._roots = roots
        graph._dangling_links = dangling
        logger.debug(
            "Built hypothesis graph: %d nodes, %d roots, %d dangling links",
            len(nodes),
            len(roots),
            len(dangling),
        )
        return graph


def build_graph(
    nodes: Iterable[Hypothesis],
    links: Iterable[HypothesisLink],
) -> HypothesisGraph:
    """Build a HypothesisGraph in one call.

    Args:
        nodes: Hypotheses to place in the graph.
        links: Directed parent -> child links between them.

    Returns:
        The built graph; see HypothesisGraph.node_map and .roots.
    """
    builder = GraphBuilder()
    builder.add_hypotheses(nodes)
    builder.add_links(links)
    return builder.build()


__all__ = ["HypothesisGraph", "GraphBuilder", "build_graph"]
