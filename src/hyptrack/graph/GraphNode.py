"""GraphNode - Node representation for the hypothesis graph.

A GraphNode wraps one Hypothesis and records its neighbours by ID.
Nodes do not hold references to other nodes; all lookups go through
the graph's flat node map, so traversal state never lives on the nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from hyptrack.graph.relations import LinkRef
from hyptrack.models import Hypothesis, HypothesisStatus


@dataclass
class GraphNode:
    """A node in the hypothesis graph.

    Attributes:
        hypothesis: The wrapped hypothesis record.
    """

    hypothesis: Hypothesis

    # Internal storage (prefixed)
    _children: list[LinkRef] = field(default_factory=list)
    _parents: list[LinkRef] = field(default_factory=list, repr=False)

    @property
    def id(self) -> str:
        """ID of the wrapped hypothesis."""
        return self.hypothesis.id

    @property
    def title(self) -> str:
        return self.hypothesis.title

    @property
    def status(self) -> HypothesisStatus:
        return self.hypothesis.status

    @property
    def children(self) -> list[LinkRef]:
        """Child entries in link order (copy)."""
        return list(self._children)

    @property
    def parents(self) -> list[LinkRef]:
        """Parent entries in link order (copy)."""
        return list(self._parents)

    # Iterator access
    def iter_children(self) -> Iterator[LinkRef]:
        """Iterate over child entries."""
        yield from self._children

    def iter_parents(self) -> Iterator[LinkRef]:
        """Iterate over parent entries."""
        yield from self._parents

    def child_ids(self) -> list[str]:
        """Child IDs in link order, repeated for parallel links."""
        return [ref.id for ref in self._children]

    def parent_ids(self) -> list[str]:
        """Parent IDs in link order, repeated for parallel links."""
        return [ref.id for ref in self._parents]

    # Count and membership checks (avoid materializing lists)
    def child_count(self) -> int:
        """Return number of child entries."""
        return len(self._children)

    def parent_count(self) -> int:
        """Return number of parent entries."""
        return len(self._parents)

    def has_child(self, node_id: str) -> bool:
        """Check if node_id is linked as a child."""
        return any(ref.id == node_id for ref in self._children)

    def has_parent(self, node_id: str) -> bool:
        """Check if node_id is linked as a parent."""
        return any(ref.id == node_id for ref in self._parents)

    @property
    def is_root(self) -> bool:
        """True if this node has no parents."""
        return len(self._parents) == 0

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return len(self._children) == 0

    @property
    def is_self_linked(self) -> bool:
        """True if any link points from this node to itself."""
        return self.has_child(self.id)

    def add_child(self, ref: LinkRef) -> None:
        """Append a child entry. Only the builder should call this."""
        self._children.append(ref)

    def add_parent(self, ref: LinkRef) -> None:
        """Append a parent entry. Only the builder should call this."""
        self._parents.append(ref)


__all__ = ["GraphNode"]
