"""Relations - Link references and dropped-link records.

This module defines the small value types stored on graph nodes:
- LinkRef: One end of a hypothesis link, as seen from a node
- DanglingLink: A link dropped because an endpoint does not exist
"""

from __future__ import annotations

from dataclasses import dataclass

from hyptrack.models import HypothesisLink


@dataclass(frozen=True)
class LinkRef:
    """Reference to a neighbouring node through a specific link.

    A child entry points at the child id, a parent entry at the parent id.
    Parallel links between the same pair produce separate LinkRefs that
    differ only in link_id (and possibly label).

    Attributes:
        id: ID of the node on the other end of the link.
        link_id: ID of the HypothesisLink this reference came from.
        label: Optional link label.
    """

    id: str
    link_id: str
    label: str | None = None


@dataclass(frozen=True)
class DanglingLink:
    """A link whose endpoint was not among the built nodes.

    Links outlive the hypotheses they point at when a hypothesis is
    deleted, so these are expected and never treated as errors.

    Attributes:
        link: The original link.
        missing_ids: Endpoint IDs that were not found.
    """

    link: HypothesisLink
    missing_ids: tuple[str, ...]

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.link} (missing: {', '.join(self.missing_ids)})"


__all__ = ["LinkRef", "DanglingLink"]
