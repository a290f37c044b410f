"""Record types for hypotheses, links and validations.

This module defines the immutable records the core works on:
- HypothesisStatus: Categorical validation status
- HypothesisPhase: Map/loop/leap phase derived from status
- Hypothesis: One business hypothesis
- HypothesisLink: Directed parent -> child link between hypotheses
- Validation: One validation (verification) record

Records are already cleaned by the ingestion boundary (hyptrack.ingest)
by the time they reach the graph and roadmap modules.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class HypothesisStatus(Enum):
    """Validation status of a hypothesis.

    Status progresses from UNVERIFIED through VERIFYING to one of the
    two concluded values, CONFIRMED or REFUTED.
    """

    UNVERIFIED = "unverified"
    VERIFYING = "verifying"
    CONFIRMED = "confirmed"
    REFUTED = "refuted"

    @property
    def is_concluded(self) -> bool:
        """True if validation reached a definitive outcome."""
        return self in (HypothesisStatus.CONFIRMED, HypothesisStatus.REFUTED)

    @property
    def phase(self) -> HypothesisPhase:
        """Map this status onto the map/loop/leap cycle."""
        return _STATUS_PHASES[self]


class HypothesisPhase(Enum):
    """Where a hypothesis sits in the map -> loop -> leap cycle.

    - MAP: Not yet tested, still on the map
    - LOOP: Being tested, or refuted and back in the loop
    - LEAP: Confirmed, ready to build on
    """

    MAP = "map"
    LOOP = "loop"
    LEAP = "leap"


_STATUS_PHASES = {
    HypothesisStatus.UNVERIFIED: HypothesisPhase.MAP,
    HypothesisStatus.VERIFYING: HypothesisPhase.LOOP,
    HypothesisStatus.CONFIRMED: HypothesisPhase.LEAP,
    HypothesisStatus.REFUTED: HypothesisPhase.LOOP,
}


@dataclass(frozen=True)
class Hypothesis:
    """A single business hypothesis.

    Attributes:
        id: Unique identifier.
        title: Short display title.
        assumption: Free-text premise being tested.
        expected_effect: Free-text outcome expected if the hypothesis holds.
        impact: Business impact, 1-5.
        uncertainty: How uncertain the premise is, 1-5.
        confidence: Team confidence, 1-5.
        type: Categorical hypothesis type (customer, problem, solution...).
        status: Validation status.
        created_at: Creation timestamp, if known.
        roadmap_order: Sort key within the roadmap, if the hypothesis is on it.
        roadmap_tag: Roadmap membership tag (e.g. "roadmap").
    """

    id: str
    title: str = ""
    assumption: str = ""
    expected_effect: str = ""
    impact: int = 3
    uncertainty: int = 3
    confidence: int = 3
    type: str = ""
    status: HypothesisStatus = HypothesisStatus.UNVERIFIED
    created_at: datetime | None = None
    roadmap_order: float | None = None
    roadmap_tag: str | None = None

    @property
    def priority(self) -> int:
        """Priority score: impact x uncertainty (1-25)."""
        return self.impact * self.uncertainty

    @property
    def phase(self) -> HypothesisPhase:
        """Phase derived from status."""
        return self.status.phase

    def __str__(self) -> str:
        return f"{self.id}: {self.title}" if self.title else self.id


@dataclass(frozen=True)
class HypothesisLink:
    """A directed link from a parent hypothesis to a child hypothesis.

    Several links may join the same pair; each is kept as its own edge.
    """

    id: str
    from_id: str
    to_id: str
    label: str | None = None

    def __str__(self) -> str:
        if self.label:
            return f"{self.from_id} --[{self.label}]--> {self.to_id}"
        return f"{self.from_id} --> {self.to_id}"


@dataclass(frozen=True)
class Validation:
    """A validation record against one hypothesis.

    Only the hypothesis reference and the record's presence matter to the
    roadmap; the remaining fields are carried for display.
    """

    id: str
    hypothesis_id: str
    created_at: datetime | None = None
    result: str | None = None


__all__ = [
    "HypothesisStatus",
    "HypothesisPhase",
    "Hypothesis",
    "HypothesisLink",
    "Validation",
]
