"""Roadmap state derivation.

A roadmap is an ordered list of hypotheses to validate one after another.
Each step's lifecycle state is derived on every call from its position,
its validation count and (for the status-aware policy) its status:

- LOCKED: Not reached yet
- CURRENT: The step to work on next
- IN_PROGRESS: Validation recorded but not concluded
- COMPLETED: Validation done
- SKIPPED: Passed over without any validation

Two policies exist and disagree on steps that have validations but no
concluded status, so callers choose one explicitly:

- SIMPLE: Any validation completes a step. The current pointer follows
  the unbroken run of validated steps from the start of the roadmap.
- STATUS_AWARE: Completion also needs a confirmed/refuted status;
  validated but inconclusive steps are in progress. The current pointer
  sits after the last step with any validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from hyptrack.exceptions import ConfigError
from hyptrack.models import Hypothesis, HypothesisStatus


class RoadmapState(Enum):
    """Lifecycle state of one roadmap step."""

    LOCKED = "locked"
    CURRENT = "current"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RoadmapStep:
    """A roadmap hypothesis annotated for state derivation.

    Attributes:
        hypothesis: The hypothesis on the roadmap.
        position: 0-based index in roadmap order.
        verification_count: Number of validation records for it.
    """

    hypothesis: Hypothesis
    position: int
    verification_count: int = 0

    @property
    def id(self) -> str:
        return self.hypothesis.id

    @property
    def status(self) -> HypothesisStatus:
        return self.hypothesis.status

    @property
    def priority(self) -> int:
        """impact x uncertainty."""
        return self.hypothesis.priority

    @property
    def is_verified(self) -> bool:
        """True if at least one validation was recorded."""
        return self.verification_count > 0


def _clamp_index(index: int, length: int) -> int:
    return min(index, length - 1)


def simple_current_index(steps: Sequence[RoadmapStep]) -> int:
    """Index just past the leading run of validated steps, clamped.

    Returns 0 when the first step has no validation, including when a
    later step does.
    """
    run = 0
    for step in steps:
        if not step.is_verified:
            break
        run += 1
    return _clamp_index(run, len(steps))


def status_aware_current_index(steps: Sequence[RoadmapStep]) -> int:
    """Index just past the last validated step, clamped; 0 if none."""
    last_active = -1
    for index, step in enumerate(steps):
        if step.is_verified:
            last_active = index
    if last_active == -1:
        return 0
    return _clamp_index(last_active + 1, len(steps))


def _positional_state(index: int, current: int) -> RoadmapState:
    """State of a step without validations, from its place relative to current."""
    if index == current:
        return RoadmapState.CURRENT
    if index < current:
        return RoadmapState.SKIPPED
    return RoadmapState.LOCKED


def simple_states(steps: Sequence[RoadmapStep]) -> list[RoadmapState]:
    """Derive states ignoring categorical status."""
    if not steps:
        return []
    current = simple_current_index(steps)
    return [
        RoadmapState.COMPLETED if step.is_verified else _positional_state(index, current)
        for index, step in enumerate(steps)
    ]


def status_aware_states(steps: Sequence[RoadmapStep]) -> list[RoadmapState]:
    """Derive states distinguishing concluded from inconclusive validation."""
    if not steps:
        return []
    current = status_aware_current_index(steps)
    states: list[RoadmapState] = []
    for index, step in enumerate(steps):
        if step.is_verified and step.status.is_concluded:
            states.append(RoadmapState.COMPLETED)
        elif step.is_verified:
            states.append(RoadmapState.IN_PROGRESS)
        else:
            states.append(_positional_state(index, current))
    return states


class RoadmapPolicy(Enum):
    """Named state derivation policies."""

    SIMPLE = "simple"
    STATUS_AWARE = "status-aware"

    @classmethod
    def from_name(cls, name: str | RoadmapPolicy) -> RoadmapPolicy:
        """Look up a policy by value, accepting '_' for '-' and any case.

        Raises:
            ConfigError: If the name matches no policy.
        """
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower().replace("_", "-")
        for policy in cls:
            if policy.value == normalized:
                return policy
        choices = ", ".join(p.value for p in cls)
        raise ConfigError(f"Unknown roadmap policy '{name}'. Must be one of: {choices}")

    def compute(self, steps: Sequence[RoadmapStep]) -> list[RoadmapState]:
        """Run this policy over the steps."""
        return _POLICIES[self](steps)


_POLICIES: dict[RoadmapPolicy, Callable[[Sequence[RoadmapStep]], list[RoadmapState]]] = {
    RoadmapPolicy.SIMPLE: simple_states,
    RoadmapPolicy.STATUS_AWARE: status_aware_states,
}


def compute_roadmap_states(
    steps: Sequence[RoadmapStep],
    policy: RoadmapPolicy | str = RoadmapPolicy.STATUS_AWARE,
) -> list[RoadmapState]:
    """Compute one state per step.

    Deterministic: the same steps (order, status, counts) always give the
    same result. An empty roadmap gives an empty list.

    Args:
        steps: Roadmap steps in roadmap order.
        policy: Policy or policy name ("simple", "status-aware").

    Returns:
        States aligned with steps.
    """
    return RoadmapPolicy.from_name(policy).compute(steps)


__all__ = [
    "RoadmapState",
    "RoadmapStep",
    "RoadmapPolicy",
    "compute_roadmap_states",
    "simple_states",
    "status_aware_states",
    "simple_current_index",
    "status_aware_current_index",
]
