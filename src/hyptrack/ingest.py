"""Ingestion boundary - raw records to model objects.

Records arrive as dicts from the persistence layer (or a JSON export of
it). This module is the one place that cleans them:

- Numeric scores are coerced to int and clamped to 1-5, defaulting to 3
- Status labels are normalized, including the product's Japanese labels
- Timestamps are parsed from ISO-8601 strings
- Roadmap members are selected, ordered and annotated as RoadmapSteps

Everything downstream assumes these guarantees and does not re-check them.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping

from hyptrack.exceptions import RecordError
from hyptrack.models import Hypothesis, HypothesisLink, HypothesisStatus, Validation
from hyptrack.roadmap.states import RoadmapStep

logger = logging.getLogger(__name__)

SCORE_MIN = 1
SCORE_MAX = 5
SCORE_DEFAULT = 3
DEFAULT_ROADMAP_TAG = "roadmap"

STATUS_ALIASES: dict[str, HypothesisStatus] = {
    "unverified": HypothesisStatus.UNVERIFIED,
    "未検証": HypothesisStatus.UNVERIFIED,
    "verifying": HypothesisStatus.VERIFYING,
    "検証中": HypothesisStatus.VERIFYING,
    "confirmed": HypothesisStatus.CONFIRMED,
    "成立": HypothesisStatus.CONFIRMED,
    "refuted": HypothesisStatus.REFUTED,
    "否定": HypothesisStatus.REFUTED,
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def clamp_score(value: Any, default: int = SCORE_DEFAULT) -> int:
    """Coerce a 1-5 score.

    Numbers (and numeric strings) are rounded and clamped into range;
    anything else, including booleans, gives the default.
    """
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return max(SCORE_MIN, min(SCORE_MAX, int(round(number))))


def parse_status(value: Any) -> HypothesisStatus:
    """Normalize a status label; unknown or empty values are UNVERIFIED."""
    if isinstance(value, HypothesisStatus):
        return value
    if not value:
        return HypothesisStatus.UNVERIFIED
    key = str(value).strip()
    status = STATUS_ALIASES.get(key) or STATUS_ALIASES.get(key.lower())
    if status is None:
        logger.debug("Unknown status %r, treating as unverified", value)
        return HypothesisStatus.UNVERIFIED
    return status


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Returns None for missing or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Unparseable timestamp %r", value)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_order(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric roadmap_order %r", value)
        return None


def _require(record: Mapping[str, Any], key: str, kind: str) -> str:
    value = record.get(key)
    if value is None or value == "":
        raise RecordError(f"{kind} record is missing '{key}'", dict(record))
    return str(value)


def hypothesis_from_record(record: Mapping[str, Any]) -> Hypothesis:
    """Build a Hypothesis from a raw record.

    Args:
        record: Dict with at least an "id" key.

    Returns:
        Cleaned Hypothesis.

    Raises:
        RecordError: If the record has no id.
    """
    hyp_id = _require(record, "id", "Hypothesis")
    # Older records call the assumption "premise"
    assumption = record.get("assumption") or record.get("premise") or ""
    tag = record.get("roadmap_tag")
    return Hypothesis(
        id=hyp_id,
        title=str(record.get("title") or ""),
        assumption=str(assumption),
        expected_effect=str(record.get("expected_effect") or ""),
        impact=clamp_score(record.get("impact")),
        uncertainty=clamp_score(record.get("uncertainty")),
        confidence=clamp_score(record.get("confidence")),
        type=str(record.get("type") or ""),
        status=parse_status(record.get("status")),
        created_at=parse_timestamp(record.get("created_at")),
        roadmap_order=_parse_order(record.get("roadmap_order")),
        roadmap_tag=str(tag) if tag else None,
    )


def link_from_record(record: Mapping[str, Any]) -> HypothesisLink:
    """Build a HypothesisLink from a raw record.

    A missing link id falls back to "<from_id>-><to_id>".

    Raises:
        RecordError: If from_id or to_id is missing.
    """
    from_id = _require(record, "from_id", "Link")
    to_id = _require(record, "to_id", "Link")
    link_id = record.get("id") or f"{from_id}->{to_id}"
    label = record.get("label")
    return HypothesisLink(
        id=str(link_id),
        from_id=from_id,
        to_id=to_id,
        label=str(label) if label else None,
    )


def validation_from_record(record: Mapping[str, Any]) -> Validation:
    """Build a Validation from a raw record.

    Raises:
        RecordError: If hypothesis_id is missing.
    """
    hypothesis_id = _require(record, "hypothesis_id", "Validation")
    result = record.get("result")
    return Validation(
        id=str(record.get("id") or ""),
        hypothesis_id=hypothesis_id,
        created_at=parse_timestamp(record.get("created_at")),
        result=str(result) if result is not None else None,
    )


def count_validations(validations: Iterable[Validation]) -> Counter[str]:
    """Count validation records per hypothesis ID."""
    return Counter(v.hypothesis_id for v in validations)


def _roadmap_sort_key(hypothesis: Hypothesis) -> tuple:
    order = hypothesis.roadmap_order
    created = hypothesis.created_at
    return (
        order is None,
        order if order is not None else 0.0,
        created is None,
        created or _EPOCH,
        hypothesis.id,
    )


def roadmap_steps(
    hypotheses: Iterable[Hypothesis],
    validations: Iterable[Validation] = (),
    tag: str = DEFAULT_ROADMAP_TAG,
) -> list[RoadmapStep]:
    """Select roadmap members and annotate them as steps.

    Members are hypotheses whose roadmap_tag equals tag. They are ordered
    by roadmap_order (missing orders last), then creation time, then id.
    A repeated id keeps only its first occurrence.

    Args:
        hypotheses: All hypotheses of a project.
        validations: Validation records; only hypothesis_id is used.
        tag: Membership tag value.

    Returns:
        Steps with 0-based positions and validation counts.
    """
    members: dict[str, Hypothesis] = {}
    for hypothesis in hypotheses:
        if hypothesis.roadmap_tag != tag:
            continue
        if hypothesis.id in members:
            logger.warning("Hypothesis %s listed twice on the roadmap, keeping the first", hypothesis.id)
            continue
        members[hypothesis.id] = hypothesis

    counts = count_validations(validations)
    ordered = sorted(members.values(), key=_roadmap_sort_key)
    return [
        RoadmapStep(hypothesis=hyp, position=index, verification_count=counts.get(hyp.id, 0))
        for index, hyp in enumerate(ordered)
    ]


@dataclass
class Dataset:
    """All records of one project, cleaned.

    Attributes:
        hypotheses: Hypotheses in export order.
        links: Links in export order.
        validations: Validation records in export order.
    """

    hypotheses: list[Hypothesis] = field(default_factory=list)
    links: list[HypothesisLink] = field(default_factory=list)
    validations: list[Validation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Dataset:
        """Create from a dict with "hypotheses", "links", "validations" lists.

        Raises:
            RecordError: If a section is not a list or a record is invalid.
        """
        sections = {}
        for key in ("hypotheses", "links", "validations"):
            value = data.get(key) or []
            if not isinstance(value, list):
                raise RecordError(f"'{key}' must be a list, got {type(value).__name__}")
            sections[key] = value

        return cls(
            hypotheses=[hypothesis_from_record(r) for r in sections["hypotheses"]],
            links=[link_from_record(r) for r in sections["links"]],
            validations=[validation_from_record(r) for r in sections["validations"]],
        )

    def roadmap_steps(self, tag: str = DEFAULT_ROADMAP_TAG) -> list[RoadmapStep]:
        """Roadmap steps for this dataset."""
        return roadmap_steps(self.hypotheses, self.validations, tag=tag)


def load_dataset(path: Path) -> Dataset:
    """Load a JSON export.

    Args:
        path: JSON file with "hypotheses", "links" and "validations".

    Returns:
        Cleaned Dataset.

    Raises:
        RecordError: If the file is not a JSON object or records are invalid.
        OSError: If the file cannot be read.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RecordError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise RecordError(f"{path}: expected a JSON object at top level")
    dataset = Dataset.from_dict(data)
    logger.debug(
        "Loaded %s: %d hypotheses, %d links, %d validations",
        path,
        len(dataset.hypotheses),
        len(dataset.links),
        len(dataset.validations),
    )
    return dataset


__all__ = [
    "STATUS_ALIASES",
    "clamp_score",
    "parse_status",
    "parse_timestamp",
    "hypothesis_from_record",
    "link_from_record",
    "validation_from_record",
    "count_validations",
    "roadmap_steps",
    "Dataset",
    "load_dataset",
]
