"""Pure backlog item domain logic - no I/O dependencies."""

import math
from dataclasses import dataclass, replace
from enum import Enum

SENTINEL_ID = -1
SENTINEL_TITLE = "---"


class ItemKind(Enum):
    """Role an item plays in a sequence."""

    NORMAL = "normal"
    REFERENCE_MIN = "reference-min"
    REFERENCE_MAX = "reference-max"
    SENTINEL = "sentinel"


def coerce_metric(value) -> float:
    """
    Normalize a raw sub-metric to a non-negative number.

    Anything that is not a finite, non-negative number counts as unset (0).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return value


def _coerce_total(value) -> float | None:
    """Stored aggregates: keep positive real numbers, drop everything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


@dataclass(frozen=True)
class Completeness:
    """Aggregate fields derived from an item's raw sub-metrics."""

    job_size_complete: bool
    job_size: float | None
    cod_complete: bool
    cod: float | None


@dataclass(frozen=True)
class BacklogItem:
    """A backlog item (PBI) with Job Size and Cost of Delay sub-metrics."""

    id: int | str
    title: str
    kind: ItemKind = ItemKind.NORMAL
    complexity: float = 0
    effort: float = 0
    doubt: float = 0
    cost_bv: float = 0
    cost_tc: float = 0
    cost_rroe: float = 0
    job_size: float | None = None
    cod: float | None = None
    tshirt_size: str | None = None

    @property
    def is_reference(self) -> bool:
        return self.kind in (ItemKind.REFERENCE_MIN, ItemKind.REFERENCE_MAX)

    @property
    def is_sentinel(self) -> bool:
        return self.kind is ItemKind.SENTINEL

    @classmethod
    def create(
        cls,
        id: int | str,
        title: str,
        kind: ItemKind = ItemKind.NORMAL,
        complexity=0,
        effort=0,
        doubt=0,
        cost_bv=0,
        cost_tc=0,
        cost_rroe=0,
        tshirt_size: str | None = None,
    ) -> "BacklogItem":
        """Build an item from raw sub-metrics with derived fields filled in."""
        item = cls(
            id=id,
            title=title,
            kind=kind,
            complexity=coerce_metric(complexity),
            effort=coerce_metric(effort),
            doubt=coerce_metric(doubt),
            cost_bv=coerce_metric(cost_bv),
            cost_tc=coerce_metric(cost_tc),
            cost_rroe=coerce_metric(cost_rroe),
            tshirt_size=tshirt_size or None,
        )
        return with_derived(item)

    @classmethod
    def from_dict(cls, data: dict) -> "BacklogItem":
        """
        Create BacklogItem from a board snapshot entry.

        Positive stored jobSize/cod are kept (the sequencer gates them through
        the completeness flags); when absent or not positive they are derived
        from the triads.
        """
        if data.get("isLastItem") is True or data.get("id") == SENTINEL_ID:
            kind = ItemKind.SENTINEL
        else:
            ref_type = data.get("referenceType")
            if data.get("isReference") is True and not ref_type:
                ref_type = "min"
            match ref_type:
                case "min":
                    kind = ItemKind.REFERENCE_MIN
                case "max":
                    kind = ItemKind.REFERENCE_MAX
                case _:
                    kind = ItemKind.NORMAL

        item = cls(
            id=data["id"],
            title=str(data.get("title") or ""),
            kind=kind,
            complexity=coerce_metric(data.get("complexity")),
            effort=coerce_metric(data.get("effort")),
            doubt=coerce_metric(data.get("doubt")),
            cost_bv=coerce_metric(data.get("cod_bv")),
            cost_tc=coerce_metric(data.get("cod_tc")),
            cost_rroe=coerce_metric(data.get("cod_rroe")),
            job_size=_coerce_total(data.get("jobSize")),
            cod=_coerce_total(data.get("cod")),
            tshirt_size=data.get("tshirtSize") or None,
        )
        derived = evaluate(item)
        return replace(
            item,
            job_size=derived.job_size if item.job_size is None else item.job_size,
            cod=derived.cod if item.cod is None else item.cod,
        )


def evaluate(item: BacklogItem) -> Completeness:
    """
    Derive Job Size and Cost of Delay from raw sub-metrics.

    Each triad is all-or-nothing: one unset sub-metric leaves the whole
    aggregate undefined, whatever the other two hold. Malformed sub-metrics
    (None, strings, NaN) count as unset.
    """
    size = [coerce_metric(v) for v in (item.complexity, item.effort, item.doubt)]
    cost = [coerce_metric(v) for v in (item.cost_bv, item.cost_tc, item.cost_rroe)]
    job_size_complete = all(v > 0 for v in size)
    cod_complete = all(v > 0 for v in cost)
    return Completeness(
        job_size_complete=job_size_complete,
        job_size=sum(size) if job_size_complete else None,
        cod_complete=cod_complete,
        cod=sum(cost) if cod_complete else None,
    )


def with_derived(item: BacklogItem) -> BacklogItem:
    """Return a copy of the item with job_size/cod recomputed from raw metrics."""
    c = evaluate(item)
    return replace(item, job_size=c.job_size, cod=c.cod)


def wsjf_density(cod: float | None, job_size: float | None) -> float:
    """CoD / Job Size, 0 when either is missing or job size is 0."""
    if not cod or not job_size:
        return 0
    return cod / job_size


def wsjf_score(item: BacklogItem) -> float | None:
    """CoD / Job Size from the triads, or None unless both are complete."""
    c = evaluate(item)
    if c.job_size is None or c.cod is None:
        return None
    return wsjf_density(c.cod, c.job_size)


def ensure_sentinel(items: list[BacklogItem], title: str = SENTINEL_TITLE) -> list[BacklogItem]:
    """
    Drop any sentinels from the list and append exactly one fresh one.

    Returns a new list; the input is not modified.
    """
    result = [item for item in items if item is not None and not item.is_sentinel]
    result.append(BacklogItem(id=SENTINEL_ID, title=title, kind=ItemKind.SENTINEL))
    return result


def real_items(items: list[BacklogItem]) -> list[BacklogItem]:
    """Everything except the sentinel."""
    return [item for item in items if not item.is_sentinel]
