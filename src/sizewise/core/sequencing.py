"""Partitioned sequencing of backlog items - pure functions, no I/O."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .items import BacklogItem, ItemKind, coerce_metric, evaluate, real_items, wsjf_density

logger = logging.getLogger(__name__)

DEFAULT_TSHIRT_SIZES = ["XXS", "XS", "S", "M", "L", "XL", "XXL"]

# Unknown or missing T-shirt labels share this rank and sort after every known label
FALLBACK_SIZE_RANK = 999


class SortCriterion(Enum):
    """Ordering modes for the backlog list."""

    CREATION_ORDER = "creationOrder"
    CUSTOM = "custom"
    LOCK = "lock"
    TSHIRT_SIZE = "tshirtSize"
    WSJF = "wsjf"
    JOB_SIZE = "jobSize"
    COD = "cod"
    COMPLEXITY = "complexity"
    EFFORT = "effort"
    DOUBT = "doubt"
    COD_BV = "cod_bv"
    COD_TC = "cod_tc"
    COD_RROE = "cod_rroe"

    @classmethod
    def parse(cls, value: "SortCriterion | str | None") -> "SortCriterion | None":
        """Look up a criterion by value; None if unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: "SortDirection | str | None") -> "SortDirection":
        """Anything other than 'desc' sorts ascending."""
        if isinstance(value, cls):
            return value
        return cls.DESC if value == cls.DESC.value else cls.ASC


# Criteria that compare a plain numeric field on the item
_FIELD_FOR_CRITERION = {
    SortCriterion.JOB_SIZE: "job_size",
    SortCriterion.COD: "cod",
    SortCriterion.COMPLEXITY: "complexity",
    SortCriterion.EFFORT: "effort",
    SortCriterion.DOUBT: "doubt",
    SortCriterion.COD_BV: "cost_bv",
    SortCriterion.COD_TC: "cost_tc",
    SortCriterion.COD_RROE: "cost_rroe",
}


@dataclass
class SortState:
    """Current ordering settings, owned by the caller and passed in explicitly."""

    criterion: SortCriterion = SortCriterion.CREATION_ORDER
    direction: SortDirection = SortDirection.ASC
    locked_order: list[int | str] = field(default_factory=list)
    wsjf_mode: bool = False


def _numeric(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _title_key(item: BacklogItem) -> str:
    return (item.title or "").lower()


def _wsjf_value(item: BacklogItem) -> float:
    c = evaluate(item)
    if not (c.job_size_complete and c.cod_complete):
        return 0
    return wsjf_density(_numeric(item.cod), _numeric(item.job_size))


def _sort_value(item: BacklogItem, criterion: SortCriterion | None, size_ranks: dict[str, int]) -> float:
    match criterion:
        case SortCriterion.TSHIRT_SIZE:
            return size_ranks.get(item.tshirt_size, FALLBACK_SIZE_RANK)
        case SortCriterion.WSJF:
            return _wsjf_value(item)
        case SortCriterion.JOB_SIZE:
            return _numeric(item.job_size) if evaluate(item).job_size_complete else 0
        case SortCriterion.COD:
            return _numeric(item.cod) if evaluate(item).cod_complete else 0
        case None:
            return 0
        case _:
            return coerce_metric(getattr(item, _FIELD_FOR_CRITERION[criterion]))


def reconcile_locked_order(items: list[BacklogItem], locked_order: list[int | str]) -> list[BacklogItem]:
    """
    Rebuild a manual order from the ledger.

    Ledger ids with no matching item are skipped; items missing from the
    ledger follow the matched ones in their original relative order.
    """
    by_id = {item.id: item for item in items}
    ordered = [by_id[item_id] for item_id in locked_order if item_id in by_id]
    in_ledger = set(locked_order)
    ordered.extend(item for item in items if item.id not in in_ledger)
    return ordered


def order_body(
    items: list[BacklogItem],
    criterion: SortCriterion | str,
    direction: SortDirection | str = SortDirection.ASC,
    size_labels: list[str] | None = None,
    locked_order: list[int | str] | None = None,
) -> list[BacklogItem]:
    """
    Order the non-pinned body of a sequence.

    Returns a new list. Unrecognized criteria compare every item as 0,
    which leaves title order.
    """
    parsed = SortCriterion.parse(criterion)
    direction = SortDirection.parse(direction)

    if parsed is None:
        logger.debug(f"Unknown sort criterion {criterion!r}, comparing by title only")

    if parsed is SortCriterion.CREATION_ORDER:
        return list(items)

    if parsed in (SortCriterion.CUSTOM, SortCriterion.LOCK):
        ordered = reconcile_locked_order(items, locked_order or [])
        # TODO: manual order has no inherent direction; decide whether custom+desc should stop reversing
        if parsed is SortCriterion.CUSTOM and direction is SortDirection.DESC:
            ordered.reverse()
        return ordered

    labels = DEFAULT_TSHIRT_SIZES if size_labels is None else size_labels
    size_ranks = {label: index + 1 for index, label in enumerate(labels)}

    ordered = sorted(items, key=lambda item: (_sort_value(item, parsed, size_ranks), _title_key(item)))
    if direction is SortDirection.DESC:
        ordered.reverse()
    return ordered


def sequence_items(
    items: list[BacklogItem],
    criterion: SortCriterion | str,
    direction: SortDirection | str = SortDirection.ASC,
    size_labels: list[str] | None = None,
    locked_order: list[int | str] | None = None,
    wsjf_mode: bool = False,
) -> list[BacklogItem]:
    """
    Produce the display order for a backlog.

    Three zones, concatenated:
    1. Reference items (min before max), unless sorting by custom order or
       in WSJF mode, where they sort with everything else.
    2. The body, ordered by `criterion` (see order_body).
    3. The sentinel, always last.

    Pure function - the input list is not modified.
    """
    pin_references = SortCriterion.parse(criterion) is not SortCriterion.CUSTOM and not wsjf_mode

    references: list[BacklogItem] = []
    body: list[BacklogItem] = []
    sentinel = None

    for item in items:
        if item is None:
            continue
        if item.is_reference and pin_references:
            references.append(item)
        elif item.is_sentinel:
            sentinel = item
        else:
            body.append(item)

    references.sort(key=lambda item: 0 if item.kind is ItemKind.REFERENCE_MIN else 1)

    result = references + order_body(body, criterion, direction, size_labels, locked_order)
    if sentinel is not None:
        result.append(sentinel)
    return result


def sequence_board(items: list[BacklogItem], state: SortState, size_labels: list[str] | None = None) -> list[BacklogItem]:
    """sequence_items driven by a SortState."""
    return sequence_items(
        items,
        state.criterion,
        state.direction,
        size_labels=size_labels,
        locked_order=state.locked_order,
        wsjf_mode=state.wsjf_mode,
    )


def snapshot_locked_order(sequence: list[BacklogItem]) -> list[int | str]:
    """Ids of a produced sequence, minus references and the sentinel."""
    return [item.id for item in sequence if not item.is_reference and not item.is_sentinel]


def normalize_sort_state(items: list[BacklogItem], state: SortState) -> SortState:
    """
    Fall back to creation order when the active criterion has no data to sort by.

    - No real items: reset everything to defaults.
    - cod / wsjf with no positive CoD anywhere: creation order.
    - tshirtSize with no labels anywhere: creation order.
    """
    real = real_items(items)
    if not real:
        if state.criterion is not SortCriterion.CREATION_ORDER:
            logger.info("Backlog is empty, resetting sort state")
        return SortState(wsjf_mode=state.wsjf_mode)

    criterion = state.criterion
    has_cod = any(_numeric(item.cod) > 0 for item in real)
    has_sizes = any(item.tshirt_size for item in real)

    if criterion in (SortCriterion.COD, SortCriterion.WSJF) and not has_cod:
        logger.info(f"No item has a Cost of Delay, falling back from {criterion.value} to creation order")
        criterion = SortCriterion.CREATION_ORDER
    elif criterion is SortCriterion.TSHIRT_SIZE and not has_sizes:
        logger.info("No item has a T-shirt size, falling back to creation order")
        criterion = SortCriterion.CREATION_ORDER

    return SortState(
        criterion=criterion,
        direction=state.direction,
        locked_order=list(state.locked_order),
        wsjf_mode=state.wsjf_mode,
    )
