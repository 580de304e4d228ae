"""WSJF ranking - pure functions, no I/O."""

import math

from .items import BacklogItem, wsjf_density


def _is_rankable(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


def calculate_wsjf_ranks(items: list[BacklogItem]) -> dict[int | str, int]:
    """
    Rank items by WSJF density, highest first (rank 1 = most urgent).

    Only items with a positive, finite stored cod and job_size take part;
    everything else (including the sentinel) is left out of the map.
    Equal densities keep their input order.
    """
    scored = [
        (item.id, wsjf_density(item.cod, item.job_size))
        for item in items
        if not item.is_sentinel and _is_rankable(item.cod) and _is_rankable(item.job_size)
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return {item_id: rank for rank, (item_id, _) in enumerate(scored, start=1)}
