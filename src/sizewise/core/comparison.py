"""Compare the cost of the current order against the WSJF-optimal one."""

import math
from dataclasses import dataclass

from .items import BacklogItem, evaluate, wsjf_density
from .sequencing import SortCriterion, SortDirection, order_body
from .simulation import SimulationResult, simulate_items


@dataclass
class SequencingComparison:
    """Optimal vs. current processing order and what the difference costs."""

    optimal_order: list[BacklogItem]
    current_order: list[BacklogItem]
    optimal_cost: float
    current_cost: float
    overhead_percent: int
    optimal_simulation: SimulationResult | None = None
    current_simulation: SimulationResult | None = None

    @property
    def is_optimal(self) -> bool:
        return self.current_cost <= self.optimal_cost


def eligible_items(items: list[BacklogItem]) -> list[BacklogItem]:
    """Items with both triads complete; the sentinel never qualifies."""
    eligible = []
    for item in items:
        if item.is_sentinel:
            continue
        c = evaluate(item)
        if c.job_size_complete and c.cod_complete:
            eligible.append(item)
    return eligible


def optimal_order(items: list[BacklogItem]) -> list[BacklogItem]:
    """
    WSJF order: CoD / Job Size descending, ties by title.

    Sorting by this density minimizes total delay cost (Smith's rule).
    """
    def key(item: BacklogItem) -> tuple[float, str]:
        return (-wsjf_density(item.cod, item.job_size), (item.title or "").lower())

    return sorted(items, key=key)


def overhead_percent(optimal_cost: float, current_cost: float) -> int:
    """Extra cost of the current order in whole percent (half-up); 0 if optimal is 0."""
    if optimal_cost <= 0 or current_cost <= optimal_cost:
        return 0
    return math.floor((current_cost - optimal_cost) / optimal_cost * 100 + 0.5)


def compare_sequences(
    items: list[BacklogItem],
    criterion: SortCriterion | str,
    direction: SortDirection | str = SortDirection.ASC,
    locked_order: list[int | str] | None = None,
    size_labels: list[str] | None = None,
) -> SequencingComparison:
    """
    Simulate the WSJF-optimal order and the currently selected order.

    Only eligible items take part. The current order uses the body rules of
    the sequencer, so reference pinning does not apply here.
    """
    eligible = eligible_items(items)

    best = optimal_order(eligible)
    current = order_body(eligible, criterion, direction, size_labels, locked_order)

    best_sim = simulate_items(best)
    current_sim = simulate_items(current)

    return SequencingComparison(
        optimal_order=best,
        current_order=current,
        optimal_cost=best_sim.total_cost,
        current_cost=current_sim.total_cost,
        overhead_percent=overhead_percent(best_sim.total_cost, current_sim.total_cost),
        optimal_simulation=best_sim,
        current_simulation=current_sim,
    )
