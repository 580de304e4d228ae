"""Functional core - pure prioritization and sequencing logic with no I/O."""

from .items import BacklogItem, ItemKind, Completeness, evaluate, wsjf_density, wsjf_score, ensure_sentinel
from .ranking import calculate_wsjf_ranks
from .sequencing import SortCriterion, SortDirection, SortState, sequence_items, order_body
from .simulation import QueuedJob, SimulationResult, simulate_queue, simulate_items
from .comparison import SequencingComparison, compare_sequences, eligible_items

__all__ = [
    # Items
    "BacklogItem",
    "ItemKind",
    "Completeness",
    "evaluate",
    "wsjf_density",
    "wsjf_score",
    "ensure_sentinel",
    # Ranking
    "calculate_wsjf_ranks",
    # Sequencing
    "SortCriterion",
    "SortDirection",
    "SortState",
    "sequence_items",
    "order_body",
    # Simulation
    "QueuedJob",
    "SimulationResult",
    "simulate_queue",
    "simulate_items",
    # Comparison
    "SequencingComparison",
    "compare_sequences",
    "eligible_items",
]
