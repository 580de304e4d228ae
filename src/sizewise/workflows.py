"""Shared workflow layer between the CLI and the functional core.

Each function loads what it needs through a port, runs the pure core on one
consistent snapshot, and returns plain data for the caller to display.
"""

import logging
from dataclasses import dataclass, replace
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .adapters.json_board import JsonBoardStore
from .adapters.version_feed import HttpVersionFeed
from .config import DEFAULT_BOARD_FILE, Config
from .core.board import Board
from .core.comparison import SequencingComparison, compare_sequences
from .core.items import BacklogItem, ensure_sentinel
from .core.ranking import calculate_wsjf_ranks
from .core.sequencing import SortCriterion, SortDirection, SortState, normalize_sort_state, sequence_board
from .core.versions import UpdateStatus
from .ports import BoardStore, VersionFeed

logger = logging.getLogger(__name__)


@dataclass
class BoardReport:
    """Everything the presentation layer needs for one update."""

    state: SortState
    sequence: list[BacklogItem]
    ranks: dict[int | str, int]
    comparison: SequencingComparison


def get_board_store(path: Path | str | None = None) -> JsonBoardStore:
    """Resolve the board file, defaulting to the data directory."""
    return JsonBoardStore(path or DEFAULT_BOARD_FILE)


def resolve_state(
    board: Board,
    config: Config,
    criterion: str | None = None,
    direction: str | None = None,
    wsjf_mode: bool | None = None,
) -> SortState:
    """
    Merge saved board state with command-line overrides.

    A board saved with creation order picks up the configured default.
    """
    state = board.state
    if state.criterion is SortCriterion.CREATION_ORDER and config.sort_criterion is not SortCriterion.CREATION_ORDER:
        state = replace(state, criterion=config.sort_criterion, direction=config.sort_direction)

    if criterion is not None:
        parsed = SortCriterion.parse(criterion)
        if parsed is None:
            raise ValueError(f"Unknown sort criterion: {criterion}")
        state = replace(state, criterion=parsed)
    if direction is not None:
        state = replace(state, direction=SortDirection.parse(direction))

    mode = config.wsjf_mode if wsjf_mode is None else wsjf_mode
    return replace(state, wsjf_mode=mode)


def build_report(board: Board, config: Config, state: SortState | None = None) -> BoardReport:
    """
    Sequence, rank and cost-compare one board snapshot.

    Sequencer and comparator share the same items and ledger, so the
    displayed order and the cost comparison cannot drift apart.
    """
    items = ensure_sentinel(board.items, title=config.sentinel_title)
    state = normalize_sort_state(items, state or board.state)
    size_labels = board.size_labels or config.tshirt_sizes

    sequence = sequence_board(items, state, size_labels=size_labels)
    ranks = calculate_wsjf_ranks(items)
    comparison = compare_sequences(
        items,
        state.criterion,
        state.direction,
        locked_order=state.locked_order,
        size_labels=size_labels,
    )

    logger.info(
        f"Sequenced {len(sequence) - 1} items by {state.criterion.value}/{state.direction.value}: "
        f"cost {comparison.current_cost} vs optimal {comparison.optimal_cost} "
        f"(+{comparison.overhead_percent}%)"
    )
    return BoardReport(state=state, sequence=sequence, ranks=ranks, comparison=comparison)


def load_report(
    config: Config,
    store: BoardStore,
    criterion: str | None = None,
    direction: str | None = None,
    wsjf_mode: bool | None = None,
) -> BoardReport:
    """Load a board through the store and build its report."""
    board = store.load()
    state = resolve_state(board, config, criterion, direction, wsjf_mode)
    return build_report(board, config, state)


def installed_version() -> str:
    """Version of the running sizewise install."""
    try:
        return version("sizewise")
    except PackageNotFoundError:
        return "0.0.0"


def check_for_update(config: Config, feed: VersionFeed | None = None, local_version: str | None = None) -> UpdateStatus:
    """
    Compare the running version with the latest release.

    Does no network I/O when the check is disabled or no feed URL is set.
    """
    local_version = local_version or installed_version()
    if not config.update_check_enabled:
        logger.debug("Update check disabled")
        return UpdateStatus(local_version=local_version)

    if feed is None:
        if not config.update_version_url:
            logger.debug("No UPDATE_VERSION_URL configured")
            return UpdateStatus(local_version=local_version)
        feed = HttpVersionFeed(config.update_version_url, timeout=config.update_timeout)

    latest = feed.fetch_latest()
    status = UpdateStatus(local_version=local_version, latest=latest)
    if status.update_available:
        logger.info(f"Update available: {local_version} -> {latest.version}")
    return status
