"""JSON file board adapter."""

import json
import logging
from pathlib import Path

from sizewise.core.board import Board
from sizewise.core.items import BacklogItem
from sizewise.core.sequencing import SortCriterion, SortDirection, SortState

logger = logging.getLogger(__name__)


class BoardFormatError(Exception):
    """Raised when a board file cannot be understood."""

    pass


def _ledger_from_items(raw_items: list[dict]) -> list[int | str]:
    """Ids with a customSortIndex in index order, then everything else."""
    indexed = []
    rest = []
    for data in raw_items:
        index = data.get("customSortIndex")
        if isinstance(index, (int, float)) and not isinstance(index, bool) and index >= 0:
            indexed.append((index, data["id"]))
        else:
            rest.append(data["id"])
    if not indexed:
        return []
    indexed.sort(key=lambda pair: pair[0])
    return [item_id for _, item_id in indexed] + rest


class JsonBoardStore:
    """
    Read-only board snapshot stored as a JSON file.

    Implements BoardStore protocol. Accepts either
    {"settings": {...}, "backlogItems": [...]} or a bare list of items.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> Board:
        """Load items and their saved sort state."""
        if not self.path.exists():
            logger.info(f"No board file at {self.path}, starting empty")
            return Board()

        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise BoardFormatError(f"Invalid JSON in {self.path}: {e}") from e

        if isinstance(data, dict) and "settings" in data and "backlogItems" in data:
            settings = data["settings"] or {}
            raw_items = data["backlogItems"]
            if not isinstance(settings, dict):
                raise BoardFormatError("settings must be an object")
            if not isinstance(raw_items, list):
                raise BoardFormatError("backlogItems must be a list")
        elif isinstance(data, list):
            logger.warning(f"{self.path} uses the bare item list format, settings fall back to defaults")
            settings = {}
            raw_items = data
        else:
            raise BoardFormatError(f"Unrecognized board format in {self.path}")

        raw_items = [d for d in raw_items if d]
        for d in raw_items:
            if not isinstance(d, dict) or "id" not in d or "title" not in d:
                raise BoardFormatError("Invalid backlog item structure in data")

        items = [BacklogItem.from_dict(d) for d in raw_items]

        criterion = SortCriterion.parse(settings.get("sortCriteria")) or SortCriterion.CREATION_ORDER
        direction = SortDirection.parse(settings.get("sortDirection"))
        # Rebuilt whatever the saved criterion
        locked_order = _ledger_from_items(raw_items)

        sizes = settings.get("tshirtSizes")
        size_labels = sizes if isinstance(sizes, list) and sizes else None

        logger.debug(f"Loaded {len(items)} items from {self.path} ({criterion.value}/{direction.value})")
        return Board(
            items=items,
            state=SortState(criterion=criterion, direction=direction, locked_order=locked_order),
            size_labels=size_labels,
        )
