"""Loaded backlog board snapshot."""

from dataclasses import dataclass, field

from .items import BacklogItem
from .sequencing import SortState


@dataclass
class Board:
    """Items plus the ordering settings they were saved with."""

    items: list[BacklogItem] = field(default_factory=list)
    state: SortState = field(default_factory=SortState)
    size_labels: list[str] | None = None
