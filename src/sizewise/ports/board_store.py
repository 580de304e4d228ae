"""Board store interface."""

from typing import Protocol

from sizewise.core.board import Board


class BoardStore(Protocol):
    """Interface for reading a board snapshot from any backend."""

    def load(self) -> Board:
        """Load items and their saved sort state."""
        ...
