"""Ports - interfaces/protocols for external dependencies."""

from .board_store import BoardStore
from .version_feed import VersionFeed

__all__ = [
    "BoardStore",
    "VersionFeed",
]
