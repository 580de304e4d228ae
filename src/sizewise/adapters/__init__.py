"""Adapters - I/O implementations of ports."""

from .json_board import JsonBoardStore, BoardFormatError
from .version_feed import HttpVersionFeed, UpdateCheckError

__all__ = [
    "JsonBoardStore",
    "BoardFormatError",
    "HttpVersionFeed",
    "UpdateCheckError",
]
