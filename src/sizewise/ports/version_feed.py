"""Version feed interface."""

from typing import Protocol

from sizewise.core.versions import ReleaseInfo


class VersionFeed(Protocol):
    """Interface for looking up the latest published release."""

    def fetch_latest(self) -> ReleaseInfo | None:
        """Latest release, or None if the feed names no version."""
        ...
