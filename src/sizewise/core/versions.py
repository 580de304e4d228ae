"""Version string comparison - pure functions, no I/O."""

import re
from dataclasses import dataclass


def _parts(version) -> list[int]:
    parts = []
    for chunk in str(version).split("."):
        match = re.match(r"\d+", chunk.strip())
        parts.append(int(match.group()) if match else 0)
    return parts


def compare_semver(a, b) -> int:
    """
    Compare two dotted version strings.

    Missing segments count as 0, so "1.0" equals "1.0.0". Non-numeric
    segments count as 0 too. Returns >0 if a is newer, <0 if older, 0 if equal.
    """
    pa, pb = _parts(a), _parts(b)
    for i in range(max(len(pa), len(pb))):
        x = pa[i] if i < len(pa) else 0
        y = pb[i] if i < len(pb) else 0
        if x != y:
            return x - y
    return 0


def is_newer(remote, local) -> bool:
    """True if `remote` is a later version than `local`."""
    return compare_semver(remote, local) > 0


@dataclass
class ReleaseInfo:
    """Latest published release, as reported by a version feed."""

    version: str
    download_url: str | None = None


@dataclass
class UpdateStatus:
    """Result of comparing the running version against the latest release."""

    local_version: str
    latest: ReleaseInfo | None = None

    @property
    def update_available(self) -> bool:
        return self.latest is not None and is_newer(self.latest.version, self.local_version)
