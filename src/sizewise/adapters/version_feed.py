"""HTTP version feed adapter."""

import logging
import time

import requests

from sizewise.core.versions import ReleaseInfo

logger = logging.getLogger(__name__)


class UpdateCheckError(Exception):
    """Raised when the latest version cannot be fetched."""

    pass


class HttpVersionFeed:
    """
    Version manifest fetched over HTTP.

    Implements VersionFeed protocol. Expects a JSON body with "version" (or
    "latest") and an optional "downloadUrl".
    """

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout
        self._session = requests.Session()

    def _cache_busted_url(self) -> str:
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}nocache={int(time.time())}"

    def fetch_latest(self) -> ReleaseInfo | None:
        """Latest release, or None if the manifest names no version."""
        try:
            resp = self._session.get(
                self._cache_busted_url(),
                headers={"Cache-Control": "no-store"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.warning(f"Update check failed: {e}")
            raise UpdateCheckError(f"Update check failed: {e}") from e
        except ValueError as e:
            raise UpdateCheckError(f"Version feed returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            return None
        version = data.get("version") or data.get("latest")
        if not version:
            return None
        return ReleaseInfo(version=str(version), download_url=data.get("downloadUrl"))
