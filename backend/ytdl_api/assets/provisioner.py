"""
Asset provisioning for the external extraction tool.

Guarantees that the tool binary, and the cookie file when a source is
configured, exist on disk before the first invocation. Missing files are
streamed straight into their destination over HTTP.

Checks are existence-only. A present file is never re-validated,
refreshed or deleted.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional

import httpx

from .errors import AssetDownloadError
from .models import AssetLocations

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755
DOWNLOAD_CHUNK_SIZE = 64 * 1024


class AssetProvisioner:
    """
    Downloads missing assets on demand.

    Concurrent first calls are serialised by a lock: the second caller
    waits for the first transfer and then finds the files present.
    """

    def __init__(
        self,
        locations: AssetLocations,
        *,
        timeout_seconds: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.locations = locations
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._lock = threading.Lock()

    def status(self) -> Dict[str, bool]:
        """Presence of each asset on disk."""
        return {
            "binary": self.locations.binary_path.exists(),
            "cookies": self.locations.cookie_path.exists(),
        }

    def is_provisioned(self) -> bool:
        """
        True when nothing remains to download.

        A missing cookie file counts as provisioned if no cookie source
        is configured.
        """
        return not self._missing()

    def ensure_assets(self) -> None:
        """
        Download any missing asset.

        No-op when every asset is already present.

        Raises:
            AssetDownloadError: If a transfer or local write fails
        """
        if self.is_provisioned():
            return

        with self._lock:
            missing = self._missing()
            if not missing:
                return

            logger.info(
                "Missing assets in %s: %s",
                self.locations.directory,
                ", ".join(path.name for path in missing),
            )
            self._ensure_directory()

            loc = self.locations
            if loc.binary_path in missing:
                logger.info("Downloading %s...", loc.binary_path.name)
                self._download(loc.binary_url, loc.binary_path)
                if not loc.is_windows:
                    self._make_executable(loc.binary_path)
                logger.info("%s downloaded successfully.", loc.binary_path.name)

            if not loc.cookie_path.exists():
                if loc.cookie_url:
                    logger.info("Downloading %s...", loc.cookie_path.name)
                    self._download(loc.cookie_url, loc.cookie_path)
                    logger.info("%s downloaded successfully.", loc.cookie_path.name)
                else:
                    logger.warning(
                        "No cookie source configured; skipping %s download.",
                        loc.cookie_path.name,
                    )

    def _missing(self) -> List[Path]:
        loc = self.locations
        missing = []
        if not loc.binary_path.exists():
            missing.append(loc.binary_path)
        if loc.cookie_url and not loc.cookie_path.exists():
            missing.append(loc.cookie_path)
        return missing

    def _ensure_directory(self) -> None:
        directory = self.locations.directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AssetDownloadError(
                self.locations.binary_url, str(directory), f"cannot create directory: {e}"
            ) from e

    def _download(self, url: str, destination: Path) -> None:
        """
        Stream url into destination.

        Raises:
            AssetDownloadError: On network, HTTP status or filesystem failure
        """
        logger.info("Starting download from %s", url)
        try:
            with httpx.Client(
                transport=self._transport,
                follow_redirects=True,
                timeout=httpx.Timeout(self.timeout_seconds),
            ) as client:
                with client.stream("GET", url) as response:
                    logger.info("Response status: %s", response.status_code)
                    response.raise_for_status()
                    with open(destination, "wb") as f:
                        for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                            f.write(chunk)
        except httpx.HTTPStatusError as e:
            logger.error("Download of %s failed: HTTP %s", url, e.response.status_code)
            raise AssetDownloadError(
                url, str(destination), f"HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Download of %s failed: %s", url, e)
            raise AssetDownloadError(url, str(destination), str(e) or type(e).__name__) from e
        except OSError as e:
            logger.error("Error writing to file %s: %s", destination, e)
            raise AssetDownloadError(url, str(destination), f"write failed: {e}") from e

        logger.info("File downloaded successfully to %s", destination)

    def _make_executable(self, path: Path) -> None:
        try:
            os.chmod(path, EXECUTABLE_MODE)
        except OSError as e:
            raise AssetDownloadError(
                self.locations.binary_url, str(path), f"cannot mark executable: {e}"
            ) from e
