"""
Metadata extraction using yt-dlp.

Runs the external tool against a single URL and returns its JSON dump
unchanged. The tool is treated as a black box: no schema is assumed.

Failure handling is strict:
- Launch failure, non-zero exit, any stderr output and unparseable
  stdout are each reported as a distinct error
- Nothing is retried
- No timeout unless one is configured explicitly
"""

import json
import logging
import subprocess
from typing import Any, List, Optional

from ..assets import AssetLocations, AssetProvisioner
from .errors import (
    InvalidTargetError,
    ToolExecutionError,
    ToolLaunchError,
    ToolOutputParseError,
    ToolStderrError,
    ToolTimeoutError,
)

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    """NaN and Infinity are not JSON, whatever json.loads allows."""
    raise ValueError(f"Unexpected token {name}")


def build_command(locations: AssetLocations, url: str) -> List[str]:
    """
    Build the tool command line for a URL.

    Argument order is fixed: cookie file, ignore-errors, dump-json, URL.
    The cookie path is passed even if the file was never provisioned.
    """
    return [
        str(locations.binary_path),
        "--cookies", str(locations.cookie_path),
        "--ignore-errors",
        "--dump-json",
        url,
    ]


class ExtractionInvoker:
    """Runs the extraction tool after making sure it is provisioned."""

    def __init__(
        self,
        provisioner: AssetProvisioner,
        *,
        timeout_seconds: Optional[float] = None,
    ):
        self.provisioner = provisioner
        self.timeout_seconds = timeout_seconds

    @property
    def locations(self) -> AssetLocations:
        return self.provisioner.locations

    def extract(self, url: str) -> Any:
        """
        Extract metadata for a URL.

        Blocks until the tool exits. Callers must reject empty URLs
        before calling.

        Args:
            url: Target media URL

        Returns:
            Parsed JSON value exactly as emitted by the tool

        Raises:
            AssetError: If provisioning fails (propagated unchanged)
            ToolLaunchError: If the tool cannot be started
            ToolExecutionError: If the tool exits non-zero
            ToolStderrError: If the tool writes to stderr
            ToolOutputParseError: If stdout is not valid JSON
            ToolTimeoutError: If a configured timeout is exceeded
            InvalidTargetError: If the URL would be read as a tool option
        """
        if url.startswith("-"):
            raise InvalidTargetError(url, "URL must not start with '-'")

        self.provisioner.ensure_assets()

        stdout = self._run(url)

        try:
            return json.loads(stdout, parse_constant=_reject_constant)
        except ValueError as e:
            logger.error("Failed to parse JSON from yt-dlp output: %s", e)
            raise ToolOutputParseError(str(e), output=stdout) from e

    def _run(self, url: str) -> str:
        """
        Run the tool and return its stdout.

        Raises:
            ToolLaunchError, ToolExecutionError, ToolStderrError, ToolTimeoutError
        """
        cmd = build_command(self.locations, url)
        binary = cmd[0]
        logger.info("Running yt-dlp for %s", url)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            logger.error("yt-dlp timed out after %ss for %s", self.timeout_seconds, url)
            raise ToolTimeoutError(binary, self.timeout_seconds) from e
        except OSError as e:
            logger.error("Error executing yt-dlp: %s", e)
            raise ToolLaunchError(binary, str(e)) from e

        stderr = result.stderr or ""

        if result.returncode != 0:
            logger.error("yt-dlp exited with code %s", result.returncode)
            raise ToolExecutionError(binary, result.returncode, stderr)

        if stderr:
            logger.warning("yt-dlp stderr output: %s", stderr.strip())
            raise ToolStderrError(stderr)

        return result.stdout or ""
