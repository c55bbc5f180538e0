"""
Asset location model.

Describes where the external tool and its cookie file live on disk
and where they are fetched from when missing.

Built once at startup and passed explicitly to the provisioner and
the invoker. Never mutated afterwards.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict


# Release channel for the external tool
YTDLP_RELEASE_BASE = "https://github.com/yt-dlp/yt-dlp/releases/latest/download"

BINARY_NAME = "yt-dlp"
BINARY_NAME_WINDOWS = "yt-dlp.exe"
COOKIE_FILE_NAME = "cookies.txt"


def binary_name_for(is_windows: bool) -> str:
    """File name of the tool on the given platform."""
    return BINARY_NAME_WINDOWS if is_windows else BINARY_NAME


def default_binary_url(is_windows: bool) -> str:
    """Latest release download URL for the given platform."""
    return f"{YTDLP_RELEASE_BASE}/{binary_name_for(is_windows)}"


class AssetLocations(BaseModel):
    """
    Local paths and remote sources of the provisioned assets.

    cookie_url is optional. When it is None the cookie file is never
    downloaded, but cookie_path is still handed to the tool.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    binary_path: Path
    cookie_path: Path
    binary_url: str
    cookie_url: Optional[str] = None
    is_windows: bool = False

    @property
    def directory(self) -> Path:
        """Directory that holds the binary."""
        return self.binary_path.parent

    @classmethod
    def for_directory(
        cls,
        bin_dir: Path,
        *,
        is_windows: bool,
        cookie_url: Optional[str] = None,
        binary_url: Optional[str] = None,
    ) -> "AssetLocations":
        """
        Derive locations from a base directory and the platform.

        Args:
            bin_dir: Directory for the binary and cookie file
            is_windows: Whether the host platform is Windows
            cookie_url: Optional remote source of the cookie file
            binary_url: Override for the tool download URL

        Returns:
            AssetLocations with platform-specific file names
        """
        bin_dir = Path(bin_dir)
        return cls(
            binary_path=bin_dir / binary_name_for(is_windows),
            cookie_path=bin_dir / COOKIE_FILE_NAME,
            binary_url=binary_url or default_binary_url(is_windows),
            cookie_url=cookie_url or None,
            is_windows=is_windows,
        )
