"""
Service configuration.

All settings come from environment variables, read once at startup into
an immutable Settings value. Nothing else in the package reads the
environment.

Environment variables:
    PORT                      Listen port (default 3000)
    HOST                      Bind address (default 0.0.0.0)
    COOKIE_FILE               Remote URL of cookies.txt (unset disables cookies)
    YTDL_BIN_DIR              Directory for the tool and cookie file (default ./bin)
    YTDL_BINARY_URL           Override for the tool download URL
    YTDL_TIMEOUT_SECONDS      Optional tool timeout (default: none)
    DOWNLOAD_TIMEOUT_SECONDS  Asset transfer timeout (default 60)
    PROXY_TIMEOUT_SECONDS     Image proxy timeout (default 30)
    PUBLIC_DIR                Static files directory (default ./public)
    LOG_LEVEL                 Root log level (default INFO)
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .assets.models import AssetLocations


ENV_PORT = "PORT"
ENV_HOST = "HOST"
ENV_COOKIE_URL = "COOKIE_FILE"
ENV_BIN_DIR = "YTDL_BIN_DIR"
ENV_BINARY_URL = "YTDL_BINARY_URL"
ENV_TOOL_TIMEOUT = "YTDL_TIMEOUT_SECONDS"
ENV_DOWNLOAD_TIMEOUT = "DOWNLOAD_TIMEOUT_SECONDS"
ENV_PROXY_TIMEOUT = "PROXY_TIMEOUT_SECONDS"
ENV_PUBLIC_DIR = "PUBLIC_DIR"
ENV_LOG_LEVEL = "LOG_LEVEL"

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_DOWNLOAD_TIMEOUT = 60.0
DEFAULT_PROXY_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"
# Names accepted by both logging and uvicorn
VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(Exception):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, variable: str, value: str, reason: str):
        self.variable = variable
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {variable}={value!r}: {reason}")


class Settings(BaseModel):
    """Immutable service configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    assets: AssetLocations
    tool_timeout_seconds: Optional[float] = None  # None = wait indefinitely
    download_timeout_seconds: float = DEFAULT_DOWNLOAD_TIMEOUT
    proxy_timeout_seconds: float = DEFAULT_PROXY_TIMEOUT
    public_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        cwd: Optional[Path] = None,
        platform: Optional[str] = None,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            cwd: Base for relative default directories (defaults to Path.cwd())
            platform: Platform string (defaults to sys.platform)

        Returns:
            Settings instance

        Raises:
            ConfigError: If a numeric variable cannot be parsed
        """
        environ = os.environ if environ is None else environ
        cwd = Path.cwd() if cwd is None else Path(cwd)
        platform = sys.platform if platform is None else platform

        bin_dir = Path(environ.get(ENV_BIN_DIR) or cwd / "bin")
        assets = AssetLocations.for_directory(
            bin_dir,
            is_windows=platform == "win32",
            cookie_url=environ.get(ENV_COOKIE_URL),
            binary_url=environ.get(ENV_BINARY_URL),
        )

        return cls(
            host=environ.get(ENV_HOST) or DEFAULT_HOST,
            port=_parse_port(environ.get(ENV_PORT)),
            assets=assets,
            tool_timeout_seconds=_parse_seconds(ENV_TOOL_TIMEOUT, environ.get(ENV_TOOL_TIMEOUT), None),
            download_timeout_seconds=_parse_seconds(
                ENV_DOWNLOAD_TIMEOUT, environ.get(ENV_DOWNLOAD_TIMEOUT), DEFAULT_DOWNLOAD_TIMEOUT
            ),
            proxy_timeout_seconds=_parse_seconds(
                ENV_PROXY_TIMEOUT, environ.get(ENV_PROXY_TIMEOUT), DEFAULT_PROXY_TIMEOUT
            ),
            public_dir=Path(environ.get(ENV_PUBLIC_DIR) or cwd / "public"),
            log_level=_parse_log_level(environ.get(ENV_LOG_LEVEL)),
        )


def _parse_port(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(ENV_PORT, raw, "not an integer")
    if not 0 < port < 65536:
        raise ConfigError(ENV_PORT, raw, "must be between 1 and 65535")
    return port


def _parse_seconds(variable: str, raw: Optional[str], default: Optional[float]) -> Optional[float]:
    """Parse a positive number of seconds, falling back to default when unset."""
    if not raw:
        return default
    try:
        seconds = float(raw)
    except ValueError:
        raise ConfigError(variable, raw, "not a number")
    if seconds <= 0:
        raise ConfigError(variable, raw, "must be positive")
    return seconds


def _parse_log_level(raw: Optional[str]) -> str:
    """Upper-cased standard level name; aliases such as WARN are rejected."""
    if not raw:
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in VALID_LOG_LEVELS:
        raise ConfigError(ENV_LOG_LEVEL, raw, f"must be one of {', '.join(VALID_LOG_LEVELS)}")
    return level
