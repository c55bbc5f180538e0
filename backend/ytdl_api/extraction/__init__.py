"""
Metadata extraction through the external yt-dlp tool.

Usage:
    from ytdl_api.extraction import ExtractionInvoker

    invoker = ExtractionInvoker(provisioner)
    info = invoker.extract("https://www.youtube.com/watch?v=...")
"""

from .errors import (
    ExtractionError,
    InvalidTargetError,
    ToolLaunchError,
    ToolExecutionError,
    ToolStderrError,
    ToolOutputParseError,
    ToolTimeoutError,
)
from .invoker import (
    ExtractionInvoker,
    build_command,
)

__all__ = [
    # Errors
    "ExtractionError",
    "InvalidTargetError",
    "ToolLaunchError",
    "ToolExecutionError",
    "ToolStderrError",
    "ToolOutputParseError",
    "ToolTimeoutError",
    # Extraction
    "ExtractionInvoker",
    "build_command",
]
