"""
Extraction-specific error types.

All errors inherit from ExtractionError for easy catching.
Each failure mode of the external tool maps to exactly one error type.
None of them are retried.
"""

from typing import Optional


class ExtractionError(Exception):
    """Base exception for all extraction failures."""
    pass


class ToolLaunchError(ExtractionError):
    """Raised when the external tool cannot be started at all."""

    def __init__(self, binary: str, reason: str):
        self.binary = binary
        self.reason = reason
        super().__init__(f"Error: failed to run {binary}: {reason}")


class ToolExecutionError(ExtractionError):
    """Raised when the external tool exits with a non-zero code."""

    def __init__(self, binary: str, returncode: int, stderr: str = ""):
        self.binary = binary
        self.returncode = returncode
        self.stderr = stderr
        message = f"Error: {binary} exited with code {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class ToolStderrError(ExtractionError):
    """
    Raised when the external tool writes anything to stderr.

    Applies even when the exit code signals success.
    """

    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(f"Stderr: {stderr.strip()}")


class ToolOutputParseError(ExtractionError):
    """Raised when stdout of the external tool is not valid JSON."""

    def __init__(self, reason: str, output: Optional[str] = None):
        self.reason = reason
        self.output = output
        super().__init__(f"Failed to parse JSON: {reason}")


class ToolTimeoutError(ExtractionError):
    """Raised when an optional invocation timeout is configured and exceeded."""

    def __init__(self, binary: str, timeout_seconds: float):
        self.binary = binary
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Error: {binary} timed out after {timeout_seconds}s")


class InvalidTargetError(ExtractionError):
    """Raised when a URL would be parsed by the tool as an option."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Error: invalid URL {url!r}: {reason}")
