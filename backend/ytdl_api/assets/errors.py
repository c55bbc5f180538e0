"""
Asset provisioning error types.

All errors inherit from AssetError for easy catching.
Errors are explicit and provide actionable messages.
"""


class AssetError(Exception):
    """Base exception for all asset provisioning failures."""
    pass


class AssetDownloadError(AssetError):
    """
    Raised when a required asset cannot be fetched or written.

    Covers both sides of the transfer:
    - Remote failure (connection error, non-2xx response)
    - Local failure (directory creation, write or permission error)

    A partially written destination file is left in place.
    """

    def __init__(self, url: str, destination: str, reason: str):
        self.url = url
        self.destination = destination
        self.reason = reason
        super().__init__(f"Failed to download {url} to {destination}: {reason}")
