"""
Image proxy error types.
"""


class ImageFetchError(Exception):
    """
    Raised when a remote image cannot be relayed.

    The reason is kept for logging only. HTTP callers receive a fixed
    message with no upstream detail.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch image {url}: {reason}")
