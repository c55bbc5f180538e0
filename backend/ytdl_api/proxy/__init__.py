"""
Image proxy for cross-origin thumbnails.
"""

from .errors import ImageFetchError
from .fetcher import (
    ImageProxy,
    ProxiedImage,
    PROXY_CONTENT_TYPE,
)

__all__ = [
    "ImageFetchError",
    "ImageProxy",
    "ProxiedImage",
    "PROXY_CONTENT_TYPE",
]
