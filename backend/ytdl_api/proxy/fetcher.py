"""
Transparent image relay.

Fetches remote bytes on behalf of browser clients that cannot load them
directly because of cross-origin restrictions. Stateless.

The response is always labelled image/jpeg. The upstream content type is
ignored, so callers must not rely on the label.
"""

import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict

from .errors import ImageFetchError

logger = logging.getLogger(__name__)

PROXY_CONTENT_TYPE = "image/jpeg"


class ProxiedImage(BaseModel):
    """Relayed image payload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: bytes
    content_type: str = PROXY_CONTENT_TYPE


class ImageProxy:
    """Fetches remote images as raw bytes."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def fetch_image(self, url: Optional[str]) -> ProxiedImage:
        """
        Fetch url and return its bytes.

        Args:
            url: Remote image URL

        Returns:
            ProxiedImage labelled image/jpeg

        Raises:
            ImageFetchError: On missing URL, network error, timeout or non-2xx status
        """
        if not url:
            raise ImageFetchError(str(url), "no URL given")

        try:
            with httpx.Client(
                transport=self._transport,
                follow_redirects=True,
                timeout=httpx.Timeout(self.timeout_seconds),
            ) as client:
                response = client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImageFetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise ImageFetchError(url, "timed out") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageFetchError(url, str(e) or type(e).__name__) from e

        return ProxiedImage(content=response.content)
