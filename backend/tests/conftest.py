"""
Shared fixtures for the ytdl-api test suite.

Outbound HTTP is served by httpx.MockTransport. The external tool is
replaced by small /bin/sh stub scripts written into a temporary bin
directory.
"""

import sys
from pathlib import Path
from typing import Callable, Dict, List, Tuple, Union

import httpx
import pytest

from ytdl_api.assets import AssetLocations
from ytdl_api.config import Settings


BINARY_URL = "https://downloads.test/yt-dlp"
COOKIE_URL = "https://downloads.test/cookies.txt"

posix_only = pytest.mark.skipif(
    sys.platform == "win32",
    reason="stub tools are /bin/sh scripts",
)


def stub_script(body: str) -> str:
    """Shell script source for a stub tool."""
    return "#!/bin/sh\n" + body.strip() + "\n"


def write_stub_tool(path: Path, body: str) -> Path:
    """Write an executable stub tool at path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stub_script(body))
    path.chmod(0o755)
    return path


Route = Union[Tuple[int, bytes], Tuple[int, bytes, Dict[str, str]]]


class RecordingTransport(httpx.MockTransport):
    """
    MockTransport serving canned responses by URL.

    Routes map a URL to (status, body) or (status, body, headers). A fresh
    response is built per request. Unknown URLs raise ConnectError.
    Every request URL is recorded.
    """

    def __init__(self, routes: Dict[str, Route]):
        self.routes = routes
        self.requests: List[str] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url not in self.routes:
            raise httpx.ConnectError(f"unreachable: {url}", request=request)
        status, content, *rest = self.routes[url]
        headers = rest[0] if rest else {}
        return httpx.Response(status, content=content, headers=headers)

    def count(self, url: str) -> int:
        return self.requests.count(url)


@pytest.fixture
def bin_dir(tmp_path) -> Path:
    return tmp_path / "bin"


@pytest.fixture
def locations(bin_dir) -> AssetLocations:
    """Locations without a cookie source."""
    return AssetLocations.for_directory(bin_dir, is_windows=False, binary_url=BINARY_URL)


@pytest.fixture
def cookie_locations(bin_dir) -> AssetLocations:
    """Locations with a cookie source configured."""
    return AssetLocations.for_directory(
        bin_dir,
        is_windows=False,
        binary_url=BINARY_URL,
        cookie_url=COOKIE_URL,
    )


@pytest.fixture
def settings(tmp_path, locations) -> Settings:
    return Settings(
        assets=locations,
        public_dir=tmp_path / "public",
    )


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    def _make(routes: Dict[str, Route] = None) -> RecordingTransport:
        return RecordingTransport(routes or {})
    return _make
