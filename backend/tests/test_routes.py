"""
HTTP Surface Tests

Exercises the FastAPI application end to end with stub tools on disk and
mocked outbound HTTP.
"""

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from ytdl_api.main import create_app

from conftest import BINARY_URL, posix_only, write_stub_tool


TARGET = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
IMAGE_URL = "https://i.ytimg.test/vi/dQw4w9WgXcQ/hqdefault.jpg"
VIDEO_INFO = {"id": "dQw4w9WgXcQ", "title": "Never Gonna Give You Up", "duration": 212}


@pytest.fixture
def transport(make_transport):
    return make_transport({
        IMAGE_URL: (200, b"\x89PNG fake", {"Content-Type": "image/png"}),
    })


@pytest.fixture
def client(settings, transport):
    return TestClient(create_app(settings, transport=transport))


class TestMissingUrl:
    """A missing URL is the only 400, and the tool never runs."""

    def test_get_without_url(self, client):
        with patch("subprocess.run") as run:
            response = client.get("/ytdl")

        assert response.status_code == 400
        assert response.json() == {"error": "URL query parameter is required"}
        run.assert_not_called()

    def test_get_with_empty_url(self, client):
        response = client.get("/ytdl", params={"url": ""})

        assert response.status_code == 400

    @pytest.mark.parametrize("body", [
        b"",
        b"{}",
        b'{"url": ""}',
        b'{"url": 42}',
        b'["https://example.test"]',
        b"not json",
    ])
    def test_post_without_url(self, client, body):
        with patch("subprocess.run") as run:
            response = client.post(
                "/ytdl",
                content=body,
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required in the request body"}
        run.assert_not_called()


@posix_only
class TestExtraction:
    """Stub tools already provisioned on disk."""

    def test_get_success(self, client, locations):
        write_stub_tool(locations.binary_path, f"echo '{json.dumps(VIDEO_INFO)}'")

        response = client.get("/ytdl", params={"url": TARGET})

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": VIDEO_INFO}

    def test_post_success(self, client, locations):
        write_stub_tool(locations.binary_path, f"echo '{json.dumps(VIDEO_INFO)}'")

        response = client.post("/ytdl", json={"url": TARGET})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["data"] == VIDEO_INFO

    def test_stderr_is_failure(self, client, locations):
        write_stub_tool(locations.binary_path, "echo '{}'; echo 'WARNING: something' >&2")

        response = client.get("/ytdl", params={"url": TARGET})

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "WARNING: something" in body["error"]

    def test_non_json_is_failure(self, client, locations):
        write_stub_tool(locations.binary_path, "echo 'garbage'")

        response = client.post("/ytdl", json={"url": TARGET})

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert response.json()["error"].startswith("Failed to parse JSON")

    def test_non_zero_exit_is_failure(self, client, locations):
        write_stub_tool(locations.binary_path, "exit 2")

        response = client.get("/ytdl", params={"url": TARGET})

        assert response.status_code == 500
        assert "exited with code 2" in response.json()["error"]

    def test_non_standard_json_is_parse_failure(self, client, locations):
        write_stub_tool(locations.binary_path, """echo '{"duration": NaN}'""")

        response = client.get("/ytdl", params={"url": TARGET})

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Failed to parse JSON")

    def test_option_like_url_is_failure(self, client, locations):
        write_stub_tool(locations.binary_path, "echo '{}'")

        response = client.post("/ytdl", json={"url": "--exec=id"})

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert "must not start with" in response.json()["error"]


@posix_only
class TestProvisioningThroughApi:
    """First request downloads the tool, later ones reuse it."""

    def test_binary_downloaded_once(self, settings, make_transport, locations):
        stub = f"#!/bin/sh\necho '{json.dumps(VIDEO_INFO)}'\n".encode()
        transport = make_transport({BINARY_URL: (200, stub)})
        client = TestClient(create_app(settings, transport=transport))

        first = client.get("/ytdl", params={"url": TARGET})
        second = client.post("/ytdl", json={"url": TARGET})

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["data"] == VIDEO_INFO
        assert locations.binary_path.exists()
        assert locations.binary_path.stat().st_mode & 0o111
        assert transport.count(BINARY_URL) == 1

    def test_download_failure_is_500(self, settings, make_transport):
        client = TestClient(create_app(settings, transport=make_transport({BINARY_URL: (502, b"")})))

        response = client.get("/ytdl", params={"url": TARGET})

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert BINARY_URL in response.json()["error"]


class TestImageProxy:
    def test_relays_with_jpeg_label(self, client):
        response = client.get("/proxy", params={"url": IMAGE_URL})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert response.content == b"\x89PNG fake"

    def test_unreachable_upstream(self, client):
        response = client.get("/proxy", params={"url": "https://unreachable.test/a.jpg"})

        assert response.status_code == 500
        assert response.text == "Error fetching image"
        assert response.headers["content-type"].startswith("text/plain")

    def test_missing_url(self, client):
        response = client.get("/proxy")

        assert response.status_code == 500
        assert response.text == "Error fetching image"


class TestPages:
    def test_home(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "ytdl-api" in response.text

    def test_docs(self, client):
        response = client.get("/docs")

        assert response.status_code == 200
        assert "/proxy" in response.text
        assert "/ytdl" in response.text

    def test_health(self, client, locations):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "assets": {"binary": False, "cookies": False},
        }

    def test_public_files_served(self, settings, transport):
        settings.public_dir.mkdir(parents=True)
        (settings.public_dir / "app.js").write_text("console.log('hi');")
        client = TestClient(create_app(settings, transport=transport))

        response = client.get("/app.js")

        assert response.status_code == 200
        assert "console.log" in response.text
        # Routes still win over the static mount
        assert client.get("/health").status_code == 200
