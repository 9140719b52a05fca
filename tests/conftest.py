"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, including
an in-memory stand-in for the catalog service's HTTP API.
"""

import copy
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import pytest
import requests
from linkbridge.catalog.client import CatalogClient


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = "OK" if status_code < 400 else "Error"

    def json(self) -> Any:
        if self._payload is None:
            msg = "No JSON body"
            raise ValueError(msg)
        return self._payload


class FakeCatalogSession:
    """In-memory catalog service answering the virtual folder endpoints.

    Attributes:
        folders: Folder records in the service's wire format.
        calls: (method, path, params) per request received.
        failing_paths: Request paths that answer with HTTP 500.
        unreachable: When True every request raises ConnectionError.
        refreshes: Number of accepted refresh requests.
    """

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.folders: list[dict[str, Any]] = []
        self.calls: list[tuple[str, str, dict[str, str] | None]] = []
        self.failing_paths: set[str] = set()
        self.unreachable = False
        self.refreshes = 0

    def request(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> FakeResponse:
        path = urlsplit(url).path
        self.calls.append((method, path, params))

        if self.unreachable:
            raise requests.exceptions.ConnectionError("Connection refused")
        if path in self.failing_paths:
            return FakeResponse(500, text="internal error")

        if method == "GET" and path == "/Library/VirtualFolders":
            return FakeResponse(200, copy.deepcopy(self.folders))

        if method == "POST" and path == "/Library/VirtualFolders":
            assert params is not None
            self.folders.append(
                {
                    "Name": params["name"],
                    "Locations": [],
                    "CollectionType": params["collectionType"],
                    "ItemId": f"id-{len(self.folders)}",
                }
            )
            return FakeResponse(204)

        if method == "POST" and path == "/Library/VirtualFolders/Paths":
            assert params is not None
            for folder in self.folders:
                if folder["Name"] == params["name"]:
                    folder["Locations"].append(params["path"])
                    return FakeResponse(204)
            return FakeResponse(400, text="folder not found")

        if method == "POST" and path == "/Library/Refresh":
            self.refreshes += 1
            return FakeResponse(204)

        return FakeResponse(404, text="not found")

    def count_calls(self, method: str, path: str) -> int:
        """Count requests received for a method and path."""
        return sum(1 for m, p, _ in self.calls if m == method and p == path)


@pytest.fixture
def catalog_session() -> FakeCatalogSession:
    """Empty in-memory catalog service."""
    return FakeCatalogSession()


@pytest.fixture
def catalog_client(catalog_session: FakeCatalogSession) -> CatalogClient:
    """CatalogClient talking to the in-memory catalog, without settle delays."""
    return CatalogClient(
        "http://catalog.test",
        "secret-token",
        session=catalog_session,  # type: ignore[arg-type]
        sleep=lambda _seconds: None,
    )


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    """A media file at <tmp>/media/movies/M.mkv."""
    source = tmp_path / "media" / "movies" / "M.mkv"
    source.parent.mkdir(parents=True)
    source.write_bytes(b"\x1a\x45\xdf\xa3")
    return source


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Link directory path (not created)."""
    return tmp_path / "out"
