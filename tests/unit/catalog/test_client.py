"""Unit tests for CatalogClient.

Tests run against an in-memory catalog service (see conftest.py) that
records every request.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest
from linkbridge.catalog.client import DEFAULT_LIBRARY_OPTIONS, TOKEN_HEADER, CatalogClient
from linkbridge.catalog.models import EnsureOutcome
from linkbridge.core.config import CatalogConfig
from linkbridge.core.errors import CatalogOperationError, CatalogUnavailableError

FOLDERS = "/Library/VirtualFolders"
PATHS = "/Library/VirtualFolders/Paths"
REFRESH = "/Library/Refresh"


class TestClientSetup:
    """Tests for client construction."""

    def test_token_header_is_set(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """The API token is sent on the session."""
        assert catalog_session.headers[TOKEN_HEADER] == "secret-token"

    def test_trailing_slash_is_stripped(self, catalog_session: Any) -> None:
        """Base URL never ends in a slash."""
        client = CatalogClient("http://catalog.test/", "k", session=catalog_session)

        assert client.base_url == "http://catalog.test"

    def test_empty_token_is_not_sent(self, catalog_session: Any) -> None:
        """No token header is added without an API key."""
        CatalogClient("http://catalog.test", "", session=catalog_session)

        assert TOKEN_HEADER not in catalog_session.headers

    def test_from_config(self) -> None:
        """from_config applies URL and timeouts from the config section."""
        client = CatalogClient.from_config(
            CatalogConfig(url="http://jellyfin:8096", api_key="k", timeout_seconds=5)
        )

        assert client.base_url == "http://jellyfin:8096"
        assert client._timeout == 5  # pyright: ignore[reportPrivateUsage]

    def test_requests_use_timeout(self) -> None:
        """Every request carries the configured timeout."""
        session = MagicMock()
        session.headers = {}
        session.request.return_value.status_code = 204
        client = CatalogClient("http://catalog.test", "k", timeout=7.5, session=session)

        client.refresh_library()

        session.request.assert_called_once_with(
            "POST",
            "http://catalog.test/Library/Refresh",
            params=None,
            json=None,
            timeout=7.5,
        )


class TestGetFolders:
    """Tests for CatalogClient.get_folders."""

    def test_empty(self, catalog_client: CatalogClient) -> None:
        """An empty service has no folders."""
        assert catalog_client.get_folders() == []

    def test_parses_folders(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """Folders are returned as CatalogFolder models."""
        catalog_session.folders.append(
            {"Name": "Movies", "Locations": ["/media/movies"], "CollectionType": "movies"}
        )

        folders = catalog_client.get_folders()

        assert len(folders) == 1
        assert folders[0].name == "Movies"
        assert folders[0].locations == ["/media/movies"]

    def test_server_error(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """Non-2xx answers raise CatalogUnavailableError with status and body."""
        catalog_session.failing_paths.add(FOLDERS)

        with pytest.raises(CatalogUnavailableError, match="500 Error - internal error"):
            catalog_client.get_folders()

    def test_unreachable(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """Transport errors raise CatalogUnavailableError."""
        catalog_session.unreachable = True

        with pytest.raises(CatalogUnavailableError, match="Connection refused"):
            catalog_client.get_folders()

    def test_unexpected_body(self) -> None:
        """A body that is not a folder list is rejected."""
        session = MagicMock()
        session.headers = {}
        session.request.return_value.status_code = 200
        session.request.return_value.json.return_value = {"Items": []}
        client = CatalogClient("http://catalog.test", "k", session=session)

        with pytest.raises(CatalogUnavailableError, match="Invalid virtual folder response"):
            client.get_folders()


class TestMutations:
    """Tests for create_folder, add_path and refresh_library."""

    def test_create_folder_sends_options(self) -> None:
        """Folder creation passes name, type and library options."""
        session = MagicMock()
        session.headers = {}
        session.request.return_value.status_code = 204
        client = CatalogClient("http://catalog.test", "k", session=session)

        client.create_folder("Leaving Soon", "mixed")

        _, kwargs = session.request.call_args
        assert kwargs["params"] == {
            "name": "Leaving Soon",
            "collectionType": "mixed",
            "refreshLibrary": "true",
        }
        assert kwargs["json"] == {"LibraryOptions": DEFAULT_LIBRARY_OPTIONS}

    def test_create_folder_rejected(
        self, catalog_client: CatalogClient, catalog_session: Any
    ) -> None:
        """A rejected creation raises CatalogOperationError."""
        catalog_session.failing_paths.add(FOLDERS)

        with pytest.raises(CatalogOperationError, match="Failed to create virtual folder"):
            catalog_client.create_folder("Leaving Soon", "mixed")

    def test_add_path_to_unknown_folder(self, catalog_client: CatalogClient) -> None:
        """The service's 400 for an unknown folder is surfaced."""
        with pytest.raises(CatalogOperationError, match="400"):
            catalog_client.add_path("Nope", "/srv/out")

    def test_refresh(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """A refresh request is accepted."""
        catalog_client.refresh_library()

        assert catalog_session.refreshes == 1

    def test_refresh_unreachable(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """Transport errors during refresh raise CatalogOperationError."""
        catalog_session.unreachable = True

        with pytest.raises(CatalogOperationError):
            catalog_client.refresh_library()


class TestEnsureFolder:
    """Tests for CatalogClient.ensure_folder."""

    def test_creates_folder_and_adds_path(
        self, catalog_client: CatalogClient, catalog_session: Any
    ) -> None:
        """A missing folder is created, then the path is added."""
        outcome = catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")

        assert outcome.folder_created is True
        assert outcome.path_added is True
        assert catalog_session.folders == [
            {
                "Name": "Leaving Soon",
                "Locations": ["/srv/out"],
                "CollectionType": "mixed",
                "ItemId": "id-0",
            }
        ]

    def test_waits_after_creating(self, catalog_session: Any) -> None:
        """The settle interval is slept once after folder creation."""
        sleep = MagicMock()
        client = CatalogClient(
            "http://catalog.test", "k", settle_seconds=2.0, session=catalog_session, sleep=sleep
        )

        client.ensure_folder("Leaving Soon", "mixed", "/srv/out")
        client.ensure_folder("Leaving Soon", "mixed", "/srv/out")

        sleep.assert_called_once_with(2.0)

    def test_is_idempotent(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """A second ensure changes nothing and only lists folders."""
        catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")
        outcome = catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")

        assert outcome.changed is False
        assert len(catalog_session.folders) == 1
        assert catalog_session.folders[0]["Locations"] == ["/srv/out"]
        assert catalog_session.count_calls("POST", FOLDERS) == 1
        assert catalog_session.count_calls("POST", PATHS) == 1

    def test_matches_existing_folder_case_insensitively(
        self, catalog_client: CatalogClient, catalog_session: Any
    ) -> None:
        """An existing folder with different casing is reused and extended."""
        catalog_session.folders.append({"Name": "leaving soon", "Locations": []})

        outcome = catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")

        assert outcome == EnsureOutcome(folder_created=False, path_added=True)
        assert catalog_session.count_calls("POST", FOLDERS) == 0
        assert len(catalog_session.folders) == 1
        assert catalog_session.folders[0]["Locations"] == ["/srv/out"]

    def test_path_is_added_under_existing_spelling(
        self, catalog_client: CatalogClient, catalog_session: Any
    ) -> None:
        """The add-path request names the folder as the service spells it."""
        catalog_session.folders.append({"Name": "leaving soon", "Locations": []})

        catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")

        paths_params = [params for _, path, params in catalog_session.calls if path == PATHS]
        assert paths_params == [
            {"name": "leaving soon", "path": "/srv/out", "refreshLibrary": "true"}
        ]

    def test_equivalent_location_is_not_added_again(
        self, catalog_client: CatalogClient, catalog_session: Any
    ) -> None:
        """A location spelled differently but equal after normalization is kept."""
        catalog_session.folders.append({"Name": "Leaving Soon", "Locations": ["/srv//out/."]})

        outcome = catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")

        assert outcome.changed is False
        assert catalog_session.count_calls("POST", PATHS) == 0

    def test_adds_second_path_to_existing_folder(
        self, catalog_client: CatalogClient, catalog_session: Any
    ) -> None:
        """A new path is appended to an existing folder."""
        catalog_session.folders.append({"Name": "Leaving Soon", "Locations": ["/srv/a"]})

        outcome = catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/b")

        assert outcome == EnsureOutcome(folder_created=False, path_added=True)
        assert catalog_session.folders[0]["Locations"] == ["/srv/a", "/srv/b"]

    def test_list_failure_stops_early(
        self, catalog_client: CatalogClient, catalog_session: Any
    ) -> None:
        """No mutation is attempted when folders cannot be listed."""
        catalog_session.failing_paths.add(FOLDERS)

        with pytest.raises(CatalogUnavailableError):
            catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")

        assert catalog_session.count_calls("POST", PATHS) == 0

    def test_add_path_failure(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """A rejected path addition raises CatalogOperationError."""
        catalog_session.folders.append({"Name": "Leaving Soon", "Locations": []})
        catalog_session.failing_paths.add(PATHS)

        with pytest.raises(CatalogOperationError, match="Failed to add media path"):
            catalog_client.ensure_folder("Leaving Soon", "mixed", "/srv/out")


class TestPing:
    """Tests for CatalogClient.ping."""

    def test_reachable(self, catalog_client: CatalogClient) -> None:
        """ping is True when folders can be listed."""
        assert catalog_client.ping() is True

    def test_unreachable(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """ping is False on transport errors."""
        catalog_session.unreachable = True

        assert catalog_client.ping() is False

    def test_server_error(self, catalog_client: CatalogClient, catalog_session: Any) -> None:
        """ping is False on non-2xx answers."""
        catalog_session.failing_paths.add(FOLDERS)

        assert catalog_client.ping() is False
