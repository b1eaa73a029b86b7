"""Tests for the Content Management API store.

The requests session is replaced by a MagicMock so no HTTP traffic happens.
"""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest
import requests

from content_duplicator.core.enums import LinkType
from content_duplicator.core.exceptions import (
    ContentDuplicatorConfigurationError,
    ContentStoreError,
    PublishError,
    RecordCreationError,
    RecordNotFound,
)
from content_duplicator.model.records import Record
from content_duplicator.store.contentful import ContentfulEnvironment

BASE = "https://api.contentful.com/spaces/space/environments/master"


def _response(payload: dict | None = None, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = b"{}" if payload is not None else b""
    response.json.return_value = payload
    response.reason = "Error"
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    return response


def _entry_payload(entry_id: str = "e1", version: int = 1, published: int | None = None) -> dict:
    sys = {"id": entry_id, "type": "Entry", "version": version, "contentType": {"sys": {"id": "page"}}}
    if published is not None:
        sys["publishedVersion"] = published
    return {"sys": sys, "fields": {"title": {"en-US": "Hello"}}}


def _asset_payload(asset_id: str = "a1", version: int = 1, file_key: str = "upload") -> dict:
    return {
        "sys": {"id": asset_id, "type": "Asset", "version": version},
        "fields": {"file": {"en-US": {file_key: "https://x/a.png", "fileName": "a.png"}}},
    }


@pytest.fixture
def session():
    session = requests.Session()
    session.request = MagicMock()
    return session


@pytest.fixture
def environment(session):
    return ContentfulEnvironment("space", token="secret", session=session, timeout=5, process_wait=0)


class TestConnection:
    def test_headers(self, environment, session):
        assert session.headers["Authorization"] == "Bearer secret"
        assert session.headers["Content-Type"] == "application/vnd.contentful.management.v1+json"
        assert environment.base_url == BASE

    def test_token_from_environment(self, monkeypatch, session):
        monkeypatch.setenv("CONTENTFUL_MANAGEMENT_TOKEN", "from-env")
        ContentfulEnvironment("space", session=session)
        assert session.headers["Authorization"] == "Bearer from-env"

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("CONTENTFUL_MANAGEMENT_TOKEN", raising=False)
        with pytest.raises(ContentDuplicatorConfigurationError):
            ContentfulEnvironment("space")


class TestFetch:
    def test_get_entry(self, environment, session):
        session.request.return_value = _response(_entry_payload(published=1))

        record = environment.get_entry("e1")

        session.request.assert_called_once_with("GET", f"{BASE}/entries/e1", timeout=5)
        assert record.id == "e1"
        assert environment.is_published(record)

    def test_get_asset_not_found(self, environment, session):
        session.request.return_value = _response(
            {"sys": {"type": "Error", "id": "NotFound"}, "message": "The resource could not be found."}, 404
        )

        with pytest.raises(RecordNotFound) as exc_info:
            environment.get_asset("a1")

        assert exc_info.value.record_id == "a1"
        assert exc_info.value.record_type == "Asset"
        assert "NotFound: The resource could not be found." in str(exc_info.value)

    def test_server_error_is_not_not_found(self, environment, session):
        session.request.return_value = _response({"message": "boom"}, 500)

        with pytest.raises(ContentStoreError) as exc_info:
            environment.get_entry("e1")

        assert not isinstance(exc_info.value, RecordNotFound)
        assert exc_info.value.status_code == 500

    def test_error_body_that_is_not_an_object(self, environment, session):
        response = _response(["upstream", "failure"], 502)
        response.text = ""
        session.request.return_value = response

        with pytest.raises(ContentStoreError, match="HTTP 502") as exc_info:
            environment.get_entry("e1")
        assert exc_info.value.status_code == 502

    def test_connection_error(self, environment, session):
        session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ContentStoreError, match="connection refused"):
            environment.get_entry("e1")


class TestCreate:
    def test_create_entry(self, environment, session):
        session.request.return_value = _response(_entry_payload("new"))
        fields = {"title": {"en-US": "Copy of Hello"}}

        record = environment.create_entry("page", fields)

        session.request.assert_called_once_with(
            "POST",
            f"{BASE}/entries",
            timeout=5,
            headers={"X-Contentful-Content-Type": "page"},
            json={"fields": fields},
        )
        assert record.id == "new"
        assert record.content_type_id == "page"

    def test_create_entry_rejected(self, environment, session):
        session.request.return_value = _response({"sys": {"id": "ValidationFailed"}, "message": "Validation error"}, 422)

        with pytest.raises(RecordCreationError, match="ValidationFailed") as exc_info:
            environment.create_entry("page", {})
        assert exc_info.value.status_code == 422

    def test_create_asset(self, environment, session):
        session.request.return_value = _response(_asset_payload())

        record = environment.create_asset({"file": {}})

        assert record.type == LinkType.asset
        assert session.request.call_args == call("POST", f"{BASE}/assets", timeout=5, json={"fields": {"file": {}}})


class TestProcessAndPublish:
    def test_process_for_all_locales(self, environment, session):
        asset = Record.from_api(_asset_payload(version=1))
        session.request.side_effect = [
            _response(_asset_payload(version=2)),  # process en-US
            _response(_asset_payload(version=2)),  # still processing
            _response(_asset_payload(version=3, file_key="url")),
        ]

        processed = environment.process_for_all_locales(asset)

        assert processed.version == 3
        assert session.request.call_args_list[0] == call(
            "PUT",
            f"{BASE}/assets/a1/files/en-US/process",
            timeout=5,
            headers={"X-Contentful-Version": "1"},
        )
        assert session.request.call_count == 3

    def test_process_gives_up(self, session):
        environment = ContentfulEnvironment(
            "space", token="secret", session=session, process_wait=0, process_attempts=2
        )
        asset = Record.from_api(_asset_payload())
        session.request.return_value = _response(_asset_payload(version=2))

        with pytest.raises(RecordCreationError, match="did not finish"):
            environment.process_for_all_locales(asset)

    def test_publish(self, environment, session):
        record = Record.from_api(_entry_payload("new", version=4))
        session.request.return_value = _response(_entry_payload("new", version=5, published=4))

        published = environment.publish(record)

        session.request.assert_called_once_with(
            "PUT", f"{BASE}/entries/new/published", timeout=5, headers={"X-Contentful-Version": "4"}
        )
        assert published.is_published

    def test_publish_rejected(self, environment, session):
        record = Record.from_api(_asset_payload())
        session.request.return_value = _response({"message": "Asset not processed"}, 422)

        with pytest.raises(PublishError, match="Asset not processed"):
            environment.publish(record)


class TestContentTypes:
    def test_pages_are_collected(self, environment, session):
        session.request.side_effect = [
            _response({"total": 3, "items": [{"sys": {"id": "a"}}, {"sys": {"id": "b"}}]}),
            _response({"total": 3, "items": [{"sys": {"id": "c"}}]}),
        ]

        catalogue = environment.get_content_types()

        assert [ct.id for ct in catalogue.items] == ["a", "b", "c"]
        assert session.request.call_args_list[1] == call(
            "GET", f"{BASE}/content_types", timeout=5, params={"limit": 1000, "skip": 2}
        )
