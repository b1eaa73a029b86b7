"""Content store backed by the Contentful Content Management API.

Each :class:`ContentfulEnvironment` addresses one environment of one space::

    https://api.contentful.com/spaces/{space_id}/environments/{environment}/...

Calls are plain blocking HTTP requests made through a ``requests.Session``. No
retry is attempted: any failure is raised as a :class:`ContentStoreError`
subclass and ends the duplication run.
"""

from __future__ import annotations

import os
import time
from typing import Any

import requests

from content_duplicator.core.constants import (
    CONTENT_TYPE_PAGE_LIMIT,
    DEFAULT_API_URL,
    DEFAULT_ENVIRONMENT,
    FIELD_FILE,
    FILE_URL,
    MANAGEMENT_MEDIA_TYPE,
    TOKEN_ENV_VAR,
)
from content_duplicator.core.enums import LinkType
from content_duplicator.core.exceptions import (
    ContentDuplicatorConfigurationError,
    ContentStoreError,
    PublishError,
    RecordCreationError,
    RecordNotFound,
)
from content_duplicator.core.logging_config import LoggerMixin
from content_duplicator.model.records import ContentTypeCatalogue, FieldMap, Record

_COLLECTIONS = {LinkType.entry: "entries", LinkType.asset: "assets"}


def _error_message(response: requests.Response) -> str:
    """Extract a readable message from an API error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return response.text or f"HTTP {response.status_code}: {response.reason}"
    error_id = (body.get("sys") or {}).get("id")
    message = body.get("message") or response.reason
    return f"{error_id}: {message}" if error_id else str(message)


class ContentfulEnvironment(LoggerMixin):
    """One environment of a Contentful space.

    Args:
        space_id: Space identifier.
        environment: Environment identifier. Defaults to 'master'.
        token: Content Management API token. Defaults to the
            CONTENTFUL_MANAGEMENT_TOKEN environment variable.
        api_url: Base url of the Content Management API.
        session: Session to issue requests with. A new one is created if None.
        timeout: Seconds to wait for each HTTP response.
        process_wait: Seconds between checks while an asset is being processed.
        process_attempts: Number of checks before asset processing is
            considered failed.

    Raises:
        ContentDuplicatorConfigurationError: No token was given or found.

    Example:
        >>> source = ContentfulEnvironment("my-space", "master")
        >>> entry = source.get_entry("5KsDBWseXY6QegucYAoacS")
    """

    def __init__(
        self,
        space_id: str,
        environment: str = DEFAULT_ENVIRONMENT,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        process_wait: float = 0.5,
        process_attempts: int = 10,
    ):
        token = token or os.environ.get(TOKEN_ENV_VAR)
        if not token:
            raise ContentDuplicatorConfigurationError(
                f"No management token given and {TOKEN_ENV_VAR} is not set"
            )
        self.space_id = space_id
        self.environment = environment
        self.base_url = f"{api_url.rstrip('/')}/spaces/{space_id}/environments/{environment}"
        self.timeout = timeout
        self.process_wait = process_wait
        self.process_attempts = process_attempts
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": MANAGEMENT_MEDIA_TYPE,
            }
        )

    def __repr__(self) -> str:
        return f"ContentfulEnvironment(space_id={self.space_id!r}, environment={self.environment!r})"

    def _request(
        self,
        method: str,
        path: str,
        error: type[ContentStoreError] = ContentStoreError,
        **kwargs: Any,
    ) -> dict[str, Any]:
        url = f"{self.base_url}/{path}"
        self._logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise error(
                f"{method} {path} failed: {_error_message(e.response)}",
                status_code=e.response.status_code,
            ) from e
        except requests.RequestException as e:
            raise error(f"{method} {path} failed: {e}") from e
        return response.json() if response.content else {}

    def _get_record(self, record_id: str, link_type: LinkType) -> Record:
        try:
            payload = self._request("GET", f"{_COLLECTIONS[link_type]}/{record_id}")
        except ContentStoreError as e:
            if e.status_code == 404:
                raise RecordNotFound(record_id, link_type.value, str(e)) from e
            raise
        return Record.from_api(payload)

    def get_entry(self, entry_id: str) -> Record:
        return self._get_record(entry_id, LinkType.entry)

    def get_asset(self, asset_id: str) -> Record:
        return self._get_record(asset_id, LinkType.asset)

    def create_entry(self, content_type_id: str, fields: FieldMap) -> Record:
        payload = self._request(
            "POST",
            "entries",
            error=RecordCreationError,
            headers={"X-Contentful-Content-Type": content_type_id},
            json={"fields": fields},
        )
        return Record.from_api(payload)

    def create_asset(self, fields: FieldMap) -> Record:
        payload = self._request("POST", "assets", error=RecordCreationError, json={"fields": fields})
        return Record.from_api(payload)

    def process_for_all_locales(self, asset: Record) -> Record:
        """Ask the store to process the uploaded file of every locale and wait until done.

        Processing is asynchronous on the server side. The asset is fetched again
        until each processed locale exposes a ``url``.

        Raises:
            RecordCreationError: A process call failed or processing did not
                finish within `process_attempts` checks.
        """
        locales = list((asset.fields.get(FIELD_FILE) or {}).keys())
        for locale in locales:
            self._request(
                "PUT",
                f"assets/{asset.id}/files/{locale}/process",
                error=RecordCreationError,
                headers={"X-Contentful-Version": str(asset.version)},
            )

        for _ in range(self.process_attempts):
            processed = self.get_asset(asset.id)
            files = processed.fields.get(FIELD_FILE) or {}
            if all(FILE_URL in (files.get(locale) or {}) for locale in locales):
                return processed
            time.sleep(self.process_wait)
        raise RecordCreationError(f"Processing of asset {asset.id} did not finish for locales {locales}")

    def publish(self, record: Record) -> Record:
        payload = self._request(
            "PUT",
            f"{_COLLECTIONS[record.type]}/{record.id}/published",
            error=PublishError,
            headers={"X-Contentful-Version": str(record.version)},
        )
        return Record.from_api(payload)

    def is_published(self, record: Record) -> bool:
        return record.is_published

    def get_content_types(self) -> ContentTypeCatalogue:
        items = []
        skip = 0
        while True:
            payload = self._request(
                "GET", "content_types", params={"limit": CONTENT_TYPE_PAGE_LIMIT, "skip": skip}
            )
            page = payload.get("items", [])
            items.extend(page)
            skip += len(page)
            if not page or skip >= payload.get("total", 0):
                break
        return ContentTypeCatalogue.from_api({"items": items})
