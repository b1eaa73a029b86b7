"""
Pytest configuration and shared fixtures.

The duplication tests run against FakeContentStore, an in-memory environment
implementing the ContentStore protocol. Records are built with the
`make_entry`, `make_asset` and `link` fixtures.
"""

import copy
import itertools
from typing import Any

import pytest

from content_duplicator.core.enums import LinkType
from content_duplicator.core.exceptions import RecordCreationError, RecordNotFound
from content_duplicator.core.logging_config import get_logger
from content_duplicator.model.records import ContentType, ContentTypeCatalogue, Record


class FakeContentStore:
    """In-memory environment recording every create, process and publish call."""

    def __init__(self, records: list[Record] = (), content_types: list[ContentType] = (), id_prefix: str = "new"):
        self.records: dict[tuple[LinkType, str], Record] = {}
        self.content_types = list(content_types)
        self.created: list[Record] = []
        self.processed: list[str] = []
        self.published: list[str] = []
        self.fetched: list[str] = []
        self.reject_content_types: set[str] = set()
        self._ids = (f"{id_prefix}-{n}" for n in itertools.count(1))
        for record in records:
            self.add(record)

    def add(self, record: Record) -> Record:
        self.records[(record.type, record.id)] = record
        return record

    def _get(self, record_id: str, link_type: LinkType) -> Record:
        self.fetched.append(record_id)
        try:
            return self.records[(link_type, record_id)]
        except KeyError:
            raise RecordNotFound(record_id, link_type.value)

    def get_entry(self, entry_id: str) -> Record:
        return self._get(entry_id, LinkType.entry)

    def get_asset(self, asset_id: str) -> Record:
        return self._get(asset_id, LinkType.asset)

    def create_entry(self, content_type_id: str, fields: dict[str, Any]) -> Record:
        if content_type_id in self.reject_content_types:
            raise RecordCreationError(f"Validation error for content type {content_type_id}", status_code=422)
        record = Record(
            id=next(self._ids),
            type=LinkType.entry,
            fields=copy.deepcopy(fields),
            content_type_id=content_type_id,
            version=1,
        )
        self.created.append(record)
        return self.add(record)

    def create_asset(self, fields: dict[str, Any]) -> Record:
        record = Record(id=next(self._ids), type=LinkType.asset, fields=copy.deepcopy(fields), version=1)
        self.created.append(record)
        return self.add(record)

    def process_for_all_locales(self, asset: Record) -> Record:
        self.processed.append(asset.id)
        files = {
            locale: {k: v for k, v in value.items() if k != "upload"} | {"url": value.get("upload")}
            for locale, value in asset.fields.get("file", {}).items()
        }
        processed = asset.model_copy(update={"fields": {**asset.fields, "file": files}, "version": asset.version + 1})
        return self.add(processed)

    def publish(self, record: Record) -> Record:
        self.published.append(record.id)
        return self.add(record.model_copy(update={"published_version": record.version}))

    def is_published(self, record: Record) -> bool:
        return record.is_published

    def get_content_types(self) -> ContentTypeCatalogue:
        return ContentTypeCatalogue(items=self.content_types)


@pytest.fixture
def link():
    """Build a link field value."""

    def _link(record_id: str, link_type: str = "Entry") -> dict[str, Any]:
        return {"sys": {"type": "Link", "linkType": link_type, "id": record_id}}

    return _link


@pytest.fixture
def make_entry():
    """Build a source entry. Plain field values are localized under 'en-US'."""

    def _make_entry(record_id: str, content_type: str = "page", published: bool = True, **fields: Any) -> Record:
        return Record(
            id=record_id,
            type=LinkType.entry,
            content_type_id=content_type,
            fields={name: {"en-US": value} for name, value in fields.items()},
            version=2,
            published_version=1 if published else None,
        )

    return _make_entry


@pytest.fixture
def make_asset():
    """Build a source asset with a processed file."""

    def _make_asset(record_id: str, title: str = "Image", published: bool = True) -> Record:
        return Record(
            id=record_id,
            type=LinkType.asset,
            fields={
                "title": {"en-US": title},
                "file": {
                    "en-US": {
                        "url": f"//images.example.net/{record_id}.png",
                        "fileName": f"{record_id}.png",
                        "contentType": "image/png",
                        "details": {"size": 1024, "image": {"width": 10, "height": 10}},
                    }
                },
            },
            version=3,
            published_version=2 if published else None,
        )

    return _make_asset


@pytest.fixture
def page_type():
    """A content type with no required asset field."""
    return ContentType.model_validate(
        {
            "id": "page",
            "fields": [
                {"id": "title", "type": "Symbol", "required": True},
                {"id": "children", "type": "Array", "items": {"type": "Link", "linkType": "Entry"}},
            ],
        }
    )


@pytest.fixture
def hero_type():
    """A content type whose 'image' field is a required asset link."""
    return ContentType.model_validate(
        {
            "id": "hero",
            "fields": [
                {"id": "title", "type": "Symbol", "required": True},
                {"id": "image", "type": "Link", "linkType": "Asset", "required": True},
            ],
        }
    )


@pytest.fixture
def store_factory(page_type, hero_type):
    """Build environments that share the page and hero content types."""

    def _store_factory(records: list[Record] = (), id_prefix: str = "new") -> FakeContentStore:
        return FakeContentStore(records=records, content_types=[page_type, hero_type], id_prefix=id_prefix)

    return _store_factory


@pytest.fixture
def store(store_factory):
    """An empty environment used as both source and target."""
    return store_factory()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by configure_logging so they do not outlive a captured stream."""
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
