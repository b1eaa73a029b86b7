"""
Pydantic models for the records exchanged with a content store.

Records are parsed from Content Management API payloads of the form::

    {"sys": {"id": "...", "type": "Entry", "version": 3, "publishedVersion": 2,
             "contentType": {"sys": {"id": "article"}}},
     "fields": {"title": {"en-US": "Hello"}}}
"""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field

from content_duplicator.core.constants import ARRAY_TYPE, LINK_TYPE
from content_duplicator.core.enums import CloneOutcome, LinkType
from content_duplicator.core.validation import RECORD_CONFIG

# Localized field map: field id -> locale -> value
FieldMap = dict[str, dict[str, Any]]


class Link(BaseModel):
    """A typed reference to another record."""

    model_config = ConfigDict(frozen=True)

    id: str
    link_type: LinkType = LinkType.entry

    @classmethod
    def from_value(cls, value: Any) -> Link | None:
        """Return the link embedded in a field value, or None if the value is not a link."""
        if not isinstance(value, dict):
            return None
        sys = value.get("sys")
        if not isinstance(sys, dict) or sys.get("type") != LINK_TYPE:
            return None
        return cls(id=sys["id"], link_type=LinkType(sys.get("linkType", LinkType.entry.value)))

    def to_value(self) -> dict[str, Any]:
        return {"sys": {"type": LINK_TYPE, "linkType": self.link_type.value, "id": self.id}}


class Record(BaseModel):
    """An entry or asset fetched from, or created in, an environment.

    Attributes:
        id: Store-assigned identifier.
        type: Entry or Asset.
        fields: Localized field map.
        content_type_id: Content type of an entry; None for assets.
        version: Current version, needed for process and publish calls.
        published_version: Version that was last published, None for drafts.
    """

    model_config = RECORD_CONFIG

    id: str
    type: LinkType
    fields: FieldMap = Field(default_factory=dict)
    content_type_id: str | None = None
    version: int | None = None
    published_version: int | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Record:
        sys = payload["sys"]
        content_type = sys.get("contentType")
        return cls(
            id=sys["id"],
            type=LinkType(sys["type"]),
            fields=payload.get("fields") or {},
            content_type_id=content_type["sys"]["id"] if content_type else None,
            version=sys.get("version"),
            published_version=sys.get("publishedVersion"),
        )

    @property
    def is_published(self) -> bool:
        return self.published_version is not None

    @property
    def is_asset(self) -> bool:
        return self.type == LinkType.asset

    def link(self) -> Link:
        return Link(id=self.id, link_type=self.type)


class ContentTypeField(BaseModel):
    """One field declaration of a content type."""

    model_config = RECORD_CONFIG

    id: str
    name: str | None = None
    type: str | None = None
    link_type: str | None = Field(default=None, alias="linkType")
    items: dict[str, Any] | None = None
    required: bool = False

    @property
    def item_link_type(self) -> str | None:
        """Link type of array items, for fields of type Array."""
        if self.type == ARRAY_TYPE and self.items:
            return self.items.get("linkType")
        return None

    @property
    def links_to_assets(self) -> bool:
        return LinkType.asset.value in (self.link_type, self.item_link_type)


class ContentType(BaseModel):
    """Schema of an entry type."""

    model_config = RECORD_CONFIG

    id: str
    name: str | None = None
    display_field: str | None = None
    fields: list[ContentTypeField] = Field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ContentType:
        return cls(
            id=payload["sys"]["id"],
            name=payload.get("name"),
            display_field=payload.get("displayField"),
            fields=[ContentTypeField.model_validate(f) for f in payload.get("fields", [])],
        )

    def required_asset_fields(self) -> Iterator[ContentTypeField]:
        return (f for f in self.fields if f.required and f.links_to_assets)


class ContentTypeCatalogue(BaseModel):
    """The content types of one environment."""

    items: list[ContentType] = Field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ContentTypeCatalogue:
        return cls(items=[ContentType.from_api(item) for item in payload.get("items", [])])

    def find(self, content_type_id: str) -> ContentType | None:
        return next((ct for ct in self.items if ct.id == content_type_id), None)


class ClonedRecord(BaseModel):
    """Reference to the clone produced for one source record.

    Attributes:
        original_id: Identifier of the source record.
        id: Identifier of the clone in the target environment.
        type: Entry or Asset.
        outcome: Whether the clone was published, left as draft, or reused
            from an earlier duplication.
        record: The clone as returned by the target store. None when reused.
    """

    original_id: str
    id: str
    type: LinkType
    outcome: CloneOutcome
    record: Record | None = None
