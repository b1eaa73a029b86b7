"""Duplicate entries and assets of a structured-content store, with the records they link to."""

from content_duplicator.core import (
    CloneOutcome,
    ContentDuplicatorConfigurationError,
    ContentDuplicatorException,
    ContentStoreError,
    CycleStrategy,
    DuplicationCycleError,
    FieldRole,
    LinkType,
    PublishError,
    RecordCreationError,
    RecordNotFound,
)
from content_duplicator.duplicate import (
    DuplicationContext,
    DuplicationEngine,
    DuplicationReport,
    NamingRules,
    can_publish,
    duplicate_entry,
    duplicate_records,
)
from content_duplicator.interfaces import ContentStore
from content_duplicator.model import ClonedRecord, ContentType, ContentTypeCatalogue, Link, Record
from content_duplicator.store import ContentfulEnvironment

__all__ = [
    "ClonedRecord",
    "CloneOutcome",
    "ContentDuplicatorConfigurationError",
    "ContentDuplicatorException",
    "ContentStore",
    "ContentStoreError",
    "ContentType",
    "ContentTypeCatalogue",
    "ContentfulEnvironment",
    "CycleStrategy",
    "DuplicationContext",
    "DuplicationCycleError",
    "DuplicationEngine",
    "DuplicationReport",
    "FieldRole",
    "Link",
    "LinkType",
    "NamingRules",
    "PublishError",
    "Record",
    "RecordCreationError",
    "RecordNotFound",
    "can_publish",
    "duplicate_entry",
    "duplicate_records",
]
