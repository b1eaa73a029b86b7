from content_duplicator.core.enums import CloneOutcome, CycleStrategy, FieldRole, LinkType
from content_duplicator.core.exceptions import (
    ContentDuplicatorConfigurationError,
    ContentDuplicatorException,
    ContentStoreError,
    DuplicationCycleError,
    PublishError,
    RecordCreationError,
    RecordNotFound,
)

__all__ = [
    "CloneOutcome",
    "ContentDuplicatorConfigurationError",
    "ContentDuplicatorException",
    "ContentStoreError",
    "CycleStrategy",
    "DuplicationCycleError",
    "FieldRole",
    "LinkType",
    "PublishError",
    "RecordCreationError",
    "RecordNotFound",
]
