from content_duplicator.model.records import (
    ClonedRecord,
    ContentType,
    ContentTypeCatalogue,
    ContentTypeField,
    FieldMap,
    Link,
    Record,
)

__all__ = [
    "ClonedRecord",
    "ContentType",
    "ContentTypeCatalogue",
    "ContentTypeField",
    "FieldMap",
    "Link",
    "Record",
]
