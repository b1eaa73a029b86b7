"""
Enumeration classes used throughout the content_duplicator package.
"""

from enum import Enum

from content_duplicator.core.constants import ASSET_TYPE, ENTRY_TYPE


class BaseStrEnum(str, Enum):
    """Base class for string enums in Python 3.10"""
    pass


class LinkType(BaseStrEnum):
    """Kind of record a link points at.

    Attributes:
        entry: Structured content typed by a content type.
        asset: File-backed record.
    """
    entry = ENTRY_TYPE
    asset = ASSET_TYPE


class FieldRole(Enum):
    """How the duplication engine treats a field."""
    name = "name"
    title = "title"
    slug = "slug"
    asset_file = "asset_file"
    generic = "generic"

    @property
    def is_naming(self) -> bool:
        return self in (FieldRole.name, FieldRole.title, FieldRole.slug)


class CycleStrategy(BaseStrEnum):
    """What to do when a link points back at a record still being duplicated."""
    fail = "fail"  # Raise DuplicationCycleError
    link_original = "link-original"  # Keep the link pointing at the source record


class CloneOutcome(BaseStrEnum):
    """Final state of a record visited during a run."""
    published = "published"
    draft = "draft"
    reused = "reused"
    excluded = "excluded"
