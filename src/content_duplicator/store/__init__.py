"""Content store implementations."""

from content_duplicator.store.contentful import ContentfulEnvironment

__all__ = ["ContentfulEnvironment"]
