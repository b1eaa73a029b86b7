"""Recursive record duplication."""

from content_duplicator.duplicate.context import DuplicationContext
from content_duplicator.duplicate.engine import DuplicationEngine, duplicate_entry, duplicate_records
from content_duplicator.duplicate.fields import (
    NamingRules,
    field_role,
    iter_array_links,
    normalize_asset_file,
    rename_field,
)
from content_duplicator.duplicate.publish import can_publish
from content_duplicator.duplicate.report import DuplicationIssue, DuplicationReport, IssueSeverity

__all__ = [
    "DuplicationContext",
    "DuplicationEngine",
    "DuplicationIssue",
    "DuplicationReport",
    "IssueSeverity",
    "NamingRules",
    "can_publish",
    "duplicate_entry",
    "duplicate_records",
    "field_role",
    "iter_array_links",
    "normalize_asset_file",
    "rename_field",
]
