"""Field rewriting rules applied to cloned records.

Everything in this module is pure: functions take values or field maps and
return new ones, with the exception of :meth:`LinkSlot.rewrite` and
:func:`transform_naming_fields`, which update the engine's working copy of a
field map in place.

Field handling is dispatched on :class:`FieldRole`, resolved once per
(record type, field id) by :func:`field_role`:

    - ``name`` / ``title`` / ``slug``: rewritten with :class:`NamingRules`.
    - ``asset_file``: the ``file`` field of an asset, normalized with
      :func:`normalize_asset_file` before creation.
    - ``generic``: copied, with array-valued links followed by the engine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator
from urllib.parse import urlparse

from pydantic import BaseModel

from content_duplicator.core.constants import (
    FIELD_FILE,
    FIELD_NAME,
    FIELD_SLUG,
    FIELD_TITLE,
    FILE_DETAILS,
    FILE_UPLOAD,
    FILE_URL,
    UPLOAD_SCHEME,
)
from content_duplicator.core.enums import FieldRole, LinkType
from content_duplicator.core.validation import STRICT_VALIDATION_CONFIG
from content_duplicator.model.records import FieldMap, Link

_NAMING_ROLES = {
    FIELD_NAME: FieldRole.name,
    FIELD_TITLE: FieldRole.title,
    FIELD_SLUG: FieldRole.slug,
}


@lru_cache(maxsize=None)
def field_role(record_type: LinkType, field_id: str) -> FieldRole:
    """Return how the engine treats `field_id` on a record of `record_type`."""
    if field_id in _NAMING_ROLES:
        return _NAMING_ROLES[field_id]
    if record_type == LinkType.asset and field_id == FIELD_FILE:
        return FieldRole.asset_file
    return FieldRole.generic


def rename_field(
    value: str,
    prefix: str = "",
    suffix: str = "",
    regex: str | re.Pattern | None = None,
    replacement: str | None = None,
    slug: bool = False,
) -> str:
    """Apply the naming rules to one localized value.

    The regex substitution, when both `regex` and `replacement` are given, is
    applied first and replaces every match. Prefix and suffix are then
    concatenated. Slug values are stripped of surrounding whitespace, as are
    the prefix and suffix used with them.

    Args:
        value: Field value to rename.
        prefix: Text prepended to the value.
        suffix: Text appended to the value.
        regex: Pattern to substitute in the value.
        replacement: Replacement for `regex` matches, in `re.sub` syntax.
        slug: True if the value belongs to a slug field.

    Returns:
        The renamed value.

    Example:
        >>> rename_field("foobaz", "[", "]", regex="foo", replacement="bar")
        '[barbaz]'
        >>> rename_field(" my-slug ", "x-", "-y", slug=True)
        'x-my-slug-y'
    """
    if regex is not None and replacement is not None:
        value = re.sub(regex, replacement, value)
    if slug:
        return prefix.strip() + value.strip() + suffix.strip()
    return prefix + value + suffix


class NamingRules(BaseModel):
    """Naming parameters applied uniformly to every record of a run.

    Attributes:
        prefix: Prepended to name, title and slug values.
        suffix: Appended to name, title and slug values.
        regex: Pattern substituted before concatenation. Compiled on validation.
        replacement: Replacement for `regex` matches. Substitution is skipped
            when either `regex` or `replacement` is None.
    """

    model_config = STRICT_VALIDATION_CONFIG

    prefix: str = ""
    suffix: str = ""
    regex: re.Pattern | None = None
    replacement: str | None = None

    def apply(self, value: Any, role: FieldRole) -> Any:
        # Only text values are renamed; anything else is copied as is.
        if not isinstance(value, str):
            return value
        return rename_field(
            value,
            self.prefix,
            self.suffix,
            regex=self.regex,
            replacement=self.replacement,
            slug=role is FieldRole.slug,
        )


def transform_naming_fields(fields: FieldMap, record_type: LinkType, rules: NamingRules) -> None:
    """Rename every locale of every naming field of `fields` in place."""
    for field_id, localized in fields.items():
        role = field_role(record_type, field_id)
        if not role.is_naming or not isinstance(localized, dict):
            continue
        for locale in localized:
            localized[locale] = rules.apply(localized[locale], role)


def _upload_url(url: str) -> str:
    # Asset urls are protocol-relative ("//images.ctfassets.net/...").
    if urlparse(url).scheme:
        return url
    return UPLOAD_SCHEME + url


def normalize_asset_file(file_field: dict[str, Any]) -> dict[str, Any]:
    """Turn the per-locale file values of an asset into upload directives.

    A locale value carrying a ``url`` gets an ``upload`` key with the
    scheme-qualified url instead, and loses the ``details`` metadata derived by
    the store from the processed file. Values without a ``url`` (already
    upload-shaped) are left untouched.

    Args:
        file_field: Mapping from locale to file value.

    Returns:
        A new mapping; `file_field` is not modified.

    Example:
        >>> normalize_asset_file({"en-US": {"url": "//x/a.png", "fileName": "a.png", "details": {}}})
        {'en-US': {'fileName': 'a.png', 'upload': 'https://x/a.png'}}
    """
    normalized = {}
    for locale, file_value in file_field.items():
        if not isinstance(file_value, dict) or FILE_URL not in file_value:
            normalized[locale] = file_value
            continue
        value = {k: v for k, v in file_value.items() if k not in (FILE_URL, FILE_DETAILS)}
        value[FILE_UPLOAD] = _upload_url(file_value[FILE_URL])
        normalized[locale] = value
    return normalized


@dataclass
class LinkSlot:
    """Position of a link inside an array-valued localized field."""

    field_id: str
    locale: str
    index: int
    link: Link

    def rewrite(self, fields: FieldMap, new_id: str) -> None:
        fields[self.field_id][self.locale][self.index]["sys"]["id"] = new_id


def iter_array_links(fields: FieldMap, record_type: LinkType) -> Iterator[LinkSlot]:
    """Yield every link found inside array-valued locales of non-naming fields.

    Scalar link values are not yielded: only links held in arrays are followed
    by the duplication engine.
    """
    for field_id, localized in fields.items():
        if field_role(record_type, field_id).is_naming or not isinstance(localized, dict):
            continue
        for locale, value in localized.items():
            if not isinstance(value, list):
                continue
            for index, item in enumerate(value):
                link = Link.from_value(item)
                if link is not None:
                    yield LinkSlot(field_id, locale, index, link)
