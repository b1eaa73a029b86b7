"""Publish gate: decides whether a freshly created clone may be published.

The store refuses to publish an entry whose required asset field points at an
asset it cannot resolve. Rather than issue a publish call that would fail the
run, such clones are left as drafts.
"""

from __future__ import annotations

from typing import Any, Iterator

from content_duplicator.core.exceptions import ContentStoreError
from content_duplicator.core.logging_config import get_logger
from content_duplicator.interfaces import ContentStore
from content_duplicator.model.records import ContentTypeCatalogue, FieldMap, Link, Record

logger = get_logger("publish")


def _links_in(value: Any) -> Iterator[Link]:
    values = value if isinstance(value, list) else [value]
    for item in values:
        link = Link.from_value(item)
        if link is not None:
            yield link


def _asset_resolves(target: ContentStore, asset_id: str) -> bool:
    try:
        target.get_asset(asset_id)
    except ContentStoreError as e:
        logger.info(f"Asset #{asset_id} cannot be resolved in the target environment: {e}")
        return False
    return True


def can_publish(
    original: Record,
    target_content_types: ContentTypeCatalogue,
    target: ContentStore,
    fields: FieldMap | None = None,
) -> bool:
    """Return True if the clone of `original` may be published right away.

    Assets are always publishable. An entry is publishable unless its content
    type declares a required asset field and some asset referenced by that
    field, in any locale, cannot be fetched from the target environment.

    Args:
        original: The source record that was cloned.
        target_content_types: Content types of the target environment.
        target: The target environment.
        fields: Field map submitted for the clone. The asset ids checked are
            taken from it, so rewritten links are checked under their new ids.
            Defaults to the fields of `original`.

    Returns:
        True if the clone can be published, False if it should stay a draft.
    """
    if original.is_asset:
        return True

    content_type = target_content_types.find(original.content_type_id)
    if content_type is None:
        logger.warning(
            f"Content type {original.content_type_id} is not in the target catalogue, "
            f"leaving clone of #{original.id} as draft"
        )
        return False

    fields = original.fields if fields is None else fields
    for ct_field in content_type.required_asset_fields():
        links = [link for value in (fields.get(ct_field.id) or {}).values() for link in _links_in(value)]
        if not links:
            logger.warning(f"Required asset field {ct_field.id} of #{original.id} is empty")
            return False
        for link in links:
            if not _asset_resolves(target, link.id):
                return False
    return True
