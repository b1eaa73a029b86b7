"""Recursive duplication of a record and the records it links to.

Duplicating a record means creating a copy of it in the target environment,
after first duplicating every record linked from its array-valued fields so
that the copy can link to the new children instead of the originals:

    1. Excluded ids are never cloned; links to them are left untouched.
    2. The record is fetched from the source environment and a deep copy of
       its fields is made. Name, title and slug fields are renamed.
    3. Each array link is resolved in order. An id already in
       ``duplicated_entries`` is rewritten to its clone (fan-in is cloned only
       once); any other id is duplicated first, then rewritten.
    4. The copy is created in the target environment (assets are re-uploaded
       and processed for every locale) and the mapping is recorded at once.
    5. Clones of published records are published when the publish gate allows.

Traversal uses an explicit stack of frames rather than Python recursion. A
link to an id that is still on the stack (``in_flight``) is a cycle and is
handled according to the context's :class:`CycleStrategy` before any further
remote call is made.

Every store call is made synchronously, one at a time. Sibling links are never
duplicated concurrently: the single-flight guarantee relies on the
check/create/record sequence of one id completing before any other link is
looked at.
"""

from __future__ import annotations

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable

from content_duplicator.core.enums import CloneOutcome, CycleStrategy, FieldRole, LinkType
from content_duplicator.core.exceptions import DuplicationCycleError
from content_duplicator.core.logging_config import LoggerMixin
from content_duplicator.duplicate.context import DuplicationContext
from content_duplicator.duplicate.fields import (
    LinkSlot,
    NamingRules,
    field_role,
    iter_array_links,
    normalize_asset_file,
    transform_naming_fields,
)
from content_duplicator.duplicate.publish import can_publish
from content_duplicator.duplicate.report import DuplicationIssue, IssueSeverity
from content_duplicator.interfaces import ContentStore
from content_duplicator.model.records import ClonedRecord, ContentTypeCatalogue, FieldMap, Link, Record


@dataclass
class _Frame:
    """A record whose clone is being assembled."""

    original: Record
    fields: FieldMap
    slots: deque[LinkSlot] = field(default_factory=deque)
    # Child id pushed onto the stack from the slot at the head of `slots`
    pending: str | None = None


class DuplicationEngine(LoggerMixin):
    """Duplicates records within one run described by a :class:`DuplicationContext`."""

    def __init__(self, context: DuplicationContext):
        self.context = context

    def duplicate(self, record_id: str, link_type: LinkType = LinkType.entry) -> ClonedRecord | None:
        """Duplicate a record and, unless single-level, the records it links to.

        Args:
            record_id: Id of the record in the source environment.
            link_type: Whether `record_id` is an entry or an asset.

        Returns:
            The clone of the record, or None if `record_id` is excluded. If the
            record was already cloned in this run (or in a run whose mapping was
            loaded into the context) the existing clone is returned with the
            ``reused`` outcome.

        Raises:
            RecordNotFound: A record could not be fetched from the source.
            RecordCreationError: The target rejected a create call.
            PublishError: The target rejected a publish call.
            DuplicationCycleError: A cycle was found with CycleStrategy.fail.
        """
        ctx = self.context
        link_type = LinkType(link_type)
        if record_id in ctx.exclude:
            self._logger.info(f"NOT duplicating excluded {link_type.value.lower()} #{record_id}")
            ctx.report.record_excluded(record_id)
            return None
        if record_id in ctx.duplicated_entries:
            self._logger.info(f"NOT duplicating {link_type.value.lower()} #{record_id}, already duplicated")
            ctx.report.record_reused(record_id)
            return ClonedRecord(
                original_id=record_id,
                id=ctx.duplicated_entries[record_id],
                type=link_type,
                outcome=CloneOutcome.reused,
            )

        stack = [self._open(record_id, link_type)]
        result = None
        try:
            while stack:
                child = self._next_child(stack[-1])
                if child is not None:
                    stack.append(self._open(child.id, child.link_type))
                    continue
                result = self._finish(stack[-1])
                stack.pop()
        finally:
            # A failed run leaves nothing marked as in flight.
            for frame in stack:
                ctx.in_flight.pop(frame.original.id, None)
        return result

    def _open(self, record_id: str, link_type: LinkType) -> _Frame:
        ctx = self.context
        self._logger.info(f"Duplicating {link_type.value.lower()} #{record_id}")
        if link_type == LinkType.asset:
            original = ctx.source.get_asset(record_id)
        else:
            original = ctx.source.get_entry(record_id)
        ctx.in_flight[original.id] = original.type

        fields = copy.deepcopy(original.fields)
        transform_naming_fields(fields, original.type, ctx.naming)
        frame = _Frame(original=original, fields=fields)
        if not ctx.single_level:
            frame.slots.extend(iter_array_links(fields, original.type))
        return frame

    def _next_child(self, frame: _Frame) -> Link | None:
        """Resolve links of `frame` until one needs duplicating; return that link."""
        ctx = self.context
        while frame.slots:
            slot = frame.slots[0]
            child_id = slot.link.id
            if child_id in ctx.exclude:
                ctx.report.record_excluded(child_id)
            elif child_id in ctx.duplicated_entries:
                if frame.pending == child_id:
                    frame.pending = None
                else:
                    self._logger.info(f"NOT duplicating sub entry #{child_id}, linking existing clone")
                    ctx.report.record_reused(child_id)
                slot.rewrite(frame.fields, ctx.duplicated_entries[child_id])
            elif child_id in ctx.in_flight:
                self._link_cycle(frame, child_id)
            else:
                frame.pending = child_id
                return slot.link
            frame.slots.popleft()
        return None

    def _link_cycle(self, frame: _Frame, child_id: str) -> None:
        ctx = self.context
        path = ctx.cycle_path(child_id)
        if ctx.cycle_strategy == CycleStrategy.fail:
            raise DuplicationCycleError(path)
        self._logger.warning(f"Link cycle {' -> '.join(path)}: #{frame.original.id} keeps its link to #{child_id}")
        ctx.report.add_issue(
            DuplicationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Link to #{child_id} points at the original record",
                record_id=frame.original.id,
                details=" -> ".join(path),
            )
        )

    def _finish(self, frame: _Frame) -> ClonedRecord:
        """Create the clone of a frame whose links are all resolved, then publish it if allowed."""
        ctx = self.context
        original, fields = frame.original, frame.fields

        self._logger.info(f"Creating clone of {original.type.value.lower()} #{original.id}")
        if original.is_asset:
            for field_id in fields:
                if field_role(original.type, field_id) is FieldRole.asset_file:
                    fields[field_id] = normalize_asset_file(fields[field_id])
            created = ctx.target.create_asset(fields)
            created = ctx.target.process_for_all_locales(created)
        else:
            created = ctx.target.create_entry(original.content_type_id, fields)

        ctx.duplicated_entries[original.id] = created.id
        ctx.in_flight.pop(original.id, None)

        outcome = CloneOutcome.draft
        if ctx.publish and ctx.source.is_published(original):
            if can_publish(original, ctx.target_content_types, ctx.target, fields):
                self._logger.info(f"Publishing #{created.id}")
                created = ctx.target.publish(created)
                outcome = CloneOutcome.published
            else:
                self._logger.warning(f"Clone #{created.id} of published #{original.id} left as draft")
                ctx.report.add_issue(
                    DuplicationIssue(
                        severity=IssueSeverity.WARNING,
                        message="Left as draft: a required asset is missing in the target environment",
                        record_id=original.id,
                        details=f"clone #{created.id}",
                    )
                )

        ctx.report.record_created(original.id, created.id, outcome)
        return ClonedRecord(original_id=original.id, id=created.id, type=original.type, outcome=outcome, record=created)


def duplicate_records(
    record_ids: Iterable[str],
    context: DuplicationContext,
    link_type: LinkType = LinkType.entry,
) -> list[ClonedRecord | None]:
    """Duplicate several roots in one run, sharing the context between them."""
    engine = DuplicationEngine(context)
    return [engine.duplicate(record_id, link_type) for record_id in record_ids]


def duplicate_entry(
    entry_id: str,
    source: ContentStore,
    target: ContentStore | None = None,
    publish: bool = True,
    exclude: Iterable[str] = (),
    single_level: bool = False,
    prefix: str = "",
    suffix: str = "",
    regex: str | None = None,
    replace_str: str | None = None,
    target_content_types: ContentTypeCatalogue | None = None,
    duplicated_entries: dict[str, str] | None = None,
    link_type: LinkType = LinkType.entry,
    cycle_strategy: CycleStrategy = CycleStrategy.fail,
) -> ClonedRecord | None:
    """Duplicate an entry (or asset) and the records it links to.

    Args:
        entry_id: Id of the record in `source`.
        source: Environment to read from.
        target: Environment to create clones in. Defaults to `source`.
        publish: Publish the clones of published records. Set False to force
            every clone to be a draft although the original is published.
        exclude: Ids that will not be duplicated.
        single_level: If True, only the root is cloned and links keep pointing
            at the original children.
        prefix: Prefix of the cloned names, titles and slugs.
        suffix: Suffix of the cloned names, titles and slugs.
        regex: Pattern replaced in cloned names, titles and slugs.
        replace_str: Replacement for `regex`.
        target_content_types: Content types of `target`. Fetched if None.
        duplicated_entries: Mapping shared across calls. Updated in place.
        link_type: Whether `entry_id` is an entry or an asset.
        cycle_strategy: What to do with link cycles.

    Returns:
        The clone, or None if `entry_id` is excluded.
    """
    target = target or source
    context = DuplicationContext(
        source=source,
        target=target,
        target_content_types=target_content_types if target_content_types is not None else target.get_content_types(),
        naming=NamingRules(prefix=prefix, suffix=suffix, regex=regex, replacement=replace_str),
        exclude=set(exclude),
        duplicated_entries=duplicated_entries if duplicated_entries is not None else {},
        publish=publish,
        single_level=single_level,
        cycle_strategy=cycle_strategy,
    )
    return DuplicationEngine(context).duplicate(entry_id, link_type)
