"""Traversal context shared by every step of a duplication run."""

from __future__ import annotations

from dataclasses import dataclass, field

from content_duplicator.core.enums import CycleStrategy, LinkType
from content_duplicator.duplicate.fields import NamingRules
from content_duplicator.duplicate.report import DuplicationReport
from content_duplicator.interfaces import ContentStore
from content_duplicator.model.records import ContentTypeCatalogue


@dataclass
class DuplicationContext:
    """State owned by the caller and threaded through a whole run.

    The engine only ever adds to `duplicated_entries`. A caller that wants a
    re-run to skip records cloned by an earlier, failed run can pre-populate it
    (and `exclude`) from that run's results.

    Attributes:
        source: Environment the records are read from.
        target: Environment the clones are created in. May be `source`.
        target_content_types: Content types of the target environment, used by
            the publish gate.
        naming: Prefix, suffix and regex rules for name, title and slug fields.
        exclude: Ids that are never duplicated; links to them keep the original id.
        duplicated_entries: Original id -> clone id, written right after each
            successful creation.
        publish: Publish clones of published records (subject to the publish gate).
            False forces every clone to stay a draft.
        single_level: Only clone the root; links to children keep the original ids.
        cycle_strategy: What to do with a link back to a record still in flight.
        in_flight: Ids whose clone has started but is not created yet, in
            traversal order. Distinct from `duplicated_entries`.
        report: Outcomes collected during the run.
    """

    source: ContentStore
    target: ContentStore
    target_content_types: ContentTypeCatalogue
    naming: NamingRules = field(default_factory=NamingRules)
    exclude: set[str] = field(default_factory=set)
    duplicated_entries: dict[str, str] = field(default_factory=dict)
    publish: bool = True
    single_level: bool = False
    cycle_strategy: CycleStrategy = CycleStrategy.fail
    in_flight: dict[str, LinkType] = field(default_factory=dict)
    report: DuplicationReport = field(default_factory=DuplicationReport)

    @classmethod
    def for_environments(cls, source: ContentStore, target: ContentStore | None = None, **kwargs) -> DuplicationContext:
        """Create a context, loading the content types of the target environment."""
        target = target or source
        return cls(source=source, target=target, target_content_types=target.get_content_types(), **kwargs)

    def cycle_path(self, record_id: str) -> list[str]:
        """Return the in-flight ids from `record_id` to the innermost one, closed by `record_id`."""
        ids = list(self.in_flight)
        return ids[ids.index(record_id):] + [record_id]
