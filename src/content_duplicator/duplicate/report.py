"""Report of a duplication run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from content_duplicator.core.enums import CloneOutcome


class IssueSeverity(Enum):
    """Severity level of duplication issues."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class DuplicationIssue:
    """A single issue encountered during a run."""

    severity: IssueSeverity
    message: str
    record_id: str | None = None
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "record_id": self.record_id,
            "details": self.details,
        }

    def __str__(self) -> str:
        parts = [f"[{self.severity.value.upper()}]"]
        if self.record_id:
            parts.append(f"#{self.record_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class DuplicationReport:
    """What a run created, reused, skipped and published.

    Attributes:
        created: Original id -> clone id for every record created by the run.
        outcomes: Original id -> outcome (published or draft) of created records.
        reused: Original ids whose existing clone was linked instead of
            duplicating them again, each listed once.
        excluded: Original ids skipped because they are in the exclude set.
        issues: Warnings collected along the way (drafts forced by the
            publish gate, cycles linked back to the original).
    """

    created: dict[str, str] = field(default_factory=dict)
    outcomes: dict[str, CloneOutcome] = field(default_factory=dict)
    reused: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    issues: list[DuplicationIssue] = field(default_factory=list)

    def add_issue(self, issue: DuplicationIssue) -> None:
        self.issues.append(issue)

    def record_created(self, original_id: str, new_id: str, outcome: CloneOutcome) -> None:
        self.created[original_id] = new_id
        self.outcomes[original_id] = outcome

    def record_reused(self, original_id: str) -> None:
        if original_id not in self.reused:
            self.reused.append(original_id)

    def record_excluded(self, original_id: str) -> None:
        if original_id not in self.excluded:
            self.excluded.append(original_id)

    @property
    def published(self) -> list[str]:
        return [rid for rid, outcome in self.outcomes.items() if outcome == CloneOutcome.published]

    @property
    def drafts(self) -> list[str]:
        return [rid for rid, outcome in self.outcomes.items() if outcome == CloneOutcome.draft]

    def to_dict(self) -> dict[str, Any]:
        """Return the report as a JSON-serializable dictionary."""
        return {
            "summary": {
                "records_created": len(self.created),
                "records_published": len(self.published),
                "records_left_draft": len(self.drafts),
                "records_reused": len(self.reused),
                "records_excluded": len(self.excluded),
                "warnings": len([i for i in self.issues if i.severity == IssueSeverity.WARNING]),
            },
            "created": self.created,
            "published": self.published,
            "drafts": self.drafts,
            "reused": self.reused,
            "excluded": self.excluded,
            "issues": [i.to_dict() for i in self.issues],
        }

    def to_json(self, indent: int = 2) -> str:
        """Return the report as a formatted JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_text(self) -> str:
        """Return the report as human-readable text."""
        summary = self.to_dict()["summary"]
        lines = [
            "=" * 50,
            "DUPLICATION REPORT",
            "=" * 50,
            f"Records created:     {summary['records_created']}",
            f"Records published:   {summary['records_published']}",
            f"Records left draft:  {summary['records_left_draft']}",
            f"Records reused:      {summary['records_reused']}",
            f"Records excluded:    {summary['records_excluded']}",
        ]
        if self.created:
            lines.append("")
            lines.append("CREATED")
            lines.append("-" * 40)
            lines.extend(f"  {original} -> {new} ({self.outcomes[original].value})" for original, new in self.created.items())
        if self.issues:
            lines.append("")
            lines.append("ISSUES")
            lines.append("-" * 40)
            lines.extend(f"  {issue}" for issue in self.issues)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_text()
