"""Value types for commit-message synthesis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ChangeKind(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    CHORE = "chore"
    DOCS = "docs"
    REFACTOR = "refactor"
    TEST = "test"
    BUILD = "build"
    OTHER = "other"


@dataclass(frozen=True)
class ChangeRecord:
    """One changed file of a diff snapshot."""

    path: str
    kind: ChangeKind
    insertions: int = 0
    deletions: int = 0
    old_path: Optional[str] = None  # set on renames

    def __post_init__(self):
        if self.insertions < 0 or self.deletions < 0:
            raise ValueError(f"negative line counts for {self.path}")


@dataclass(frozen=True)
class ChangeSummary:
    """
    All changes of one snapshot, ordered by path.

    Totals are derived from the records, so they can never disagree with
    them.
    """

    records: Tuple[ChangeRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(r.path for r in self.records)

    @property
    def total_insertions(self) -> int:
        return sum(r.insertions for r in self.records)

    @property
    def total_deletions(self) -> int:
        return sum(r.deletions for r in self.records)

    @property
    def total_modifications(self) -> int:
        """Number of files modified in place."""
        return self.count(ChangeKind.MODIFIED)

    @property
    def line_delta(self) -> int:
        return self.total_insertions + self.total_deletions

    def count(self, kind: ChangeKind) -> int:
        return sum(1 for r in self.records if r.kind is kind)

    def all_of(self, kind: ChangeKind) -> bool:
        return bool(self.records) and all(r.kind is kind for r in self.records)

    def any_of(self, kind: ChangeKind) -> bool:
        return any(r.kind is kind for r in self.records)


@dataclass(frozen=True)
class CommitClassification:
    type: CommitType
    scope: Optional[str] = None
    rule: str = ""


@dataclass(frozen=True)
class CommitMessage:
    header: str
    body: Optional[str] = None

    @property
    def text(self) -> str:
        if self.body:
            return f"{self.header}\n\n{self.body}"
        return self.header
