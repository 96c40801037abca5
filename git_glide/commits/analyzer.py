"""Turn the file changes git reports into a ChangeSummary."""

from __future__ import annotations

from typing import Iterable

from ..git.diff import FileChange
from .models import ChangeKind, ChangeRecord, ChangeSummary

STATUS_KINDS = {
    "A": ChangeKind.ADDED,
    "C": ChangeKind.ADDED,
    "M": ChangeKind.MODIFIED,
    "T": ChangeKind.MODIFIED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.RENAMED,
}


def to_record(change: FileChange) -> ChangeRecord:
    try:
        kind = STATUS_KINDS[change.status[:1]]
    except KeyError:
        raise ValueError(f"unsupported change status {change.status!r} for {change.path}") from None
    return ChangeRecord(
        path=change.path,
        kind=kind,
        insertions=change.insertions,
        deletions=change.deletions,
        old_path=change.old_path if kind is ChangeKind.RENAMED else None,
    )


def analyze_changes(changes: Iterable[FileChange]) -> ChangeSummary:
    """
    Build a ChangeSummary from staged file changes.

    Records are sorted by the UTF-8 bytes of their path so the generated
    message does not depend on the order git listed the files in. An
    empty input gives an empty summary; callers decide what that means.
    """
    records = sorted(
        (to_record(change) for change in changes),
        key=lambda record: record.path.encode("utf-8", errors="surrogateescape"),
    )
    return ChangeSummary(records=tuple(records))
