"""Render a classified change summary into a commit message."""

from __future__ import annotations

from typing import Optional

from ..config import MAX_HEADER_LENGTH
from ..validation import lint_git_commit_subject
from .models import ChangeKind, ChangeSummary, CommitClassification, CommitMessage

KIND_VERBS = {
    ChangeKind.ADDED: "added",
    ChangeKind.DELETED: "removed",
    ChangeKind.RENAMED: "renamed",
}


def _verb(summary: ChangeSummary) -> str:
    for kind, verb in KIND_VERBS.items():
        if summary.all_of(kind):
            return verb
    return "updated"


def describe(summary: ChangeSummary) -> str:
    """Short description, e.g. "updated 3 files (+10, -2, ~3)"."""
    count = len(summary.records)
    noun = "file" if count == 1 else "files"
    return (
        f"{_verb(summary)} {count} {noun} "
        f"(+{summary.total_insertions}, -{summary.total_deletions}, ~{summary.total_modifications})"
    )


def _body(summary: ChangeSummary) -> Optional[str]:
    if len(summary.records) < 2:
        return None
    lines = []
    for record in summary.records:
        path = record.path
        if record.old_path:
            path = f"{record.old_path} -> {record.path}"
        lines.append(f"- {record.kind.value} {path} (+{record.insertions}, -{record.deletions})")
    return "\n".join(lines)


def _header(classification: CommitClassification, description: str) -> str:
    ctype = classification.type.value
    if classification.scope:
        header = f"{ctype}({classification.scope}): {description}"
        if len(header) <= MAX_HEADER_LENGTH:
            return header
    return f"{ctype}: {description}"


def compose_message(
    classification: Optional[CommitClassification],
    summary: ChangeSummary,
    override: Optional[str] = None,
) -> CommitMessage:
    """
    Build the commit message for `summary`.

    An operator-supplied `override` is used verbatim as the whole message
    and the classification is ignored. Otherwise the header follows
    `<type>(<scope>): <description>` and, for multi-file changes, the body
    lists every file.
    """
    if override is not None and override.strip():
        return CommitMessage(header=override)
    if classification is None:
        raise ValueError("a classification is required when no message is supplied")

    header = _header(classification, describe(summary))
    lint_git_commit_subject(header)
    return CommitMessage(header=header, body=_body(summary))
