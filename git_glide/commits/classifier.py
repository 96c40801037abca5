"""
Rule-based commit classification.

RULES is evaluated top to bottom over the whole summary and the first
matching predicate decides the commit type. Each predicate is a plain
function of the summary so it can be tested on its own.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..config import (
    BUILD_DIRS,
    BUILD_FILES,
    DOC_DIRS,
    DOC_EXTENSIONS,
    DOC_NAMES,
    FIX_MAX_LINE_DELTA,
    TEST_DIRS,
)
from .models import ChangeKind, ChangeSummary, CommitClassification, CommitType


@dataclass(frozen=True)
class Rule:
    name: str
    predicate: Callable[[ChangeSummary], bool]
    commit_type: CommitType


def _segments(path):
    return [s.lower() for s in path.split("/")[:-1]]


def _filename(path):
    return posixpath.basename(path).lower()


def is_build_path(path: str) -> bool:
    name = _filename(path)
    if name in BUILD_FILES:
        return True
    if name.startswith("requirements") and name.endswith((".txt", ".in")):
        return True
    if name.startswith("dockerfile"):
        return True
    return any(s in BUILD_DIRS for s in _segments(path))


def is_doc_path(path: str) -> bool:
    if is_build_path(path):
        return False
    name = _filename(path)
    stem, ext = posixpath.splitext(name)
    if ext in DOC_EXTENSIONS or stem in DOC_NAMES:
        return True
    return any(s in DOC_DIRS for s in _segments(path))


def is_test_path(path: str) -> bool:
    name = _filename(path)
    if any(s in TEST_DIRS for s in _segments(path)):
        return True
    stem = posixpath.splitext(name)[0]
    return (
        name == "conftest.py"
        or name.startswith("test_")
        or stem.endswith("_test")
        or ".test." in name
        or ".spec." in name
    )


def only_docs(summary: ChangeSummary) -> bool:
    return all(is_doc_path(p) for p in summary.paths)


def only_tests(summary: ChangeSummary) -> bool:
    return all(is_test_path(p) for p in summary.paths)


def only_build(summary: ChangeSummary) -> bool:
    return all(is_build_path(p) for p in summary.paths)


def all_deleted(summary: ChangeSummary) -> bool:
    return summary.all_of(ChangeKind.DELETED)


def all_added(summary: ChangeSummary) -> bool:
    return summary.all_of(ChangeKind.ADDED)


def deletion_dominated_modifications(summary: ChangeSummary) -> bool:
    return (
        summary.all_of(ChangeKind.MODIFIED)
        and summary.total_deletions > summary.total_insertions
    )


def any_added(summary: ChangeSummary) -> bool:
    return summary.any_of(ChangeKind.ADDED)


def defect_sized(summary: ChangeSummary) -> bool:
    """Small, localized edits: some file modified and few lines touched."""
    return summary.any_of(ChangeKind.MODIFIED) and summary.line_delta < FIX_MAX_LINE_DELTA


def always(summary: ChangeSummary) -> bool:
    return True


RULES: List[Rule] = [
    Rule("docs-only", only_docs, CommitType.DOCS),
    Rule("tests-only", only_tests, CommitType.TEST),
    Rule("build-only", only_build, CommitType.BUILD),
    Rule("all-deleted", all_deleted, CommitType.CHORE),
    Rule("all-added", all_added, CommitType.FEAT),
    Rule("deletions-dominate", deletion_dominated_modifications, CommitType.REFACTOR),
    Rule("some-added", any_added, CommitType.FEAT),
    Rule("defect-sized", defect_sized, CommitType.FIX),
    Rule("fallback", always, CommitType.CHORE),
]

EMPTY_CLASSIFICATION = CommitClassification(type=CommitType.OTHER, scope=None, rule="empty")


def _clean_scope(scope):
    cleaned = re.sub(r"[\s()]+", "-", scope).strip("-")
    return cleaned or None


def derive_scope(summary: ChangeSummary) -> Optional[str]:
    """
    Scope from the changed paths.

    One file inside a directory is scoped by its filename stem; several
    files under one leading directory by that directory. A lone
    top-level file, or files spread over the tree, get no scope.
    """
    paths = summary.paths
    if not paths:
        return None
    if len(paths) == 1:
        path = paths[0]
        if "/" not in path:
            return None
        return _clean_scope(posixpath.splitext(posixpath.basename(path))[0])
    leading = {p.split("/", 1)[0] if "/" in p else None for p in paths}
    if len(leading) == 1:
        segment = leading.pop()
        return _clean_scope(segment) if segment else None
    return None


def classify(summary: ChangeSummary) -> CommitClassification:
    """Return the classification of the first rule that matches `summary`."""
    if summary.is_empty:
        return EMPTY_CLASSIFICATION
    for rule in RULES:
        if rule.predicate(summary):
            return CommitClassification(
                type=rule.commit_type,
                scope=derive_scope(summary),
                rule=rule.name,
            )
    raise AssertionError("fallback rule must always match")  # pragma: no cover
