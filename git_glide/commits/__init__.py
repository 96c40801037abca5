"""Commit-message synthesis: analyze, classify, compose."""

from .analyzer import analyze_changes
from .classifier import RULES, classify, derive_scope
from .composer import compose_message, describe
from .models import (
    ChangeKind,
    ChangeRecord,
    ChangeSummary,
    CommitClassification,
    CommitMessage,
    CommitType,
)

__all__ = [
    "analyze_changes",
    "classify",
    "derive_scope",
    "RULES",
    "compose_message",
    "describe",
    "ChangeKind",
    "ChangeRecord",
    "ChangeSummary",
    "CommitClassification",
    "CommitMessage",
    "CommitType",
]
