"""
Pre-flight checks for workflows that rewrite history or switch branches.

Checks run before the first mutating git call of a workflow, so a
refused operation leaves the repository exactly as it found it.
"""

from __future__ import annotations

import logging

from .errors import DirtyWorkingTree, NothingToCommit

LOG = logging.getLogger(__name__)

DESTRUCTIVE_OPERATIONS = frozenset({"feature", "done", "remote"})


class SafetyGuard:
    def __init__(self, repo):
        self.repo = repo

    def check(self, operation: str) -> None:
        """
        Refuse a destructive `operation` on a dirty working tree.

        save and creds are allowed to run on a dirty tree.
        """
        if operation not in DESTRUCTIVE_OPERATIONS:
            return
        if self.repo.is_dirty():
            LOG.info("Refusing %s: working tree is dirty", operation)
            raise DirtyWorkingTree(operation)

    def require_changes(self, summary) -> None:
        if summary.is_empty:
            raise NothingToCommit()
