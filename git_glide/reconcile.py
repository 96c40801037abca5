"""
History reconciliation for `gg remote`.

HistoryReconciler walks one remote link through a fixed sequence of
states:

    IDLE -> FETCHED -> HISTORY_CLASSIFIED -> RECONCILED -> TRACKING_SET -> DONE

Any failure moves it to FAILED and the error propagates to the caller.
Unrelated histories (no merge-base) are replayed onto the remote tip with
a root rebase, so no merge with --allow-unrelated-histories is needed. A
conflicting rebase is always aborted, never left half-applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import GitError, GitGlideError, RebaseConflict, UnrelatedHistoryConflict

LOG = logging.getLogger(__name__)


class ReconcileState(str, Enum):
    IDLE = "idle"
    FETCHED = "fetched"
    HISTORY_CLASSIFIED = "history-classified"
    RECONCILED = "reconciled"
    TRACKING_SET = "tracking-set"
    DONE = "done"
    FAILED = "failed"


class HistoryRelation(str, Enum):
    UP_TO_DATE = "up-to-date"
    UNRELATED = "unrelated"
    FAST_FORWARD = "fast-forward"
    DIVERGED = "diverged"


class ReconciliationOutcome(str, Enum):
    ALREADY_UP_TO_DATE = "already-up-to-date"
    FAST_FORWARDED = "fast-forwarded"
    REBASED_UNRELATED_HISTORIES = "rebased-unrelated-histories"
    REBASED_ONTO_REMOTE = "rebased-onto-remote"
    CONFLICT = "conflict"
    REMOTE_EMPTY = "remote-empty"


@dataclass(frozen=True)
class ReconciliationResult:
    outcome: ReconciliationOutcome
    branch: str
    upstream: Optional[str] = None
    tracking_changed: bool = False
    description: Optional[str] = None


RELATION_OUTCOMES = {
    HistoryRelation.UP_TO_DATE: ReconciliationOutcome.ALREADY_UP_TO_DATE,
    HistoryRelation.UNRELATED: ReconciliationOutcome.REBASED_UNRELATED_HISTORIES,
    HistoryRelation.FAST_FORWARD: ReconciliationOutcome.FAST_FORWARDED,
    HistoryRelation.DIVERGED: ReconciliationOutcome.REBASED_ONTO_REMOTE,
}


def classify_histories(repo, local: Optional[str], remote: str) -> HistoryRelation:
    """Relate a local tip (None for an unborn branch) to a fetched remote tip."""
    if local is None:
        return HistoryRelation.FAST_FORWARD
    if local == remote:
        return HistoryRelation.UP_TO_DATE
    if repo.merge_base(local, remote) is None:
        return HistoryRelation.UNRELATED
    if repo.is_ancestor(remote, local):
        return HistoryRelation.UP_TO_DATE
    if repo.is_ancestor(local, remote):
        return HistoryRelation.FAST_FORWARD
    return HistoryRelation.DIVERGED


class HistoryReconciler:
    """Fetch a remote and bring the local branch on top of it."""

    def __init__(self, repo, credential=None):
        self.repo = repo
        self.credential = credential
        self.state = ReconcileState.IDLE
        self.failure: Optional[GitGlideError] = None
        self.relation: Optional[HistoryRelation] = None
        self.branch: Optional[str] = None
        self.result: Optional[ReconciliationResult] = None

    def _advance(self, state: ReconcileState) -> None:
        LOG.debug("reconcile: %s -> %s", self.state.value, state.value)
        self.state = state

    def reconcile(self, remote: str, branch: Optional[str] = None) -> ReconciliationResult:
        """
        Run the whole workflow against `remote` and return its outcome.

        `branch` defaults to the checked-out (possibly unborn) branch. On
        failure the state becomes FAILED, `failure` holds the error and
        the error is raised. A rebase conflict also records a CONFLICT
        result naming the first conflicting path.
        """
        if self.state is not ReconcileState.IDLE:
            raise RuntimeError(f"reconciler already used (state: {self.state.value})")
        try:
            return self._run(remote, branch)
        except GitGlideError as exc:
            self.failure = exc
            if isinstance(exc, RebaseConflict):
                self.result = ReconciliationResult(
                    ReconciliationOutcome.CONFLICT,
                    self.branch or "",
                    upstream=exc.onto,
                    description=exc.description,
                )
            self._advance(ReconcileState.FAILED)
            raise

    def _run(self, remote: str, branch: Optional[str]) -> ReconciliationResult:
        branch = self.branch = branch or self.repo.current_branch()
        if branch is None:
            raise GitError("cannot link a remote from a detached HEAD; switch to a branch first")

        self.repo.fetch(remote, credential=self.credential)
        self._advance(ReconcileState.FETCHED)

        upstream = f"{remote}/{branch}"
        remote_tip = self.repo.resolve(f"refs/remotes/{upstream}")
        if remote_tip is None:
            LOG.info("Remote %s has no branch %s; nothing to reconcile", remote, branch)
            self.result = ReconciliationResult(
                ReconciliationOutcome.REMOTE_EMPTY,
                branch,
                description=f"{remote} has no branch named {branch}",
            )
            self._advance(ReconcileState.DONE)
            return self.result

        local_tip = self.repo.head_commit()
        self.relation = classify_histories(self.repo, local_tip, remote_tip)
        self._advance(ReconcileState.HISTORY_CLASSIFIED)
        LOG.info("Local %s vs %s: %s", branch, upstream, self.relation.value)

        self._reconcile_histories(upstream, remote_tip, local_tip)
        self._advance(ReconcileState.RECONCILED)

        tracking_changed = self.repo.set_upstream(branch, upstream)
        self._advance(ReconcileState.TRACKING_SET)

        self.result = ReconciliationResult(
            RELATION_OUTCOMES[self.relation],
            branch,
            upstream=upstream,
            tracking_changed=tracking_changed,
        )
        self._advance(ReconcileState.DONE)
        return self.result

    def _reconcile_histories(self, upstream: str, remote_tip: str, local_tip: Optional[str]) -> None:
        relation = self.relation
        if relation is HistoryRelation.UP_TO_DATE:
            return
        if relation is HistoryRelation.FAST_FORWARD:
            self.repo.fast_forward(remote_tip)
            return
        try:
            self.repo.rebase(remote_tip, root=relation is HistoryRelation.UNRELATED)
        except RebaseConflict as exc:
            if self.repo.head_commit() != local_tip:
                raise GitError(
                    f"rebase onto {upstream} aborted but HEAD moved; inspect the repository"
                ) from exc
            if relation is HistoryRelation.UNRELATED:
                raise UnrelatedHistoryConflict(exc.path, upstream) from exc
            raise RebaseConflict(exc.path, upstream) from exc
