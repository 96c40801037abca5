"""
The gg workflows: save, feature, done, remote and creds.

Each workflow takes the Repository explicitly, runs the safety check
before its first mutation, and returns a small result object for the CLI
to render. Progress banners are printed as steps start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .auth import resolve_credential
from .commits import analyze_changes, classify, compose_message
from .commits.models import ChangeSummary, CommitClassification, CommitMessage
from .config import DEFAULT_REMOTE
from .errors import GitError, PullRequiresMerge, PushFailure
from .reconcile import HistoryReconciler, ReconciliationResult
from .safety import SafetyGuard
from .ui import step

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    message: CommitMessage
    summary: ChangeSummary
    classification: Optional[CommitClassification]
    dry_run: bool
    commit: Optional[str] = None
    pushed: bool = False


@dataclass(frozen=True)
class FeatureResult:
    branch: str
    created: bool
    pushed: bool


@dataclass(frozen=True)
class DoneResult:
    finished_branch: str
    main_branch: str
    deleted: bool
    already_on_main: bool = False


@dataclass(frozen=True)
class RemoteResult:
    remote: str
    url: str
    remote_change: str
    reconciliation: ReconciliationResult


def _credential(repo, remote):
    return resolve_credential(repo.remote_url(remote))


def prepare_message(repo, message: Optional[str] = None):
    """
    Stage everything and build the commit message for it.

    Shared by real saves and dry runs so both see the same message for
    the same working tree.
    """
    if message is not None and not message.strip():
        message = None
    repo.stage_all()
    summary = analyze_changes(repo.staged_changes())
    SafetyGuard(repo).require_changes(summary)
    classification = None if message else classify(summary)
    if classification:
        LOG.info("Classified %d change(s) as %s via %s", len(summary.records),
                 classification.type.value, classification.rule)
    return summary, classification, compose_message(classification, summary, override=message)


def save(repo, message: Optional[str] = None, dry_run: bool = False,
         remote: str = DEFAULT_REMOTE) -> SaveResult:
    """Stage, commit and push all current changes."""
    SafetyGuard(repo).check("save")
    step("Staging and Analyzing")
    summary, classification, commit_message = prepare_message(repo, message)
    if dry_run:
        return SaveResult(commit_message, summary, classification, dry_run=True)

    step(f'Committing: "{commit_message.header}"')
    sha = repo.commit(commit_message.text)

    pushed = False
    branch = repo.current_branch()
    if branch and repo.has_remote(remote):
        step("Pushing")
        try:
            repo.push(
                remote,
                branch,
                set_upstream=repo.upstream(branch) is None,
                credential=_credential(repo, remote),
            )
        except GitError as exc:
            raise PushFailure(remote, branch, exc) from exc
        pushed = True
    return SaveResult(commit_message, summary, classification, dry_run=False, commit=sha, pushed=pushed)


def pull(repo, remote: str = DEFAULT_REMOTE, branch: Optional[str] = None) -> str:
    """
    Fetch `remote` and fast-forward `branch` to its counterpart.

    Returns "no-remote", "no-remote-branch", "up-to-date" or
    "fast-forwarded". Diverged history raises PullRequiresMerge.
    """
    branch = branch or repo.current_branch()
    if branch is None or not repo.has_remote(remote):
        return "no-remote"
    repo.fetch(remote, credential=_credential(repo, remote))
    remote_ref = f"{remote}/{branch}"
    remote_tip = repo.resolve(f"refs/remotes/{remote_ref}")
    if remote_tip is None:
        return "no-remote-branch"
    local_tip = repo.head_commit()
    if local_tip is not None and repo.is_ancestor(remote_tip, local_tip):
        return "up-to-date"
    if local_tip is None or repo.is_ancestor(local_tip, remote_tip):
        repo.fast_forward(remote_tip)
        return "fast-forwarded"
    raise PullRequiresMerge(branch, remote_ref)


def feature(repo, name: str, remote: str = DEFAULT_REMOTE) -> FeatureResult:
    """Sync the current branch, then create or switch to branch `name` and publish it."""
    SafetyGuard(repo).check("feature")

    step("Syncing current branch")
    pull(repo, remote)

    step(f"Switching to feature branch: {name}")
    created = not repo.branch_exists(name)
    if created:
        repo.create_branch(name)
    repo.switch(name)

    pushed = False
    if repo.has_remote(remote):
        step("Pushing upstream")
        repo.push(remote, name, set_upstream=True, credential=_credential(repo, remote))
        pushed = True
    return FeatureResult(name, created, pushed)


def done(repo, no_clean: bool = False, remote: str = DEFAULT_REMOTE) -> DoneResult:
    """Return to the main branch, pull it, and delete the finished branch."""
    SafetyGuard(repo).check("done")

    current = repo.current_branch()
    if current is None:
        raise GitError("Not on a valid branch")
    main_branch = repo.main_branch()
    if current == main_branch:
        return DoneResult(current, main_branch, deleted=False, already_on_main=True)

    step(f"Switching to {main_branch}")
    repo.switch(main_branch)

    step(f"Pulling {main_branch}")
    pull(repo, remote, main_branch)

    if no_clean:
        return DoneResult(current, main_branch, deleted=False)
    step(f"Deleting branch {current}")
    repo.delete_branch(current)
    return DoneResult(current, main_branch, deleted=True)


def link_remote(repo, url: str, name: str = DEFAULT_REMOTE) -> RemoteResult:
    """Add or repoint remote `name` and reconcile the current branch with it."""
    SafetyGuard(repo).check("remote")

    change = repo.set_remote(name, url)
    step(f"Remote '{name}' set to {url}")

    step("Syncing with remote")
    reconciler = HistoryReconciler(repo, credential=resolve_credential(url))
    result = reconciler.reconcile(name)
    return RemoteResult(name, url, change, result)


def set_identity(repo, name: str, email: str, global_scope: bool = False) -> str:
    """Configure user.name and user.email; returns the scope description."""
    repo.set_identity(name, email, global_scope=global_scope)
    return "globally" if global_scope else "locally"
