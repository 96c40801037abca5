"""
Exception types raised across git-glide.

Every failure a workflow can surface derives from GitGlideError, so the
CLI can report it and pick an exit status without catching unrelated
bugs. The exit_code attribute is what the process exits with.
"""

from __future__ import annotations

from typing import Optional, Sequence


class GitGlideError(Exception):
    """Base class for all git-glide specific errors."""

    exit_code = 1


class GitError(GitGlideError):
    """Raised when a git command fails."""

    def __init__(self, message: str, args: Sequence[str] = (), stderr: str = ""):
        super().__init__(message)
        self.git_args = list(args)
        self.stderr = stderr


class AuthFailure(GitError):
    """The remote rejected our credentials."""

    exit_code = 5


class NetworkFailure(GitError):
    """The remote could not be reached."""

    exit_code = 6


class DirtyWorkingTree(GitGlideError):
    """A destructive operation was requested with uncommitted changes."""

    exit_code = 3

    def __init__(self, operation: str):
        super().__init__(
            f"cannot run '{operation}': you have unstaged changes or untracked files. "
            "Save your work or stash your changes before proceeding."
        )
        self.operation = operation


class NothingToCommit(GitGlideError):
    """save found no changes to commit."""

    exit_code = 2

    def __init__(self, message: str = "nothing to commit, working tree clean"):
        super().__init__(message)


class RebaseConflict(GitGlideError):
    """A rebase step conflicted and was aborted."""

    exit_code = 4

    def __init__(self, path: Optional[str], onto: str):
        self.path = path
        self.onto = onto
        self.description = f"conflict in {path}" if path else "conflict"
        super().__init__(
            f"{self.description} while rebasing onto {onto}; rebase aborted, "
            "repository left unchanged. Resolve manually and re-run."
        )


class UnrelatedHistoryConflict(RebaseConflict):
    """A rebase of unrelated histories conflicted and was aborted."""


class PullRequiresMerge(GitGlideError):
    """A fast-forward-only pull found diverged history."""

    def __init__(self, branch: str, remote_ref: str):
        super().__init__(
            f"pulling {remote_ref} into {branch} requires a merge commit. "
            "Please merge manually to resolve conflicts."
        )
        self.branch = branch
        self.remote_ref = remote_ref


class PushFailure(GitGlideError):
    """Push failed after a successful local commit."""

    def __init__(self, remote: str, branch: str, cause: GitError):
        super().__init__(
            f"committed locally but pushing {branch} to {remote} failed: {cause}"
        )
        self.remote = remote
        self.branch = branch
        self.exit_code = cause.exit_code
