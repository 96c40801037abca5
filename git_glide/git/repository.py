"""
The repository capability object.

Repository is the one stateful component of git-glide: every read or
mutation of the underlying git repository goes through it, and the core
components receive it explicitly instead of reaching for the current
directory. Tests substitute an in-memory fake with the same methods.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from ..config import MAIN_BRANCH_CANDIDATES
from ..errors import GitError, RebaseConflict
from .core import classify_git_failure, run, run_status
from .diff import FileChange, merge_diff_listings

LOG = logging.getLogger(__name__)

# Rebase must never stop to open an editor.
NON_INTERACTIVE_ENV = {"GIT_EDITOR": "true", "GIT_SEQUENCE_EDITOR": "true"}


class Repository:
    """Primitive git operations scoped to one working tree."""

    def __init__(self, path: str = "."):
        self.path = os.path.abspath(path)
        if run_status(["rev-parse", "--git-dir"], cwd=self.path).returncode != 0:
            raise GitError(f"Not a git repository: {self.path}", ["rev-parse", "--git-dir"])

    def _git(self, *args: str, env=None, strip: bool = True) -> str:
        return run(list(args), cwd=self.path, env=env, strip=strip)

    def _status(self, *args: str, env=None):
        return run_status(list(args), cwd=self.path, env=env)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def status_porcelain(self) -> str:
        return self._git("status", "--porcelain", "--untracked-files=all")

    def is_dirty(self) -> bool:
        """Staged, unstaged or untracked changes all count as dirty."""
        return bool(self.status_porcelain())

    def current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, also for an unborn one; None when detached."""
        completed = self._status("symbolic-ref", "--short", "-q", "HEAD")
        if completed.returncode != 0:
            return None
        return completed.stdout.strip() or None

    def resolve(self, ref: str) -> Optional[str]:
        """Return the commit id `ref` points at, or None if it does not exist."""
        completed = self._status("rev-parse", "--verify", "-q", f"{ref}^{{commit}}")
        if completed.returncode != 0:
            return None
        return completed.stdout.strip()

    def head_commit(self) -> Optional[str]:
        return self.resolve("HEAD")

    def branch_exists(self, name: str) -> bool:
        return self.resolve(f"refs/heads/{name}") is not None

    def main_branch(self) -> str:
        for candidate in MAIN_BRANCH_CANDIDATES:
            if self.branch_exists(candidate):
                return candidate
        return MAIN_BRANCH_CANDIDATES[-1]

    def upstream(self, branch: str) -> Optional[str]:
        """Return the short upstream name (e.g. origin/main) of `branch`, if any."""
        completed = self._status(
            "rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch}@{{u}}"
        )
        if completed.returncode != 0:
            return None
        return completed.stdout.strip() or None

    # ------------------------------------------------------------------
    # Working tree and commits
    # ------------------------------------------------------------------
    def stage_all(self) -> None:
        self._git("add", "-A")

    def staged_changes(self) -> List[FileChange]:
        """File-level entries of the index against HEAD (or the empty tree)."""
        name_status = self._git("diff", "--cached", "-M", "--name-status", "-z", strip=False)
        numstat = self._git("diff", "--cached", "-M", "--numstat", "-z", strip=False)
        return merge_diff_listings(name_status, numstat)

    def commit(self, message: str) -> str:
        """Commit the index with `message` and return the new HEAD."""
        self._git("commit", "-q", "-m", message)
        return self._git("rev-parse", "HEAD")

    # ------------------------------------------------------------------
    # Remotes
    # ------------------------------------------------------------------
    def remotes(self) -> List[str]:
        out = self._git("remote")
        return [line for line in out.splitlines() if line.strip()]

    def has_remote(self, name: str) -> bool:
        return name in self.remotes()

    def remote_url(self, name: str) -> Optional[str]:
        completed = self._status("remote", "get-url", name)
        if completed.returncode != 0:
            return None
        return completed.stdout.strip()

    def set_remote(self, name: str, url: str) -> str:
        """Add or repoint a remote. Returns "added", "updated" or "unchanged"."""
        current = self.remote_url(name)
        if current is None:
            self._git("remote", "add", name, url)
            return "added"
        if current == url:
            return "unchanged"
        self._git("remote", "set-url", name, url)
        return "updated"

    def fetch(self, remote: str, credential=None) -> None:
        env = credential.env if credential else None
        refspec = f"+refs/heads/*:refs/remotes/{remote}/*"
        self._git("fetch", "--prune", remote, refspec, env=env)

    def push(self, remote: str, branch: str, set_upstream: bool = False, credential=None) -> None:
        env = credential.env if credential else None
        args = ["push"]
        if set_upstream:
            args.append("--set-upstream")
        args.extend([remote, f"refs/heads/{branch}:refs/heads/{branch}"])
        self._git(*args, env=env)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def merge_base(self, a: str, b: str) -> Optional[str]:
        """Common ancestor of two commits; None for unrelated histories."""
        completed = self._status("merge-base", a, b)
        if completed.returncode == 0:
            return completed.stdout.strip()
        if completed.returncode == 1:
            return None
        raise classify_git_failure(["git", "merge-base", a, b], completed.stderr)

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        completed = self._status("merge-base", "--is-ancestor", ancestor, descendant)
        if completed.returncode in (0, 1):
            return completed.returncode == 0
        raise classify_git_failure(
            ["git", "merge-base", "--is-ancestor", ancestor, descendant], completed.stderr
        )

    def fast_forward(self, target: str) -> None:
        """Move the current branch to `target`, which must descend from HEAD."""
        if self.head_commit() is None:
            branch = self.current_branch()
            if branch is None:
                raise GitError("cannot fast-forward a detached HEAD")
            self._git("update-ref", f"refs/heads/{branch}", target)
            self._git("reset", "-q", "--hard", "HEAD")
            return
        self._git("merge", "-q", "--ff-only", target)

    def rebase(self, onto: str, root: bool = False) -> None:
        """
        Replay local commits onto `onto`.

        With root=True every commit reachable from HEAD is replayed, which
        is what an unrelated history needs. A conflicting step is aborted
        before RebaseConflict is raised, so HEAD and the index are back at
        their pre-rebase state.
        """
        args = ["rebase", "--onto", onto, "--root"] if root else ["rebase", onto]
        completed = self._status(*args, env=NON_INTERACTIVE_ENV)
        if completed.returncode == 0:
            return
        if not self.rebase_in_progress():
            raise classify_git_failure(["git", *args], completed.stderr or completed.stdout)

        conflicts = self.conflicted_paths()
        LOG.info("Rebase onto %s conflicted (%s); aborting", onto, ", ".join(conflicts))
        self._git("rebase", "--abort")
        raise RebaseConflict(conflicts[0] if conflicts else None, onto)

    def rebase_in_progress(self) -> bool:
        for name in ("rebase-merge", "rebase-apply"):
            git_path = self._git("rev-parse", "--git-path", name)
            if os.path.isdir(os.path.join(self.path, git_path)):
                return True
        return False

    def conflicted_paths(self) -> List[str]:
        out = self._git("diff", "--name-only", "--diff-filter=U", "-z", strip=False)
        return [path for path in out.split("\0") if path]

    # ------------------------------------------------------------------
    # Branches and configuration
    # ------------------------------------------------------------------
    def create_branch(self, name: str, start_point: str = "HEAD") -> None:
        self._git("branch", name, start_point)

    def switch(self, name: str) -> None:
        self._git("checkout", "-q", name)

    def delete_branch(self, name: str) -> None:
        self._git("branch", "-D", name)

    def set_upstream(self, branch: str, upstream: str) -> bool:
        """Point `branch` at `upstream`. Returns False when it already was."""
        if self.upstream(branch) == upstream:
            return False
        self._git("branch", f"--set-upstream-to={upstream}", branch)
        return True

    def set_identity(self, name: str, email: str, global_scope: bool = False) -> None:
        scope = "--global" if global_scope else "--local"
        self._git("config", scope, "user.name", name)
        self._git("config", scope, "user.email", email)
