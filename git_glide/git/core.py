"""Core git utilities and subprocess wrappers."""

import logging
import os
import shlex
import subprocess

from ..errors import AuthFailure, GitError, NetworkFailure

LOG = logging.getLogger(__name__)

AUTH_ERROR_MARKERS = (
    "permission denied (publickey",
    "authentication failed",
    "could not read username",
    "could not read password",
    "invalid username or password",
    "host key verification failed",
    "the requested url returned error: 401",
    "the requested url returned error: 403",
)

NETWORK_ERROR_MARKERS = (
    "could not resolve host",
    "could not resolve hostname",
    "connection refused",
    "connection timed out",
    "operation timed out",
    "network is unreachable",
    "failed to connect",
    "does not appear to be a git repository",
    "repository not found",
    "unable to access",
)


def _argv(cmd):
    args = list(cmd) if isinstance(cmd, (list, tuple)) else shlex.split(cmd)
    if args and args[0] == "git":
        return args
    return ["git", *args]


def _environment(env):
    if not env:
        return None
    merged = dict(os.environ)
    merged.update(env)
    return merged


def run_status(cmd, cwd=None, env=None):
    """
    Run a git command without checking its exit status.

    Used for commands whose exit code is the answer (merge-base
    --is-ancestor, rev-parse --verify, ...).
    """
    args = _argv(cmd)
    LOG.debug("Running git command: %s", " ".join(args))
    try:
        return subprocess.run(
            args,
            cwd=cwd,
            env=_environment(env),
            capture_output=True,
            # Paths are raw bytes to git; surrogateescape keeps non-UTF-8 names intact.
            encoding="utf-8",
            errors="surrogateescape",
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitError("git command not found. Please install git.", args) from exc


def run(cmd, cwd=None, env=None, strip=True):
    """
    Run a git command and return its output.

    Accepts either a string (split using shlex) or an argv list; a leading
    "git" is optional. We avoid invoking a shell so file paths containing
    characters like '(' and ')' are handled safely. Raises GitError (or
    one of its transport subclasses) on a non-zero exit.
    """
    completed = run_status(cmd, cwd=cwd, env=env)
    if completed.returncode != 0:
        args = _argv(cmd)
        LOG.debug("git stderr: %s", completed.stderr)
        raise classify_git_failure(args, completed.stderr or completed.stdout or "")
    return completed.stdout.strip() if strip else completed.stdout


def classify_git_failure(args, stderr):
    """Map a failed git invocation to the matching GitError subclass."""
    detail = stderr.strip()
    message = f"git command failed: {' '.join(args)}"
    if detail:
        message = f"{message}\n{detail}"
    lowered = detail.lower()
    if any(marker in lowered for marker in AUTH_ERROR_MARKERS):
        return AuthFailure(message, args, stderr)
    if any(marker in lowered for marker in NETWORK_ERROR_MARKERS):
        return NetworkFailure(message, args, stderr)
    return GitError(message, args, stderr)
