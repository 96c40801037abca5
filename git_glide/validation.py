"""Linting and validation functions for commit messages."""

from .config import COMMIT_SUBJECT_RE


def is_conventional(subject):
    """Return True if `subject` follows `<type>(<scope>): <description>`."""
    return bool(COMMIT_SUBJECT_RE.match(subject or ""))


def lint_git_commit_subject(subject):
    """
    Validate a git commit subject line.

    Raises ValueError if validation fails.
    """
    if "\n" in (subject or ""):
        raise ValueError("Commit subject must be a single line")
    if not is_conventional(subject):
        raise ValueError("Commit subject must match the format: <type>(<scope>): <subject>")
