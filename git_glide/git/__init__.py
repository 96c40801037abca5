"""Git utilities package."""

from .core import classify_git_failure, run, run_status
from .diff import FileChange, merge_diff_listings, parse_name_status, parse_numstat
from .repository import Repository

__all__ = [
    "run",
    "run_status",
    "classify_git_failure",
    "FileChange",
    "parse_name_status",
    "parse_numstat",
    "merge_diff_listings",
    "Repository",
]
