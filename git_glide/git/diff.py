"""Parsers for git's -z diff listings."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class FileChange:
    """One file entry of a staged diff as reported by git."""

    path: str
    status: str
    insertions: int = 0
    deletions: int = 0
    old_path: Optional[str] = None


def parse_name_status(output):
    """
    Parse `git diff --name-status -z` output.

    Returns a list of (status_letter, path, old_path) tuples. Rename and
    copy entries carry a similarity score ("R087") and two paths.
    """
    fields = output.split("\0")
    entries: List[Tuple[str, str, Optional[str]]] = []
    i = 0
    while i < len(fields):
        status = fields[i]
        if not status:
            i += 1
            continue
        letter = status[0]
        if letter in ("R", "C"):
            old_path, new_path = fields[i + 1], fields[i + 2]
            entries.append((letter, new_path, old_path))
            i += 3
        else:
            entries.append((letter, fields[i + 1], None))
            i += 2
    return entries


def _count(value):
    # Binary files report "-" for both counts.
    return 0 if value == "-" else int(value)


def parse_numstat(output):
    """
    Parse `git diff --numstat -z` output into {path: (insertions, deletions)}.

    Renames are reported as "ins<TAB>del<TAB>" followed by the old and new
    paths as separate NUL-terminated fields; they are keyed by new path.
    """
    fields = output.split("\0")
    stats: Dict[str, Tuple[int, int]] = {}
    i = 0
    while i < len(fields):
        record = fields[i]
        if not record:
            i += 1
            continue
        ins, dels, path = record.split("\t", 2)
        if path:
            i += 1
        else:
            path = fields[i + 2]
            i += 3
        stats[path] = (_count(ins), _count(dels))
    return stats


def merge_diff_listings(name_status_output, numstat_output):
    """Combine the name-status and numstat listings into FileChange entries."""
    stats = parse_numstat(numstat_output)
    changes = []
    for letter, path, old_path in parse_name_status(name_status_output):
        insertions, deletions = stats.get(path, (0, 0))
        changes.append(
            FileChange(
                path=path,
                status=letter,
                insertions=insertions,
                deletions=deletions,
                old_path=old_path,
            )
        )
    return changes
