"""Display utilities and UI helpers."""

import click

from .reconcile import ReconciliationOutcome

OUTCOME_TEXT = {
    ReconciliationOutcome.ALREADY_UP_TO_DATE: "Already up to date",
    ReconciliationOutcome.FAST_FORWARDED: "Fast-forwarded to the remote branch",
    ReconciliationOutcome.REBASED_UNRELATED_HISTORIES: "Rebased local work onto unrelated remote history",
    ReconciliationOutcome.REBASED_ONTO_REMOTE: "Rebased local work onto the remote branch",
    ReconciliationOutcome.CONFLICT: "Conflict; rebase aborted",
    ReconciliationOutcome.REMOTE_EMPTY: "Remote is empty. Ready for your first 'save'.",
}


def printable(text):
    """Text safe to print; undecodable path bytes show as U+FFFD."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def step(message):
    """Print a workflow step banner."""
    click.secho(f"--- {printable(message)} ---", fg="cyan")


def format_change_preview(summary):
    """Format a change summary for preview display."""
    lines = []
    for idx, record in enumerate(summary.records, start=1):
        path = record.path
        if record.old_path:
            path = f"{record.old_path} -> {path}"
        lines.append(
            f"{idx}. {record.kind.value}: {printable(path)} (+{record.insertions}, -{record.deletions})"
        )
    return "\n".join(lines)


def format_outcome(result):
    """One-line description of a reconciliation result."""
    text = OUTCOME_TEXT[result.outcome]
    if result.upstream:
        text = f"{text} ({result.branch} -> {result.upstream})"
    return text
