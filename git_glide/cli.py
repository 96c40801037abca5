"""CLI commands and entry point."""

import click

from . import workflows
from .config import DEFAULT_REMOTE, __version__
from .errors import GitGlideError
from .git import Repository
from .logging_utils import configure_logging
from .reconcile import ReconciliationOutcome
from .ui import format_change_preview, format_outcome, printable, step
from .validation import is_conventional


def _fail(exc):
    click.secho(f"Error: {printable(str(exc))}", fg="red", err=True)
    raise SystemExit(exc.exit_code)


def _repo(ctx):
    try:
        return Repository(ctx.obj["path"])
    except GitGlideError as exc:
        _fail(exc)


@click.group()
@click.version_option(version=__version__)
@click.option("-C", "--path", default=".", show_default=True, help="Path of the repository")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (repeatable)")
@click.pass_context
def cli(ctx, path, verbose):
    """git-glide: branch, save, sync and finish without the bookkeeping."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["path"] = path


@cli.command()
@click.option("-m", "--message", default=None, help="Use this commit message verbatim")
@click.option("-d", "--dry-run", is_flag=True, help="Preview the message and changes without committing")
@click.option("-r", "--remote", default=DEFAULT_REMOTE, show_default=True, help="Remote to push to")
@click.pass_context
def save(ctx, message, dry_run, remote):
    """Stage everything, commit with a generated message and push."""
    repo = _repo(ctx)
    if message and message.strip() and not is_conventional(message.strip().splitlines()[0]):
        click.secho("Note: message is not a conventional commit header; using it as-is.", fg="yellow")
    try:
        result = workflows.save(repo, message=message, dry_run=dry_run, remote=remote)
    except GitGlideError as exc:
        _fail(exc)

    if result.dry_run:
        click.secho("\n[DRY RUN] Would have committed with message:", fg="yellow")
        click.echo(f">> {printable(result.message.header)}")
        if result.message.body:
            click.echo(printable(result.message.body))
        click.echo()
        click.echo(format_change_preview(result.summary))
        click.echo("\nTo execute, run without the --dry-run flag.")
        return

    if result.pushed:
        click.secho(f"Saved and pushed {result.commit[:7]}: {printable(result.message.header)}", fg="green", bold=True)
    else:
        click.secho(f"Saved {result.commit[:7]}: {printable(result.message.header)}", fg="green", bold=True)


@cli.command()
@click.argument("url")
@click.option("-n", "--name", default=DEFAULT_REMOTE, show_default=True, help="The name of the remote")
@click.pass_context
def remote(ctx, url, name):
    """Set or update a remote URL and sync the current branch with it."""
    repo = _repo(ctx)
    try:
        result = workflows.link_remote(repo, url, name=name)
    except GitGlideError as exc:
        _fail(exc)

    reconciliation = result.reconciliation
    if reconciliation.outcome is ReconciliationOutcome.REMOTE_EMPTY:
        step(format_outcome(reconciliation))
        return
    if reconciliation.tracking_changed:
        step("Tracking relationship established")
    click.secho(format_outcome(reconciliation), fg="green", bold=True)


@cli.command()
@click.option("-n", "--name", required=True, help="Name of the feature branch")
@click.option("-r", "--remote", default=DEFAULT_REMOTE, show_default=True, help="Remote to sync with")
@click.pass_context
def feature(ctx, name, remote):
    """Pull, then switch to (creating if needed) a feature branch and push it."""
    repo = _repo(ctx)
    try:
        result = workflows.feature(repo, name, remote=remote)
    except GitGlideError as exc:
        _fail(exc)
    verb = "Created" if result.created else "Switched to"
    click.secho(f"{verb} branch {result.branch}", fg="green", bold=True)


@cli.command()
@click.option("--no-clean", is_flag=True, help="Keep the finished branch")
@click.option("-r", "--remote", default=DEFAULT_REMOTE, show_default=True, help="Remote to pull from")
@click.pass_context
def done(ctx, no_clean, remote):
    """Switch back to main, pull it, and delete the finished branch."""
    repo = _repo(ctx)
    try:
        result = workflows.done(repo, no_clean=no_clean, remote=remote)
    except GitGlideError as exc:
        _fail(exc)
    if result.already_on_main:
        click.echo(f"Already on {result.main_branch}, nothing to finalize.")
    elif result.deleted:
        click.secho(f"Finished {result.finished_branch}; back on {result.main_branch}", fg="green", bold=True)
    else:
        click.secho(f"Back on {result.main_branch}; kept {result.finished_branch}", fg="green", bold=True)


@cli.command()
@click.argument("name")
@click.argument("email")
@click.option("-g", "--global", "global_scope", is_flag=True,
              help="Set settings globally (~/.gitconfig) instead of locally")
@click.pass_context
def creds(ctx, name, email, global_scope):
    """Configure the commit identity."""
    repo = _repo(ctx)
    try:
        scope = workflows.set_identity(repo, name, email, global_scope=global_scope)
    except GitGlideError as exc:
        _fail(exc)
    step(f"Configured {scope} as {name} <{email}>")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
