"""envscout git-status command - show repository facts for a directory."""

import json
from pathlib import Path

import click

from envscout.git.repo_status import get_git_repo_status


@click.command()
@click.argument(
    "path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def git_status_command(path: Path, as_json: bool) -> None:
    """Show branch, change and remote information for PATH (default: current directory)."""
    status = get_git_repo_status(path.resolve())

    if as_json:
        click.echo(json.dumps(status.to_dict()))
        return

    if not status.is_repo:
        click.echo(f"{path.resolve()}: not a git repository")
        return

    click.echo(f"Branch: {status.branch or '(detached)'}")
    click.echo(f"Changes: {'yes' if status.has_changes else 'no'}")
    click.echo(f"Remote: {status.remote_url or '(none)'}")
