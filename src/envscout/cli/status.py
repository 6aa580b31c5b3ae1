"""envscout status command - run detection and show the result."""

import asyncio
import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from envscout.config.models import EnvScoutConfig
from envscout.runtime.coordinator import RuntimeCoordinator
from envscout.runtime.models import BunStatus, RuntimeInitOptions, RuntimeStatus, ToolStatus


def _row(name: str, status: ToolStatus | BunStatus) -> tuple[str, str, str, str]:
    if not status.available:
        return name, "[red]missing[/red]", "-", escape(status.error or "")
    detail = status.path or ""
    if isinstance(status, BunStatus):
        detail = f"{detail} ({status.source})"
    return name, "[green]ok[/green]", status.version or "unknown", escape(detail)


def render_status(status: RuntimeStatus, console: Console) -> None:
    table = Table(title="Runtime environment")
    table.add_column("Tool")
    table.add_column("Status")
    table.add_column("Version")
    table.add_column("Details", overflow="fold")

    table.add_row(*_row("Node.js", status.node))
    table.add_row(*_row("Bun", status.bun))
    table.add_row(*_row("Git", status.git))

    if status.shell is not None:
        table.add_row(*_row("Git Bash", status.shell.git_bash))
        wsl = status.shell.wsl
        if wsl.available:
            default = wsl.default_distro or "no default"
            table.add_row(
                "WSL",
                "[green]ok[/green]",
                str(wsl.version) if wsl.version else "unknown",
                escape(f"{', '.join(wsl.distros)} (default: {default})"),
            )
        else:
            table.add_row("WSL", "[red]missing[/red]", "-", escape(wsl.error or ""))

    console.print(table)
    if status.shell is not None:
        console.print(f"Recommended shell: {status.shell.recommended or 'none available'}")
    console.print(f"Shell environment loaded: {'yes' if status.env_loaded else 'no'}")


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--skip-env-load", is_flag=True, help="Do not import the login-shell environment")
@click.option("--skip-node", is_flag=True, help="Skip Node.js detection")
@click.option("--skip-bun", is_flag=True, help="Skip Bun detection")
@click.option("--skip-git", is_flag=True, help="Skip Git detection")
@click.option("--skip-shell", is_flag=True, help="Skip Git Bash / WSL detection (Windows)")
@click.pass_context
def status_command(
    ctx: click.Context,
    as_json: bool,
    skip_env_load: bool,
    skip_node: bool,
    skip_bun: bool,
    skip_git: bool,
    skip_shell: bool,
) -> None:
    """Detect Node.js, Bun, Git and (on Windows) Git Bash / WSL."""
    config: EnvScoutConfig = ctx.obj.get("config") or EnvScoutConfig()
    options = RuntimeInitOptions(
        skip_env_load=skip_env_load,
        skip_node_detection=skip_node,
        skip_bun_detection=skip_bun,
        skip_git_detection=skip_git,
        skip_shell_detection=skip_shell,
    )

    coordinator = RuntimeCoordinator(config)
    status = asyncio.run(coordinator.initialize_runtime(options))

    if as_json:
        click.echo(json.dumps(status.to_dict(), indent=2))
    else:
        render_status(status, Console())
