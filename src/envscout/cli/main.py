"""envscout CLI."""

from pathlib import Path

import click

from envscout import __version__
from envscout.cli.git_status import git_status_command
from envscout.cli.status import status_command
from envscout.config import load_config
from envscout.core.errors import ConfigError
from envscout.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="envscout")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ~/.config/envscout/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """envscout - discover the tool-chains this machine can run."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e
    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(status_command, name="status")
cli.add_command(git_status_command, name="git-status")


if __name__ == "__main__":
    cli()
