"""CLI module."""

from envscout.cli.main import cli

__all__ = ["cli"]
