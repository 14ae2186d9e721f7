"""Shared utilities for convoy CLI commands."""

import logging

import click

from rich.console import Console

console = Console()

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", log_file: str | None = None):
    """Configure root logging: stderr always, plus a file when configured.

    Leaves an already configured root logger alone and only sets the level.
    """
    if not logging.getLogger().handlers:
        handlers: list[logging.Handler] = [logging.StreamHandler()]  # stderr
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        logging.basicConfig(level=logging.WARNING, format=_log_format, handlers=handlers)
    logging.getLogger("convoy").setLevel(level.upper())


def write_description(text: str):
    """Print a description without adding a second trailing newline."""
    click.echo(text, nl=not text.endswith("\n"))
