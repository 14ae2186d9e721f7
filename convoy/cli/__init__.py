"""Convoy command line interface."""

import click
from convoy import __version__
from .shared import console, setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="convoy")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, debug):
    """Convoy: subscriber metadata and message templates"""
    from pydantic import ValidationError
    from convoy.config import load_settings

    try:
        settings = load_settings()
    except ValidationError as e:
        errors = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        raise click.ClickException(f"Invalid settings: {errors}")
    setup_logging("DEBUG" if debug else settings.log_level, settings.log_file)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands grouped by category."""
    console.print(f"[bold]Convoy v{__version__}[/bold]: subscriber metadata and message templates\n")

    groups = {
        "Subscribers": [
            ("subscribers show", "List subscribers in a description"),
            ("subscribers set", "Replace the subscriber list"),
            ("subscribers add", "Add subscribers (skips ones already present)"),
            ("subscribers remove", "Remove subscribers"),
        ],
        "Templates": [
            ("render role", "Render a role briefing"),
            ("render message", "Render a spawn/nudge/escalation/handoff message"),
            ("templates", "List available templates"),
        ],
    }

    for category, commands in groups.items():
        console.print(f"  [bold cyan]{category}[/bold cyan]")
        for name, desc in commands:
            console.print(f"    [bold]convoy {name:20s}[/bold] {desc}")
        console.print()

    console.print("[dim]Descriptions are read from stdin unless a file is given.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_subscribers  # noqa: E402, F401
from . import cmd_render  # noqa: E402, F401


@cli.command(name="help", hidden=True)
def help_cmd():
    """Show all available commands."""
    _show_help()


def main():
    """CLI entry point."""
    import sys
    try:
        cli(standalone_mode=False)
    except click.UsageError as e:
        if e.ctx:
            click.echo(e.ctx.command.get_usage(e.ctx), err=True)
        click.echo("Try 'convoy help' for help.\n", err=True)
        click.echo(f"Error: {e.format_message()}", err=True)
        sys.exit(2)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.exceptions.Exit as e:
        sys.exit(e.code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
