"""Subscriber metadata commands."""

import json
import logging

import click

from . import cli
from .shared import write_description

logger = logging.getLogger("convoy.cli")


@cli.group()
def subscribers():
    """Read or rewrite the Subscribers: line of a description."""
    pass


@subscribers.command("show")
@click.argument("file", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON array")
def subscribers_show(file, as_json):
    """List subscribers, one per line."""
    from convoy.subscribers import extract_subscribers

    subs = extract_subscribers(file.read())
    if as_json:
        click.echo(json.dumps(subs))
        return
    for sub in subs:
        click.echo(sub)


@subscribers.command("set")
@click.argument("subs", nargs=-1)
@click.option("--file", "-f", type=click.File("r"), default="-", help="Description file (default: stdin)")
def subscribers_set(subs, file):
    """Replace the subscriber list. No SUBS removes the line."""
    from convoy.subscribers import update_subscribers

    write_description(update_subscribers(file.read(), list(subs)))


@subscribers.command("add")
@click.argument("subs", nargs=-1, required=True)
@click.option("--file", "-f", type=click.File("r"), default="-", help="Description file (default: stdin)")
def subscribers_add(subs, file):
    """Add subscribers not already on the list."""
    from convoy.subscribers import add_subscribers, extract_subscribers, update_subscribers

    description = file.read()
    current = extract_subscribers(description)
    new = add_subscribers(current, subs)
    logger.debug(f"Subscribers {current} -> {new}")
    write_description(update_subscribers(description, new))


@subscribers.command("remove")
@click.argument("subs", nargs=-1, required=True)
@click.option("--file", "-f", type=click.File("r"), default="-", help="Description file (default: stdin)")
def subscribers_remove(subs, file):
    """Remove subscribers from the list."""
    from convoy.subscribers import extract_subscribers, remove_subscribers, update_subscribers

    description = file.read()
    current = extract_subscribers(description)
    new = remove_subscribers(current, subs)
    missing = [s for s in subs if s not in current]
    if missing:
        click.echo(f"Not subscribed: {', '.join(missing)}", err=True)
    write_description(update_subscribers(description, new))
