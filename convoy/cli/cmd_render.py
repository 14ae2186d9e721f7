"""Template rendering commands."""

import dataclasses
import typing

import click

from . import cli
from .shared import console, write_description

from rich.table import Table


def _coerce(name: str, annotation, raw: str):
    """Convert a --set value to the field's declared type."""
    if annotation is int:
        try:
            return int(raw)
        except ValueError:
            raise click.BadParameter(f"{name} must be an integer, got {raw!r}", param_hint="--set")
    if annotation is bool:
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if typing.get_origin(annotation) is list:
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


def _build_data(cls, pairs: tuple[str, ...]):
    """Build a template data record from key=value pairs."""
    hints = typing.get_type_hints(cls)
    values = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip().replace("-", "_")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--set")
        if key not in hints:
            fields = ", ".join(f.name for f in dataclasses.fields(cls))
            raise click.BadParameter(f"unknown field {key!r} (fields: {fields})", param_hint="--set")
        values[key] = _coerce(key, hints[key], raw)

    required = [
        f.name for f in dataclasses.fields(cls)
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    ]
    missing = [name for name in required if name not in values]
    if missing:
        raise click.ClickException(f"missing field(s) for template: {', '.join(missing)}")
    return cls(**values)


def _load_templates(ctx):
    from convoy.errors import ConvoyError
    from convoy.templates import Templates

    settings = ctx.find_root().obj
    try:
        return Templates(settings.template_dir if settings else None)
    except ConvoyError as e:
        raise click.ClickException(str(e))


@cli.group()
def render():
    """Render role briefings and messages."""
    pass


@render.command("role")
@click.argument("role")
@click.option("--set", "pairs", multiple=True, metavar="KEY=VALUE", help="Template field (repeatable)")
@click.pass_context
def render_role(ctx, role, pairs):
    """Render the briefing for ROLE."""
    from convoy.errors import ConvoyError
    from convoy.templates import RoleData

    templates = _load_templates(ctx)
    data = _build_data(RoleData, ("role=" + role,) + tuple(pairs))
    try:
        write_description(templates.render_role(role, data))
    except ConvoyError as e:
        raise click.ClickException(str(e))


@render.command("message")
@click.argument("name")
@click.option("--set", "pairs", multiple=True, metavar="KEY=VALUE", help="Template field (repeatable)")
@click.pass_context
def render_message(ctx, name, pairs):
    """Render message NAME (spawn, nudge, escalation, handoff)."""
    from convoy.errors import ConvoyError
    from convoy.templates import MESSAGE_DATA

    templates = _load_templates(ctx)
    cls = MESSAGE_DATA.get(name)
    if cls is None:
        raise click.ClickException(f"message template not found: {name}")
    data = _build_data(cls, tuple(pairs))
    try:
        write_description(templates.render_message(name, data))
    except ConvoyError as e:
        raise click.ClickException(str(e))


@cli.command("templates")
@click.pass_context
def templates_list(ctx):
    """List available role and message templates."""
    from convoy.templates import MESSAGE_DATA, RoleData

    templates = _load_templates(ctx)

    table = Table(title=f"Templates ({templates.template_dir})")
    table.add_column("Kind", style="bold")
    table.add_column("Name")
    table.add_column("Fields")
    role_fields = ", ".join(f.name for f in dataclasses.fields(RoleData))
    for role in templates.role_names():
        table.add_row("role", role, role_fields)
    for name in templates.message_names():
        fields = ", ".join(f.name for f in dataclasses.fields(MESSAGE_DATA[name]))
        table.add_row("message", name, fields)
    console.print(table)
