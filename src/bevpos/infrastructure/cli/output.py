"""Shared CLI plumbing: container lookup and result/error rendering.

With ``--json`` every command prints one envelope:
``{"ok": true, "message": ..., "data": ...}`` on success and
``{"ok": false, "error": ..., "kind": ...}`` on failure.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable
from typing import NoReturn

import click

from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.bootstrap import Container, build_container
from bevpos.infrastructure.config import load_settings
from bevpos.infrastructure.logging_config import configure_logging


def get_container(ctx: click.Context) -> Container:
    """Build the container on first use; tests may pre-seed ``obj["container"]``."""
    root = ctx.find_root()
    obj = root.ensure_object(dict)
    if obj.get("container") is None:
        settings = load_settings()
        configure_logging(settings.log_level)
        obj["container"] = build_container(settings)
        root.call_on_close(obj["container"].dispose)
    return obj["container"]


def wants_json(ctx: click.Context) -> bool:
    return bool(ctx.find_root().ensure_object(dict).get("json"))


def to_data(value):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [to_data(item) for item in value]
    return value


def respond(
    ctx: click.Context,
    message: str,
    data=None,
    render: Callable[[], None] | None = None,
) -> None:
    if wants_json(ctx):
        payload = {"ok": True, "message": message, "data": to_data(data)}
        click.echo(json.dumps(payload, ensure_ascii=False))
        return
    if message:
        click.echo(message)
    if render is not None:
        render()


def fail(ctx: click.Context, exc: DomainException) -> NoReturn:
    if wants_json(ctx):
        payload = {"ok": False, "error": str(exc), "kind": type(exc).__name__}
        hint = getattr(exc, "hint", None)
        if hint:
            payload["hint"] = hint
        click.echo(json.dumps(payload, ensure_ascii=False))
        ctx.exit(1)
    raise click.ClickException(str(exc))
