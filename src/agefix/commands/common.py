"""Shared plumbing for CLI commands."""

from __future__ import annotations

import asyncio
import json
import sys
from decimal import Decimal
from typing import Any, Coroutine, TypeVar

import click

from ..client import LedgerClient
from ..config import ClientConfig
from ..errors import AgefixError

T = TypeVar("T")


def get_client(ctx: click.Context) -> LedgerClient:
    config: ClientConfig = ctx.find_root().obj["config"]
    return LedgerClient(config)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a client coroutine, turning library errors into exit codes.

    ValueError/TypeError come from argument validation (bad address,
    float amount, unsafe template name) and are reported as usage errors.
    """
    try:
        return asyncio.run(coro)
    except AgefixError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
    except (ValueError, TypeError) as exc:
        raise click.UsageError(str(exc)) from exc


def parse_args(args_json: str) -> list[Any]:
    """Parse a --args JSON array; fractional numbers stay Decimal."""
    try:
        args = json.loads(args_json, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--args") from exc
    if not isinstance(args, list):
        raise click.BadParameter("Args must be a JSON array", param_hint="--args")
    return args


def echo_fields(title: str, fields: list[tuple[str, Any]]) -> None:
    click.secho(title, fg="green")
    width = max(len(label) for label, _ in fields) + 2
    for label, value in fields:
        click.echo(click.style(f"  {label + ':':<{width}}", dim=True) + str(value))


args_option = click.option(
    "--args", "args_json", default="[]", show_default=True, help="Arguments as a JSON array"
)
