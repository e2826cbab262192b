from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

import click

from ...report import get_version_rows, render_table
from ...schema import get_schema_path, load_env_file
from ...engine import EngineError
from ..._config import Config


log: logging.Logger = logging.getLogger(__name__)


def run(argv: Sequence[str]) -> str:
    """Return the rendered version report, or the help text, for the given arguments"""
    with cli.make_context('prisma-cli version', list(argv)) as ctx:
        return _render(ctx, **ctx.params)


def _render(
    ctx: click.Context,
    *,
    show_help: bool,
    output_json: bool,
    telemetry_information: str | None,
    show_version: bool = False,
) -> str:
    if show_help:
        return ctx.get_help()

    if telemetry_information is not None:
        log.debug('Telemetry information: %s', telemetry_information)

    schema_path = get_schema_path()
    load_env_file(schema_path)

    rows = asyncio.run(get_version_rows(Config.load()))
    return render_table(rows, as_json=output_json)


@click.command('version', short_help='Print current version of Prisma components.', add_help_option=False)
@click.option(
    '-h',
    '--help',
    'show_help',
    is_flag=True,
    is_eager=True,
    help='Display this help message',
)
@click.option(
    '--json',
    'output_json',
    is_flag=True,
    help='Output JSON',
)
@click.option(
    '--telemetry-information',
    'telemetry_information',
    default=None,
    hidden=True,
)
# `prisma-cli version -v` is accepted, the flag has no effect of its own
@click.option(
    '-v',
    '--version',
    'show_version',
    is_flag=True,
    hidden=True,
)
@click.pass_context
def cli(ctx: click.Context, **params: Any) -> None:
    """Print current version of Prisma components.

    Can also be invoked as `prisma-cli -v`.
    """
    try:
        output = _render(ctx, **params)
    except EngineError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(output)
