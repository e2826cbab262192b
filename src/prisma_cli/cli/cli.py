from __future__ import annotations

import logging
import importlib
from typing import Any, List, Optional
from pathlib import Path

import click

from ..utils import setup_logging


__all__ = ('cli', 'main')

log: logging.Logger = logging.getLogger(__name__)

COMMANDS_PACKAGE = 'prisma_cli.cli.commands'
COMMANDS_DIR = Path(__file__).parent / 'commands'

# top-level flags that are shorthands for a command
ALIASES = {
    '-v': 'version',
    '--version': 'version',
}


class PrismaCLI(click.Group):
    """Group that imports commands from the `commands` package on demand"""

    def list_commands(self, ctx: click.Context) -> List[str]:
        return sorted(
            path.stem for path in COMMANDS_DIR.glob('*.py') if not path.stem.startswith('_')
        )

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        name = f'{COMMANDS_PACKAGE}.{cmd_name}'
        try:
            module = importlib.import_module(name)
        except ModuleNotFoundError as exc:
            if exc.name != name:
                raise
            return None

        command = getattr(module, 'cli', None)
        if not isinstance(command, click.Command):
            log.debug('Module %s does not define a command', name)
            return None

        return command

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        if args and args[0] in ALIASES:
            args = [ALIASES[args[0]], *args[1:]]
        return super().parse_args(ctx, args)


@click.group(cls=PrismaCLI, context_settings={'help_option_names': ['-h', '--help']})
def cli() -> None:
    """Python CLI for inspecting a Prisma installation."""


def main(args: Optional[List[str]] = None, **kwargs: Any) -> Any:
    setup_logging()
    return cli.main(args=args, prog_name='prisma-cli', **kwargs)
