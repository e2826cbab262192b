from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from .._config import Config


__all__ = (
    'get_schema_path',
    'load_env_file',
)

log: logging.Logger = logging.getLogger(__name__)


def get_schema_path(config: Config | None = None) -> Path | None:
    """Find the schema for the current project.

    Search order:
    1. PRISMA_SCHEMA_PATH environment variable
    2. ./schema.prisma
    3. ./prisma/schema.prisma
    """
    config = config or Config.load()
    if config.schema_path is not None:
        if config.schema_path.is_file():
            return config.schema_path
        log.warning('PRISMA_SCHEMA_PATH=%s does not exist', config.schema_path)

    cwd = Path.cwd()
    for candidate in (cwd / 'schema.prisma', cwd / 'prisma' / 'schema.prisma'):
        if candidate.is_file():
            log.debug('Found project schema at %s', candidate)
            return candidate

    return None


def load_env_file(schema_path: Path | None = None) -> Path | None:
    """Load the first `.env` file found next to the schema or in the project root.

    Variables that are already set in the environment take precedence.
    """
    cwd = Path.cwd()
    candidates: list[Path] = []
    if schema_path is not None:
        candidates.append(schema_path.parent / '.env')
    candidates.extend([cwd / 'prisma' / '.env', cwd / '.env'])

    for candidate in candidates:
        if candidate.is_file():
            load_dotenv(candidate, override=False)
            log.debug('Loaded environment variables from %s', candidate)
            return candidate

    return None
