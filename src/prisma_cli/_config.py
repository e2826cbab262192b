from __future__ import annotations

import logging
from typing import Any, ClassVar
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Literal

from ._constants import ENGINE_VERSION, PRISMA_VERSION


__all__ = ('Config',)

log: logging.Logger = logging.getLogger(__name__)

QueryEngineType = Literal['library', 'binary']


def _default_binary_cache_dir() -> Path:
    return Path.home() / '.cache' / 'prisma-python' / 'binaries' / PRISMA_VERSION / ENGINE_VERSION


class Config(BaseSettings):
    """Settings read from `PRISMA_*` environment variables.

    A fresh instance should be loaded for every command invocation so that
    changes to the environment, e.g. from a loaded `.env` file, are respected.
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix='PRISMA_',
        case_sensitive=False,
        extra='ignore',
    )

    engines_dir: Path | None = None
    binary_cache_dir: Path = Field(default_factory=_default_binary_cache_dir)
    cli_query_engine_type: QueryEngineType = 'library'
    schema_path: Path | None = None
    node_binary: str = 'node'

    @field_validator('cli_query_engine_type', mode='before')
    @classmethod
    def _fallback_engine_type(cls, value: Any) -> Any:
        if isinstance(value, str) and value in ('library', 'binary'):
            return value

        log.debug('Ignoring unknown query engine type %r, using library', value)
        return 'library'

    @field_validator('engines_dir', 'schema_path', mode='before')
    @classmethod
    def _empty_path_is_unset(cls, value: Any) -> Any:
        if value == '':
            return None
        return value

    @classmethod
    def load(cls) -> Config:
        return cls()
