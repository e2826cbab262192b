from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Mapping
from pathlib import Path
from dataclasses import dataclass


__all__ = (
    'EngineType',
    'EngineInfo',
    'ENGINE_ENV_VARS',
)


class EngineType(str, enum.Enum):
    query_engine = 'query-engine'
    libquery_engine = 'libquery-engine'
    migration_engine = 'migration-engine'
    introspection_engine = 'introspection-engine'
    prisma_fmt = 'prisma-fmt'

    def __str__(self) -> str:
        return self.value


ENGINE_ENV_VARS: Mapping[EngineType, str] = MappingProxyType(
    {
        EngineType.query_engine: 'PRISMA_QUERY_ENGINE_BINARY',
        EngineType.libquery_engine: 'PRISMA_QUERY_ENGINE_LIBRARY',
        EngineType.migration_engine: 'PRISMA_MIGRATION_ENGINE_BINARY',
        EngineType.introspection_engine: 'PRISMA_INTROSPECTION_ENGINE_BINARY',
        EngineType.prisma_fmt: 'PRISMA_FMT_BINARY',
    }
)


@dataclass(frozen=True)
class EngineInfo:
    path: Path
    version: str
    from_env_var: str | None = None
