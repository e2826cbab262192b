from __future__ import annotations

import os
import asyncio
import logging
from pathlib import Path

from . import platform
from .errors import EngineNotFoundError
from ._probe import get_engine_version
from ._types import ENGINE_ENV_VARS, EngineInfo, EngineType
from .._config import Config


__all__ = (
    'engine_filename',
    'engine_search_paths',
    'resolve_engine_path',
    'get_engine_info',
    'get_cli_query_engine_type',
)

log: logging.Logger = logging.getLogger(__name__)


def get_cli_query_engine_type(config: Config | None = None) -> EngineType:
    config = config or Config.load()
    if config.cli_query_engine_type == 'binary':
        return EngineType.query_engine
    return EngineType.libquery_engine


def engine_filename(engine_type: EngineType, binary_platform: str) -> str:
    """Return the name the engine file is installed under for the given platform"""
    if engine_type == EngineType.libquery_engine:
        if 'windows' in binary_platform:
            return f'query_engine-{binary_platform}.dll.node'
        if 'darwin' in binary_platform:
            return f'libquery_engine-{binary_platform}.dylib.node'
        return f'libquery_engine-{binary_platform}.so.node'

    extension = '.exe' if binary_platform == 'windows' else ''
    return f'{engine_type}-{binary_platform}{extension}'


def engine_search_paths(config: Config) -> list[Path]:
    """Directories searched for engine files, in order of precedence.

    1. PRISMA_ENGINES_DIR environment variable
    2. Binary cache directory (~/.cache/prisma-python/binaries/...)
    3. node_modules/@prisma/engines in the current working directory
    4. node_modules/prisma in the current working directory
    """
    paths: list[Path] = []
    if config.engines_dir is not None:
        paths.append(config.engines_dir)

    cwd = Path.cwd()
    paths.extend(
        [
            config.binary_cache_dir,
            cwd / 'node_modules' / '@prisma' / 'engines',
            cwd / 'node_modules' / 'prisma',
        ]
    )
    return paths


async def resolve_engine_path(
    engine_type: EngineType,
    config: Config | None = None,
    *,
    binary_platform: str | None = None,
) -> Path:
    """Resolve the default location of an engine, ignoring any environment overrides"""
    config = config or Config.load()
    if binary_platform is None:
        binary_platform = await platform.binary_platform()

    filename = engine_filename(engine_type, binary_platform)
    searched: list[Path] = []
    for directory in engine_search_paths(config):
        path = directory / filename
        searched.append(path)
        if await asyncio.to_thread(path.is_file):
            log.debug('Resolved %s to %s', engine_type, path)
            return path

    raise EngineNotFoundError(engine_type, searched)


async def get_engine_info(
    engine_type: EngineType,
    config: Config | None = None,
    *,
    binary_platform: str | None = None,
) -> EngineInfo:
    config = config or Config.load()

    env_var = ENGINE_ENV_VARS[engine_type]
    env_path = os.environ.get(env_var)
    if env_path:
        path = Path(env_path)
        if await asyncio.to_thread(path.exists):
            version = await get_engine_version(path, engine_type, config)
            return EngineInfo(path=path, version=version, from_env_var=env_var)

        log.warning('%s=%s does not exist, falling back to the default engine', env_var, env_path)

    path = await resolve_engine_path(engine_type, config, binary_platform=binary_platform)
    version = await get_engine_version(path, engine_type, config)
    return EngineInfo(path=path, version=version)
