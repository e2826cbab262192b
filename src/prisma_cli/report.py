"""
Collection and rendering of the version report printed by `prisma-cli version`.
"""

from __future__ import annotations

import os
import re
import json
import time
import asyncio
import logging
from typing import List, Tuple
from pathlib import Path
from importlib.metadata import PackageNotFoundError, version as package_version

from . import __title__, __version__
from .utils import time_since
from .errors import SchemaError
from .engine import EngineInfo, EngineType, platform, get_engine_info, get_cli_query_engine_type
from .schema import parse_config, get_schema_path
from ._config import Config
from ._constants import CLIENT_DISTRIBUTION, CLIENT_NOT_FOUND, ENGINE_VERSION, STUDIO_VERSION


__all__ = (
    'VersionRow',
    'get_version_rows',
    'get_feature_flags',
    'get_client_version',
    'format_engine_info',
    'render_table',
    'slugify',
)

log: logging.Logger = logging.getLogger(__name__)

VersionRow = Tuple[str, str]


def get_client_version() -> str | None:
    try:
        return package_version(CLIENT_DISTRIBUTION)
    except PackageNotFoundError:
        return None


async def get_feature_flags(schema_path: Path | None) -> List[str]:
    """Return the preview features of the first generator that declares any.

    An unreadable or invalid schema is treated the same as a schema without
    preview features, reporting versions must still work in that case.
    """
    if schema_path is None:
        return []

    try:
        datamodel = await asyncio.to_thread(schema_path.read_text, 'utf-8')
        config = parse_config(datamodel)
    except (OSError, ValueError, SchemaError) as exc:
        log.debug('Ignoring schema at %s: %s', schema_path, exc)
        return []

    for generator in config.generators:
        if generator.preview_features:
            return list(generator.preview_features)

    return []


def format_engine_info(info: EngineInfo) -> str:
    try:
        location = os.path.relpath(info.path, Path.cwd())
    except ValueError:
        # different drives on windows
        location = str(info.path)

    resolved = f', resolved by {info.from_env_var}' if info.from_env_var else ''
    return f'{info.version} (at {location}{resolved})'


async def get_version_rows(config: Config | None = None) -> List[VersionRow]:
    config = config or Config.load()
    start = time.monotonic()

    binary_platform = await platform.binary_platform()
    query_engine_type = get_cli_query_engine_type(config)
    schema_path = get_schema_path(config)

    query_engine, migration_engine, introspection_engine, fmt_engine, feature_flags = await asyncio.gather(
        get_engine_info(query_engine_type, config, binary_platform=binary_platform),
        get_engine_info(EngineType.migration_engine, config, binary_platform=binary_platform),
        get_engine_info(EngineType.introspection_engine, config, binary_platform=binary_platform),
        get_engine_info(EngineType.prisma_fmt, config, binary_platform=binary_platform),
        get_feature_flags(schema_path),
    )
    log.debug('Collected version information in %s', time_since(start))

    if query_engine_type == EngineType.libquery_engine:
        query_engine_label = 'Query Engine (Node-API)'
    else:
        query_engine_label = 'Query Engine (Binary)'

    rows: List[VersionRow] = [
        (__title__, __version__),
        ('Prisma Client Python', get_client_version() or CLIENT_NOT_FOUND),
        ('Current platform', binary_platform),
        (query_engine_label, format_engine_info(query_engine)),
        ('Migration Engine', format_engine_info(migration_engine)),
        ('Introspection Engine', format_engine_info(introspection_engine)),
        ('Format Engine', format_engine_info(fmt_engine)),
        ('Studio', STUDIO_VERSION),
        ('Default Engines Hash', ENGINE_VERSION),
    ]

    if feature_flags:
        rows.append(('Preview Features', ', '.join(feature_flags)))

    return rows


def slugify(label: str) -> str:
    return re.sub(r'\s+', '-', label.lower())


def render_table(rows: List[VersionRow], *, as_json: bool = False) -> str:
    if as_json:
        return json.dumps({slugify(label): value for label, value in rows}, indent=2, ensure_ascii=False)

    width = max((len(label) for label, _ in rows), default=0)
    return '\n'.join(f'{label.ljust(width)} : {value}' for label, value in rows)
