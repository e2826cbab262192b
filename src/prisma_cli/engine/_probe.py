from __future__ import annotations

import re
import json
import asyncio
import logging
from pathlib import Path

from .errors import EngineNotFoundError, EngineVersionError
from ._types import EngineType
from .._config import Config


__all__ = ('get_engine_version',)

log: logging.Logger = logging.getLogger(__name__)

# e.g. `query-engine 1c05d2fd02981d04d5367319e82f44e1c44ec0b7`
VERSION_LINE = re.compile(r'^(?P<name>[\w.-]+)\s+(?P<version>\S+)$')

# loads a Node-API library and prints its version metadata as JSON
NODE_API_VERSION_SCRIPT = (
    'const library = require(process.argv[1]);'
    'process.stdout.write(JSON.stringify(library.version()));'
)


async def get_engine_version(
    path: Path,
    engine_type: EngineType,
    config: Config | None = None,
) -> str:
    """Return the version string reported by the engine at the given path.

    Binary engines are asked with `--version`, the Node-API query engine is
    loaded through node as it cannot be executed directly.
    """
    if not await asyncio.to_thread(path.exists):
        raise EngineNotFoundError(engine_type, [path])

    if engine_type == EngineType.libquery_engine:
        node = (config or Config.load()).node_binary
        stdout = await _run(
            [node, '-e', NODE_API_VERSION_SCRIPT, str(path.absolute())],
            engine_type=engine_type,
            path=path,
        )
        return _parse_library_version(stdout, path=path)

    stdout = await _run([str(path), '--version'], engine_type=engine_type, path=path)
    return _parse_binary_version(stdout, engine_type=engine_type, path=path)


async def _run(args: list[str], *, engine_type: EngineType, path: Path) -> str:
    log.debug('Running %s', args)
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise EngineVersionError(str(exc), engine_type=engine_type, path=path) from exc

    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        message = stderr.decode('utf-8', errors='replace').strip()
        raise EngineVersionError(
            f'process exited with code {process.returncode}: {message}',
            engine_type=engine_type,
            path=path,
        )

    return stdout.decode('utf-8', errors='replace')


def _parse_binary_version(stdout: str, *, engine_type: EngineType, path: Path) -> str:
    for line in stdout.splitlines():
        line = line.strip()
        if not line:
            continue

        match = VERSION_LINE.match(line)
        if match is None:
            break

        return f'{match.group("name")} {match.group("version")}'

    raise EngineVersionError(
        f'unexpected output {stdout.strip()!r}',
        engine_type=engine_type,
        path=path,
    )


def _parse_library_version(stdout: str, *, path: Path) -> str:
    engine_type = EngineType.libquery_engine
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as exc:
        raise EngineVersionError(
            f'unexpected output {stdout.strip()!r}',
            engine_type=engine_type,
            path=path,
        ) from exc

    commit = data.get('commit') if isinstance(data, dict) else None
    if not isinstance(commit, str) or not commit:
        raise EngineVersionError(
            f'missing commit in version metadata {data!r}',
            engine_type=engine_type,
            path=path,
        )

    return f'{engine_type} {commit}'
