from __future__ import annotations

from typing import Iterator, Optional
from pathlib import Path

import pytest

from prisma_cli import report
from prisma_cli._config import Config
from prisma_cli._constants import ENGINE_VERSION
from prisma_cli.engine import ENGINE_ENV_VARS, EngineInfo, EngineType, platform


PRISMA_ENV_VARS = (
    *ENGINE_ENV_VARS.values(),
    'PRISMA_ENGINES_DIR',
    'PRISMA_BINARY_CACHE_DIR',
    'PRISMA_CLI_QUERY_ENGINE_TYPE',
    'PRISMA_SCHEMA_PATH',
    'PRISMA_NODE_BINARY',
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in PRISMA_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run the test from an empty project directory"""
    root = tmp_path / 'project'
    root.mkdir()
    monkeypatch.chdir(root)
    monkeypatch.setenv('PRISMA_BINARY_CACHE_DIR', str(tmp_path / 'cache'))
    yield root


@pytest.fixture()
def fake_engines(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Report on engines without spawning any processes"""

    async def binary_platform() -> str:
        return 'debian-openssl-1.1.x'

    async def get_engine_info(
        engine_type: EngineType,
        config: Optional[Config] = None,
        *,
        binary_platform: Optional[str] = None,
    ) -> EngineInfo:
        return EngineInfo(
            path=Path.cwd() / 'engines' / f'{engine_type}-{binary_platform}',
            version=f'{engine_type} {ENGINE_VERSION}',
        )

    monkeypatch.setattr(platform, 'binary_platform', binary_platform)
    monkeypatch.setattr(report, 'get_engine_info', get_engine_info)
    monkeypatch.setattr(report, 'get_client_version', lambda: None)
