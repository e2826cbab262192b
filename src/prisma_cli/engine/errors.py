from __future__ import annotations

from pathlib import Path

from ..errors import PrismaCLIError
from ._types import EngineType


__all__ = (
    'EngineError',
    'EngineNotFoundError',
    'EngineVersionError',
)


class EngineError(PrismaCLIError):
    pass


class EngineNotFoundError(EngineError):
    engine_type: EngineType
    searched: list[Path]

    def __init__(self, engine_type: EngineType, searched: list[Path]) -> None:
        self.engine_type = engine_type
        self.searched = searched
        locations = '\n'.join(f'  - {path}' for path in searched)
        super().__init__(
            f'Could not find {engine_type} binary. Searched in:\n{locations}\n\n'
            'Set the engines directory with PRISMA_ENGINES_DIR or point the '
            'engine specific environment variable at the file.'
        )


class EngineVersionError(EngineError):
    engine_type: EngineType
    path: Path

    def __init__(self, message: str, *, engine_type: EngineType, path: Path) -> None:
        self.engine_type = engine_type
        self.path = path
        super().__init__(f'Could not get the version of {engine_type} at {path}: {message}')
