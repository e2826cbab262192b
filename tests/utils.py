from __future__ import annotations

import sys
import stat
from pathlib import Path

import pytest


skipif_windows = pytest.mark.skipif(
    sys.platform == 'win32',
    reason='fake engines are shell scripts',
)


def make_executable(path: Path, script: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f'#!/bin/sh\n{script}\n')
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def make_engine(path: Path, output: str, *, exit_code: int = 0) -> Path:
    """Create a fake engine binary that prints the given output for `--version`"""
    return make_executable(path, f"printf '%s\\n' '{output}'\nexit {exit_code}")
