from __future__ import annotations

import os
import time
import logging


def _env_bool(key: str) -> bool:
    return os.environ.get(key, '').lower() in {'1', 't', 'true'}


def is_debug() -> bool:
    return _env_bool('PRISMA_PY_DEBUG')


def setup_logging(use_handler: bool = True) -> None:
    if not is_debug():
        return

    logger = logging.getLogger('prisma_cli')
    logger.setLevel(logging.DEBUG)

    if use_handler and not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)


def time_since(start: float, precision: int = 4) -> str:
    delta = round(time.monotonic() - start, precision)
    return f'{delta}s'
