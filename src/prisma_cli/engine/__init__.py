# Prisma CLI - Engine Layer
#
# This module provides the helpers for locating the Prisma engines and
# querying their versions. The engines themselves are never bundled, they are
# resolved from the environment, the binary cache or a node_modules install.

from . import platform as platform
from .errors import *
from ._types import (
    EngineType as EngineType,
    EngineInfo as EngineInfo,
    ENGINE_ENV_VARS as ENGINE_ENV_VARS,
)
from ._probe import get_engine_version as get_engine_version
from .resolver import (
    engine_filename as engine_filename,
    engine_search_paths as engine_search_paths,
    resolve_engine_path as resolve_engine_path,
    get_engine_info as get_engine_info,
    get_cli_query_engine_type as get_cli_query_engine_type,
)
