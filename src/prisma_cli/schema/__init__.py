from .models import *
from ._parser import parse_config as parse_config
from ._locator import (
    get_schema_path as get_schema_path,
    load_env_file as load_env_file,
)
