"""Config module - run options from defaults, YAML file and flags."""

from .schema import CONFIG_FILE_NAMES, DEFAULT_COVERPROFILE, GoverageConfig
from .loader import build_config, find_config_file, load_config_file, parse_config_data
from .validator import validate_config

__all__ = [
    "CONFIG_FILE_NAMES",
    "DEFAULT_COVERPROFILE",
    "GoverageConfig",
    "build_config",
    "find_config_file",
    "load_config_file",
    "parse_config_data",
    "validate_config",
]
