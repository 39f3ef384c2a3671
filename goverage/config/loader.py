"""Configuration loading.

Combines dataclass defaults, an optional YAML config file and command line
overrides into one GoverageConfig.
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigError, UsageError
from .schema import CONFIG_FIELDS, CONFIG_FILE_NAMES, GoverageConfig
from .validator import validate_config

STRING_FIELDS = {"coverprofile", "covermode", "cpu", "parallel", "timeout", "go"}
BOOL_FIELDS = {"short", "verbose", "trace", "race", "header_when_empty"}

# Flag spellings accepted as config keys.
KEY_ALIASES = {"v": "verbose", "x": "trace"}


def find_config_file(directory: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Find a config file in the given directory (default: cwd)."""
    directory = Path(directory) if directory else Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_config_file(file_path: Union[str, Path]) -> dict[str, Any]:
    """Load config values from a YAML file.

    Args:
        file_path: Path to the YAML config file.

    Returns:
        Normalized config values keyed by GoverageConfig field name.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigError: If the YAML is malformed or has values of the wrong type.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {file_path}: {e}") from e

    if data is None:
        return {}

    return parse_config_data(data, source=str(file_path))


def parse_config_data(data: Any, source: str = "<inline>") -> dict[str, Any]:
    """Normalize config values from an already loaded mapping.

    Unknown keys are ignored. Keys may use dashes or the short flag names
    ``v`` and ``x``.

    Raises:
        ConfigError: If the data is not a mapping or a value has the wrong type.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(data).__name__} in {source}")

    values: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        name = KEY_ALIASES.get(name, name)
        if name not in CONFIG_FIELDS:
            continue
        values[name] = _coerce(name, value, source)

    return values


def build_config(
    file_values: Optional[dict[str, Any]] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> GoverageConfig:
    """Build and validate the run configuration.

    Args:
        file_values: Values from the config file.
        overrides: Values given explicitly on the command line.

    Returns:
        Validated configuration.

    Raises:
        UsageError: If no output path is configured.
        ConfigError: If the options are invalid or inconsistent.
    """
    values: dict[str, Any] = {}
    values.update(file_values or {})
    values.update(overrides or {})

    if "patterns" in values:
        values["patterns"] = tuple(values["patterns"])

    config = GoverageConfig(**{k: v for k, v in values.items() if k in CONFIG_FIELDS})

    if not config.coverprofile:
        raise UsageError("an output path is required (-coverprofile)")

    validation = validate_config(config)
    if not validation.valid:
        raise ConfigError(f"Invalid configuration: {validation}", validation=validation)

    return config


def _coerce(name: str, value: Any, source: str) -> Any:
    if value is None:
        return None

    if name in BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigError(f"'{name}' must be true or false in {source}")
        return value

    if name in STRING_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ConfigError(f"'{name}' must be a string in {source}")
        return str(value)

    # patterns
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise ConfigError(f"'{name}' must be a list of strings in {source}")
    return tuple(value)
