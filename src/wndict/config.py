"""
config.py — Load wndict run settings from a YAML or JSON file.

Example (wndict.yaml):

    directory: /usr/share/wordnet/dict
    output_directory: build
    mode: json
    min_chars: 3
    max_chars: 12
    only_whole_words: true

Keys mirror the long CLI option names; flags given on the command line take
precedence over values from the file.
"""

import json
from pathlib import Path
from typing import Any, Dict

import yaml

from wndict.errors import ConfigError


MODES = ('database', 'sql', 'json')

CONFIG_SCHEMA = {
    'directory': str,
    'output_directory': str,
    'mode': str,
    'min_chars': int,
    'max_chars': int,
    'char_counts': list,
    'keep_numbers': bool,
    'only_whole_words': bool,
    'pos_keyed_definitions': bool,
}


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Read and validate a configuration file.

    Raises:
        ConfigError: missing file, parse error, unknown key or wrong type
    """
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()

    try:
        with open(config_path, encoding='utf-8') as f:
            if suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Unable to read configuration {config_path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    return validate_config(data, source=str(config_path))


def validate_config(data: Dict[str, Any], source: str = '<config>') -> Dict[str, Any]:
    errors = []

    for key, value in data.items():
        expected = CONFIG_SCHEMA.get(key)
        if expected is None:
            errors.append(f"unknown key '{key}'")
            continue
        # bool is a subclass of int; reject it for counts
        if expected is int and isinstance(value, bool):
            errors.append(f"'{key}' must be an integer")
        elif not isinstance(value, expected):
            errors.append(f"'{key}' must be of type {expected.__name__}")

    if isinstance(data.get('char_counts'), list):
        if not all(isinstance(n, int) and not isinstance(n, bool) for n in data['char_counts']):
            errors.append("'char_counts' must be a list of integers")

    if isinstance(data.get('mode'), str) and data['mode'] not in MODES:
        errors.append(f"'mode' must be one of {', '.join(MODES)}")

    if errors:
        raise ConfigError(f"{source}: " + "; ".join(errors))

    return dict(data)
