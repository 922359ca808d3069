"""
Configuration loading.

Options are read from a YAML mapping, for example::

    verbose: true
    strict_operands: false
    create_missing: true
"""

from dataclasses import dataclass, fields

import yaml

from .errors import ConfigError


@dataclass
class Config:
    """
    Assembler and runtime options.

    Attributes:
        verbose: Print token lists, the assembled program and execution trace
        strict_operands: Reject operands that are neither numbers nor letters
        create_missing: Create a missing source file with the default program
    """

    verbose: bool = False
    strict_operands: bool = False
    create_missing: bool = True


VALID_KEYS = {f.name for f in fields(Config)}


def parse_config(yaml_content: str) -> Config:
    """
    Parse and validate a YAML configuration.

    Args:
        yaml_content: Raw YAML string content

    Returns:
        Config with defaults for omitted keys

    Raises:
        ConfigError: If the configuration is invalid
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML mapping/dictionary")

    for key, value in data.items():
        if key not in VALID_KEYS:
            raise ConfigError(f"Unknown configuration key '{key}'")
        if not isinstance(value, bool):
            raise ConfigError(f"'{key}' must be true or false")

    return Config(**data)


def load_config(path: str) -> Config:
    """Load a configuration file from disk."""
    try:
        with open(path, "r") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}")
    return parse_config(content)
