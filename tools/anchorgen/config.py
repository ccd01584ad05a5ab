"""
YAML generator configuration for anchorgen.

Every key is optional; a missing or empty file yields the defaults that
reproduce the stock output (anchor_lang + borsh imports, ``static ID``).

Example ``anchorgen.yaml``::

    outdir: src
    program_id_name: ID
    derives: [BorshSerialize, BorshDeserialize, Debug, Clone, PartialEq]
"""

import re
from dataclasses import dataclass, field, fields
from typing import List

import yaml


class ConfigError(Exception):
    """Raised when a generator config file fails validation."""
    pass


DEFAULT_IMPORTS = [
    "std::collections::HashMap",
    "anchor_lang::prelude::*",
    "borsh::{BorshDeserialize, BorshSerialize}",
]

DEFAULT_DERIVES = [
    "BorshSerialize",
    "BorshDeserialize",
    "Debug",
    "Clone",
    "PartialEq",
]

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class GeneratorConfig:
    """Settings for one generator run."""
    outdir: str = "src"
    program_id_name: str = "ID"
    discriminator_namespace: str = "global"
    imports: List[str] = field(default_factory=lambda: list(DEFAULT_IMPORTS))
    derives: List[str] = field(default_factory=lambda: list(DEFAULT_DERIVES))


def _string_list(data: dict, key: str) -> List[str]:
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)


def parse_config(yaml_str: str) -> GeneratorConfig:
    """Parse a YAML config string into a GeneratorConfig.

    Raises:
        ConfigError: On invalid YAML, unknown keys, or bad values.
    """
    if not yaml_str or not yaml_str.strip():
        return GeneratorConfig()

    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}")

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")

    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    config = GeneratorConfig()

    for key in ("outdir", "program_id_name", "discriminator_namespace"):
        if key in data:
            if not isinstance(data[key], str) or not data[key]:
                raise ConfigError(f"'{key}' must be a non-empty string")
            setattr(config, key, data[key])

    if not _IDENT_RE.match(config.program_id_name):
        raise ConfigError(
            f"'program_id_name' must be a Rust identifier, "
            f"got {config.program_id_name!r}")

    if "imports" in data:
        config.imports = _string_list(data, "imports")
    if "derives" in data:
        config.derives = _string_list(data, "derives")
        if not config.derives:
            raise ConfigError("'derives' must not be empty")

    return config


def load_config(path: str) -> GeneratorConfig:
    """Read and parse a YAML config file."""
    with open(path) as f:
        return parse_config(f.read())
