"""Configuration module — load gencoder.yaml and resolve properties."""

from gencoder.config.loader import (
    Config,
    DatabaseConfig,
    TableConfig,
    load_config,
    parse_config,
)
from gencoder.config.properties import parse_property_overrides, resolve_properties

__all__ = [
    "Config",
    "DatabaseConfig",
    "TableConfig",
    "load_config",
    "parse_config",
    "parse_property_overrides",
    "resolve_properties",
]
