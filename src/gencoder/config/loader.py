"""Load and validate gencoder.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gencoder import BLOCK_END, BLOCK_START, OUTPUT_MARKER
from gencoder.errors import ConfigError
from gencoder.merge.blocks import BlockMarker
from gencoder.paths import DEFAULT_TEMPLATES_DIR

DEFAULT_TEMPLATE_EXTENSION = ".j2"


@dataclass
class TableConfig:
    """One table to generate for."""

    name: str
    schema: str | None = None
    properties: dict[str, str] = field(default_factory=dict)
    ignore_columns: list[str] = field(default_factory=list)


@dataclass
class DatabaseConfig:
    """One database connection and the tables read from it."""

    dsn: str
    name: str | None = None
    schema: str | None = None
    properties: dict[str, str] = field(default_factory=dict)
    tables: list[TableConfig] = field(default_factory=list)


@dataclass
class Config:
    """Top-level generator configuration."""

    templates: str = DEFAULT_TEMPLATES_DIR
    template_extension: str = DEFAULT_TEMPLATE_EXTENSION
    output_marker: str = OUTPUT_MARKER
    block_marker: BlockMarker = field(default_factory=BlockMarker)
    output: str = "."
    max_workers: int | None = None
    helpers: list[str] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
    databases: list[DatabaseConfig] = field(default_factory=list)


def load_config(path: Path | str) -> Config:
    """Read and parse a gencoder.yaml file.

    Args:
        path: Path to the config file.

    Returns:
        Parsed Config with defaults filled in.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or does
            not describe a valid config.
    """
    config_path = Path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {config_path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config at {config_path} is not a YAML mapping")

    return parse_config(data)


def parse_config(data: dict[str, Any]) -> Config:
    """Build a Config from an already-parsed mapping."""
    marker = data.get("blockMarker") or {}
    if not isinstance(marker, dict):
        raise ConfigError("blockMarker must be a mapping with 'start' and 'end'")

    max_workers = data.get("maxWorkers")
    if max_workers is not None and (not isinstance(max_workers, int) or max_workers < 1):
        raise ConfigError(f"maxWorkers must be a positive integer, got {max_workers!r}")

    return Config(
        templates=str(data.get("templates") or DEFAULT_TEMPLATES_DIR),
        template_extension=str(data.get("templateExtension") or DEFAULT_TEMPLATE_EXTENSION),
        output_marker=str(data.get("outputMarker") or OUTPUT_MARKER),
        block_marker=BlockMarker(
            start=str(marker.get("start") or BLOCK_START),
            end=str(marker.get("end") or BLOCK_END),
        ),
        output=str(data.get("output") or "."),
        max_workers=max_workers,
        helpers=_str_list(data.get("helpers") or data.get("importHelpers"), "helpers"),
        properties=_properties(data.get("properties"), "properties"),
        databases=[
            _database(entry, i) for i, entry in enumerate(data.get("databases") or [])
        ],
    )


def _database(entry: Any, index: int) -> DatabaseConfig:
    where = f"databases[{index}]"
    if not isinstance(entry, dict):
        raise ConfigError(f"{where} is not a mapping")
    dsn = entry.get("dsn")
    if not dsn:
        raise ConfigError(f"{where}: missing 'dsn'")
    return DatabaseConfig(
        dsn=str(dsn),
        name=entry.get("name"),
        schema=entry.get("schema") or None,
        properties=_properties(entry.get("properties"), f"{where}.properties"),
        tables=[
            _table(t, f"{where}.tables[{j}]")
            for j, t in enumerate(entry.get("tables") or [])
        ],
    )


def _table(entry: Any, where: str) -> TableConfig:
    if not isinstance(entry, dict):
        raise ConfigError(f"{where} is not a mapping")
    name = entry.get("name")
    if not name:
        raise ConfigError(f"{where}: missing 'name'")
    return TableConfig(
        name=str(name),
        schema=entry.get("schema") or None,
        properties=_properties(entry.get("properties"), f"{where}.properties"),
        ignore_columns=_str_list(entry.get("ignoreColumns"), f"{where}.ignoreColumns"),
    )


def _properties(value: Any, where: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be a mapping")
    # YAML turns `version: 1.0` into a float; templates only ever see strings
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


def _str_list(value: Any, where: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a list")
    return [str(v) for v in value]
