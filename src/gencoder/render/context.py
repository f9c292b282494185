"""The data bundle a template is rendered against."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from gencoder.config.loader import Config, DatabaseConfig, TableConfig
from gencoder.schema.model import Table


@dataclass(frozen=True)
class RenderContext:
    """One table (or none, for boilerplate) plus its resolved properties.

    Built once per (database, table) per invocation and never mutated.
    """

    table: Table | None = None
    properties: dict[str, str] = field(default_factory=dict)
    config: Config | None = None
    database: DatabaseConfig | None = None
    table_config: TableConfig | None = None

    def as_template_vars(self) -> dict[str, Any]:
        """Plain nested dicts for the template engine."""
        return {
            "table": _plain(self.table),
            "properties": dict(self.properties),
            "config": _plain(self.config),
            "database": _plain(self.database),
            "table_config": _plain(self.table_config),
        }

    def as_dict(self) -> dict[str, Any]:
        """Structured dump used by ``gencoder introspect``."""
        data: dict[str, Any] = {
            "table": _plain(self.table),
            "properties": dict(self.properties),
        }
        if self.database is not None and self.database.name:
            data["database"] = self.database.name
        return data


def _plain(value: Any) -> dict[str, Any] | None:
    return asdict(value) if value is not None else None
