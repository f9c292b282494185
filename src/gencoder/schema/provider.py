"""Read table metadata through SQLAlchemy's dialect-neutral inspector.

One provider wraps one Engine. The Engine pools connections and is safe to
share across threads; each introspect() call opens its own Inspector since
inspectors cache per instance.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import CompileError, SQLAlchemyError

from gencoder.errors import ConfigError, SchemaIntrospectionError
from gencoder.schema.model import (
    Column,
    Index,
    IndexColumn,
    Table,
    filter_columns,
    sort_indexes,
)

logger = logging.getLogger(__name__)

PRIMARY_INDEX_NAME = "PRIMARY"


def normalize_dsn(dsn: str) -> str:
    """Accept the short ``postgres://`` scheme that SQLAlchemy rejects."""
    if dsn.startswith("postgres://"):
        return "postgresql://" + dsn[len("postgres://"):]
    return dsn


class SchemaProvider:
    """Introspect tables from a single database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_dsn(cls, dsn: str) -> "SchemaProvider":
        try:
            engine = create_engine(normalize_dsn(dsn))
        except (SQLAlchemyError, ImportError, ValueError) as e:
            raise ConfigError(f"Cannot create engine for {dsn!r}: {e}") from e
        return cls(engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def introspect(
        self,
        schema: str | None,
        table: str,
        ignore_columns: Iterable[str] | None = None,
    ) -> Table | None:
        """Return the table's metadata, or None if it does not exist.

        Columns are ordinal-ordered with ignored names removed; indexes are
        ordered primary, unique, then by name.
        """
        try:
            inspector = inspect(self.engine)
            if not inspector.has_table(table, schema=schema):
                return None

            pk = inspector.get_pk_constraint(table, schema=schema) or {}
            pk_columns = pk.get("constrained_columns") or []

            columns = [
                self._column(ordinal, col, pk_columns)
                for ordinal, col in enumerate(inspector.get_columns(table, schema=schema), start=1)
            ]

            return Table(
                schema=schema or inspector.default_schema_name,
                name=table,
                comment=_table_comment(inspector, table, schema),
                columns=filter_columns(columns, ignore_columns),
                indexes=sort_indexes(_indexes(inspector, table, schema, pk)),
            )
        except SQLAlchemyError as e:
            qualified = f"{schema}.{table}" if schema else table
            raise SchemaIntrospectionError(f"Failed to introspect {qualified}: {e}") from e

    def _column(self, ordinal: int, col: dict, pk_columns: list[str]) -> Column:
        try:
            type_name = col["type"].compile(dialect=self.engine.dialect)
        except CompileError:
            # reflected types the dialect cannot render (NullType and friends)
            type_name = str(col["type"])
        default = col.get("default")
        return Column(
            ordinal=ordinal,
            name=col["name"],
            type=type_name,
            is_nullable=bool(col.get("nullable", True)),
            default_value=None if default is None else str(default),
            is_primary_key=col["name"] in pk_columns,
            comment=col.get("comment"),
        )


def _table_comment(inspector, table: str, schema: str | None) -> str | None:
    try:
        return (inspector.get_table_comment(table, schema=schema) or {}).get("text")
    except NotImplementedError:
        return None


def _indexes(inspector, table: str, schema: str | None, pk: dict) -> list[Index]:
    indexes: dict[str, Index] = {}

    pk_columns = pk.get("constrained_columns") or []
    if pk_columns:
        name = pk.get("name") or PRIMARY_INDEX_NAME
        indexes[name] = Index(
            name=name,
            is_unique=True,
            is_primary=True,
            columns=_index_columns(pk_columns),
        )

    for idx in inspector.get_indexes(table, schema=schema):
        name = idx.get("name")
        if not name or name in indexes:
            continue
        indexes[name] = Index(
            name=name,
            is_unique=bool(idx.get("unique")),
            columns=_index_columns(idx.get("column_names") or []),
        )

    try:
        uniques = inspector.get_unique_constraints(table, schema=schema)
    except NotImplementedError:
        uniques = []
    for uq in uniques:
        name = uq.get("name")
        if not name or name in indexes:
            continue
        indexes[name] = Index(
            name=name,
            is_unique=True,
            columns=_index_columns(uq.get("column_names") or []),
        )

    return list(indexes.values())


def _index_columns(names: Iterable[str | None]) -> list[IndexColumn]:
    # expression indexes report None for the computed parts
    return [
        IndexColumn(ordinal=i, name=n)
        for i, n in enumerate((n for n in names if n), start=1)
    ]
