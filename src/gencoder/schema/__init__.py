"""Schema module — table metadata model, introspection and context collection."""

from gencoder.schema.model import (
    Column,
    Index,
    IndexColumn,
    Table,
    filter_columns,
    sort_indexes,
)

__all__ = [
    "Column",
    "Index",
    "IndexColumn",
    "Table",
    "filter_columns",
    "sort_indexes",
]
