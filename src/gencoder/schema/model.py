"""Table metadata as read from a database."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class IndexColumn:
    ordinal: int
    name: str


@dataclass
class Index:
    name: str
    is_unique: bool = False
    is_primary: bool = False
    columns: list[IndexColumn] = field(default_factory=list)


@dataclass
class Column:
    ordinal: int
    name: str
    type: str
    is_nullable: bool = True
    default_value: str | None = None
    is_primary_key: bool = False
    comment: str | None = None


@dataclass
class Table:
    schema: str | None
    name: str
    comment: str | None = None
    columns: list[Column] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)


def filter_columns(columns: Iterable[Column], ignore: Iterable[str] | None) -> list[Column]:
    """Drop ignored columns and order the rest by ordinal.

    Ordinals are kept as reported, so gaps remain where columns were
    dropped.
    """
    ignored = set(ignore or ())
    return sorted((c for c in columns if c.name not in ignored), key=lambda c: c.ordinal)


def sort_indexes(indexes: Iterable[Index]) -> list[Index]:
    """Order indexes primary first, then unique, then by name."""
    return sorted(indexes, key=lambda i: (not i.is_primary, not i.is_unique, i.name))
