"""Shared test fixtures for gencoder."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from gencoder.config.loader import Config, DatabaseConfig, TableConfig
from gencoder.merge.blocks import BlockMarker
from gencoder.schema.model import Column, Index, IndexColumn, Table

START = "@gencoder.block.start:"
END = "@gencoder.block.end:"


@pytest.fixture
def marker():
    return BlockMarker(START, END)


@pytest.fixture
def sqlite_db(tmp_path) -> Path:
    """A SQLite file with a users table (pk, unique constraint, plain index) and orders."""
    path = tmp_path / "app.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE users ("
            " id INTEGER PRIMARY KEY,"
            " name VARCHAR(50) NOT NULL,"
            " secret TEXT,"
            " email VARCHAR(100),"
            " CONSTRAINT uq_users_email UNIQUE (email))"
        ))
        conn.execute(text("CREATE INDEX ix_users_name ON users (name)"))
        conn.execute(text(
            "CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER NOT NULL)"
        ))
    engine.dispose()
    return path


def make_table(name: str = "greet") -> Table:
    return Table(
        schema="public",
        name=name,
        columns=[
            Column(ordinal=1, name="id", type="bigint", is_nullable=False, is_primary_key=True),
            Column(ordinal=2, name="user_name", type="varchar(64)"),
        ],
        indexes=[Index(name="pk", is_unique=True, is_primary=True,
                       columns=[IndexColumn(ordinal=1, name="id")])],
    )


class FakeProvider:
    """In-memory SchemaProvider stand-in keyed by table name."""

    def __init__(self, tables: dict[str, Table]):
        self.tables = tables
        self.calls: list[tuple] = []
        self.disposed = False

    def introspect(self, schema, table, ignore_columns=None):
        self.calls.append((schema, table, tuple(ignore_columns or ())))
        return self.tables.get(table)

    def dispose(self):
        self.disposed = True


@pytest.fixture
def fake_provider():
    return FakeProvider({"greet": make_table("greet"), "user_account": make_table("user_account")})


@pytest.fixture
def one_table_config(tmp_path):
    templates = tmp_path / "templates"
    templates.mkdir()
    return Config(
        templates=str(templates),
        output=str(tmp_path / "out"),
        properties={"name": "World"},
        databases=[DatabaseConfig(dsn="fake://", tables=[TableConfig(name="greet")])],
    )


@pytest.fixture
def provider_cls():
    return FakeProvider


@pytest.fixture
def table_factory():
    return make_table
