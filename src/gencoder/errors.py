"""Error types raised by gencoder.

Every failure except a missing table is fatal for the invocation; the CLI
turns any GencoderError into a diagnostic and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class GencoderError(Exception):
    """Base class for all gencoder failures."""


class ConfigError(GencoderError):
    """Missing or malformed configuration."""


class TemplateSourceError(GencoderError):
    """A remote template source could not be fetched."""


class TemplateCompileError(GencoderError):
    """A template (or its output-path expression) failed to compile."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = str(path)
        super().__init__(f"{self.path}: {message}")


class SchemaNotFound(GencoderError):
    """A configured table does not exist. Recoverable: the table is skipped."""

    def __init__(self, schema: str | None, table: str) -> None:
        self.schema = schema
        self.table = table
        qualified = f"{schema}.{table}" if schema else table
        super().__init__(f"table {qualified} not found")


class SchemaIntrospectionError(GencoderError):
    """Connectivity or query failure while reading table metadata."""


class RenderError(GencoderError):
    """A template failed while rendering."""


class MaterializeError(GencoderError):
    """Generated output could not be written."""
