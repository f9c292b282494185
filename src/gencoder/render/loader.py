"""Walk a template directory and classify every file.

A file with the template extension is a Template when one of its lines
carries the output marker (the rest of that line is the templated output
path) and a Partial otherwise. Other files are Normal and only matter when
non-template files are copied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from jinja2 import Template

from gencoder.config.loader import Config
from gencoder.errors import ConfigError, TemplateCompileError
from gencoder.render.engine import RenderEngine

logger = logging.getLogger(__name__)

SKIP_DIRS = {".git", ".hg", ".svn"}


class FileKind(Enum):
    NORMAL = "normal"
    PARTIAL = "partial"
    TEMPLATE = "template"


@dataclass
class TemplateFile:
    """One file from the template source."""

    kind: FileKind
    name: str
    relative_path: str
    source: str = ""
    content: bytes = b""
    output: str | None = None
    template: Template | None = None
    output_template: Template | None = None


def find_output_expression(text: str, marker: str) -> str | None:
    """Return the output-path expression of the first marker line, if any."""
    for line in text.splitlines():
        if marker in line:
            return line[line.rindex(marker) + len(marker):].strip()
    return None


def load_templates(
    root: Path | str,
    config: Config,
    engine: RenderEngine,
    include_non_templates: bool = False,
) -> list[TemplateFile]:
    """Load, classify and compile every file under ``root``.

    All partials are registered with ``engine`` before any Template body is
    compiled, so inclusion resolves against the complete registry.

    Raises:
        ConfigError: If ``root`` is not a directory.
        TemplateCompileError: If any template or partial cannot be read or parsed.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise ConfigError(f"Templates directory not found: {root_path}")

    files: list[TemplateFile] = []
    for path in sorted(root_path.rglob("*")):
        rel = path.relative_to(root_path)
        if not path.is_file() or SKIP_DIRS.intersection(rel.parts):
            continue

        if not path.name.endswith(config.template_extension):
            if include_non_templates:
                files.append(TemplateFile(
                    kind=FileKind.NORMAL,
                    name=path.name,
                    relative_path=rel.as_posix(),
                    content=path.read_bytes(),
                ))
            continue

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateCompileError(rel.as_posix(), f"cannot read template: {e}") from e
        output = find_output_expression(source, config.output_marker)
        files.append(TemplateFile(
            kind=FileKind.TEMPLATE if output is not None else FileKind.PARTIAL,
            name=path.name,
            relative_path=rel.as_posix(),
            source=source,
            output=output,
        ))

    for f in files:
        if f.kind is FileKind.PARTIAL:
            f.template = engine.compile(f.source, f.relative_path)
            engine.register_partial(f.name, f.source)

    for f in files:
        if f.kind is FileKind.TEMPLATE:
            f.output_template = engine.compile(f.output, f"{f.relative_path} (output path)")
            f.template = engine.compile(f.source, f.relative_path)

    logger.debug(
        "loaded %d templates, %d partials, %d other files from %s",
        sum(f.kind is FileKind.TEMPLATE for f in files),
        sum(f.kind is FileKind.PARTIAL for f in files),
        sum(f.kind is FileKind.NORMAL for f in files),
        root_path,
    )
    return files
