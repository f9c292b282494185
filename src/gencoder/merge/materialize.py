"""Write generated output to disk, merging into files that already exist."""

from __future__ import annotations

import logging
from pathlib import Path

from gencoder.errors import MaterializeError
from gencoder.merge.blocks import BlockMarker, merge_blocks

logger = logging.getLogger(__name__)


def materialize(
    path: Path | str,
    new_content: str,
    marker: BlockMarker | None = None,
    dry_run: bool = False,
) -> str:
    """Create ``path`` or merge ``new_content`` into its existing blocks.

    Writes are whole-file and not atomic; an interrupted write can leave a
    truncated file, which the next regeneration does not repair.

    Returns:
        "created", "updated" or "unchanged".
    """
    file_path = Path(path)
    try:
        if not file_path.exists():
            if not dry_run:
                _write(file_path, new_content)
            logger.debug("created %s", file_path)
            return "created"

        old_content = _read(file_path)
        merged = merge_blocks(old_content, new_content, marker)
        if merged == old_content:
            logger.debug("unchanged %s", file_path)
            return "unchanged"
        if not dry_run:
            _write(file_path, merged)
        logger.debug("updated %s", file_path)
        return "updated"
    except (OSError, UnicodeDecodeError) as e:
        raise MaterializeError(f"Failed to merge or write {file_path}: {e}") from e


def copy_if_absent(path: Path | str, content: bytes, dry_run: bool = False) -> str:
    """Copy a non-template file verbatim; existing files are never touched.

    Returns:
        "created" or "skipped".
    """
    file_path = Path(path)
    if file_path.exists():
        return "skipped"
    if not dry_run:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(content)
        except OSError as e:
            raise MaterializeError(f"Failed to copy {file_path}: {e}") from e
    return "created"


def _read(file_path: Path) -> str:
    # newline="" keeps \r\n intact so merged output round-trips byte-for-byte
    with open(file_path, encoding="utf-8", newline="") as f:
        return f.read()


def _write(file_path: Path, content: str) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
