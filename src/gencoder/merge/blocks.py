"""Marker-delimited block extraction and merge.

Regenerating a file never rewrites it wholesale. The old file's text outside
blocks is ground truth; the freshly rendered text only supplies replacement
blocks, keyed by the identifier written after the start marker:

    old:  header / [A: old-A] / hand-written / [C: keep-me]
    new:  [A: new-A] / anything else is ignored
    out:  header / [A: new-A] / hand-written / [C: keep-me]

Blocks are replaced including their own marker lines. Old blocks without a
counterpart in the new text survive verbatim, and a block left open at the
end of input is flushed like a closed one.
"""

from __future__ import annotations

from dataclasses import dataclass

from gencoder import BLOCK_END, BLOCK_START


@dataclass(frozen=True)
class BlockMarker:
    """Start/end sentinels that delimit a block."""

    start: str = BLOCK_START
    end: str = BLOCK_END

    def block_id(self, line: str) -> str | None:
        """Return the identifier if ``line`` opens a block, else None."""
        pos = line.find(self.start)
        if pos < 0:
            return None
        return line[pos + len(self.start):].strip()

    def closes(self, line: str) -> bool:
        return self.end in line


def extract_blocks(text: str, marker: BlockMarker | None = None) -> dict[str, str]:
    """Collect every block in ``text`` as identifier -> block text.

    Block text spans the start line through the end line, joined with
    ``\\n`` and without a trailing terminator. Identifiers keep document
    order.
    """
    marker = marker or BlockMarker()
    blocks: dict[str, str] = {}
    current: str | None = None
    buf: list[str] = []

    for line in text.split("\n"):
        block_id = marker.block_id(line)
        if block_id is not None:
            if current is not None:
                blocks[current] = "\n".join(buf)
            current, buf = block_id, [line]
        elif current is not None and marker.closes(line):
            buf.append(line)
            blocks[current] = "\n".join(buf)
            current, buf = None, []
        elif current is not None:
            buf.append(line)

    if current is not None:
        blocks[current] = "\n".join(buf)

    return blocks


def merge_blocks(old: str, new: str, marker: BlockMarker | None = None) -> str:
    """Reconcile previously written ``old`` text with freshly rendered ``new``.

    Walks ``old`` line by line. Text outside blocks is copied unchanged;
    each block is replaced by the block of the same identifier from ``new``
    when one exists and kept as-is otherwise. Text in ``new`` outside any
    block has no effect.
    """
    marker = marker or BlockMarker()
    new_blocks = extract_blocks(new, marker)
    out: list[str] = []
    current: str | None = None
    buf: list[str] = []

    def flush() -> None:
        out.append(new_blocks.get(current, "\n".join(buf)) + "\n")

    for line in old.split("\n"):
        block_id = marker.block_id(line)
        if block_id is not None:
            if current is not None:
                flush()
            current, buf = block_id, [line]
        elif current is not None and marker.closes(line):
            buf.append(line)
            flush()
            current, buf = None, []
        elif current is not None:
            buf.append(line)
        else:
            out.append(line + "\n")

    if current is not None:
        flush()

    merged = "".join(out)
    return merged[:-1] if merged.endswith("\n") else merged
