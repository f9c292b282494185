"""Block merge module — reconcile regenerated output with hand edits."""

from gencoder.merge.blocks import BlockMarker, extract_blocks, merge_blocks
from gencoder.merge.materialize import copy_if_absent, materialize

__all__ = [
    "BlockMarker",
    "extract_blocks",
    "merge_blocks",
    "copy_if_absent",
    "materialize",
]
