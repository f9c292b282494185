"""gencoder — schema-driven code generation with hand-edit preservation.

Templates are rendered against database table metadata and written to disk.
Regenerating over an existing file only replaces the marker-delimited blocks
that the fresh output also contains:

    // @gencoder.block.start: fields
    ... regenerated every time ...
    // @gencoder.block.end: fields

Anything outside these markers is preserved untouched, and old blocks the
new output no longer mentions are kept as they are.

Markers are detected by substring match on each line. A marker string that
happens to appear inside ordinary code is treated as a marker, so pick
sentinels that cannot occur in the generated language.
"""

__version__ = "0.1.0"

# Default sentinels, overridable in gencoder.yaml
OUTPUT_MARKER = "@gencoder.generated:"
BLOCK_START = "@gencoder.block.start:"
BLOCK_END = "@gencoder.block.end:"
