"""Default path resolution.

Uses environment variables when available, falls back to conventional
defaults relative to the current directory.

Environment variables:
    GENCODER_CONFIG — config file (default: ./gencoder.yaml)
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CONFIG_NAME = "gencoder.yaml"
DEFAULT_TEMPLATES_DIR = "templates"


def config_path() -> Path:
    """Return the config file to read when none is given on the command line."""
    return Path(os.environ.get("GENCODER_CONFIG", DEFAULT_CONFIG_NAME))
