"""Property resolution across config layers and command-line overrides."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from gencoder.errors import ConfigError


def resolve_properties(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge property maps, later layers overriding earlier ones.

    Called as ``resolve_properties(global, database, table, cli)``. Keys
    absent from a later layer inherit the earlier value; ``None`` layers
    are skipped.
    """
    merged: dict[str, str] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def parse_property_overrides(items: Iterable[str] | None) -> dict[str, str]:
    """Parse ``key=value`` items from the command line.

    Each item may carry several comma-separated pairs (``k1=v1,k2=v2``).
    """
    properties: dict[str, str] = {}
    for item in items or []:
        for pair in item.split(","):
            if not pair:
                continue
            parts = pair.split("=")
            if len(parts) != 2 or not parts[0].strip():
                raise ConfigError(f"Invalid property: {pair!r} (expected key=value)")
            properties[parts[0].strip()] = parts[1]
    return properties
