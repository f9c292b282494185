"""Built-in template helpers.

Each helper is exposed both as a filter (``{{ table.name | pascal_case }}``)
and as a global function (``{{ pascal_case(table.name) }}``). All of them
pass ``None`` through unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Callable


def snake_case(s: str | None) -> str | None:
    """userName / UserName -> user_name"""
    if s is None:
        return s
    return re.sub(r"([a-z])([A-Z])", r"\1_\2", s).lower()


def camel_case(s: str | None) -> str | None:
    """user_name / user-name -> userName"""
    if s is None:
        return s
    return re.sub(r"[-_]([a-zA-Z])", lambda m: m.group(1).upper(), s)


def pascal_case(s: str | None) -> str | None:
    """user_name / userName -> UserName"""
    if s is None:
        return s
    return re.sub(r"(?:^|_)(\w)", lambda m: m.group(1).upper(), s).replace("_", "")


def upper_first(s: str | None) -> str | None:
    if s is None:
        return s
    return s[:1].upper() + s[1:]


def lower_first(s: str | None) -> str | None:
    if s is None:
        return s
    return s[:1].lower() + s[1:]


def replace_all(s: str | None, old: str | None, new: str | None) -> str | None:
    """Literal substring replacement."""
    if s is None or old is None or new is None:
        return s
    return s.replace(old, new)


def match(pattern: str | None, s: str | None) -> bool:
    """True if ``pattern`` matches anywhere in ``s``."""
    if pattern is None or s is None:
        return False
    return re.search(pattern, s) is not None


def remove_prefix(s: str | None, prefix: str | None) -> str | None:
    if s is None or prefix is None:
        return s
    return s.removeprefix(prefix)


def remove_suffix(s: str | None, suffix: str | None) -> str | None:
    if s is None or suffix is None:
        return s
    return s.removesuffix(suffix)


BUILTIN_HELPERS: dict[str, Callable] = {
    "snake_case": snake_case,
    "camel_case": camel_case,
    "pascal_case": pascal_case,
    "upper_first": upper_first,
    "lower_first": lower_first,
    "replace_all": replace_all,
    "match": match,
    "remove_prefix": remove_prefix,
    "remove_suffix": remove_suffix,
}
