"""Contains utility functions for label synchronization decisions."""

import fnmatch
from typing import Iterable


def normalize_color(color: str | None) -> str | None:
    """Normalize a color to lowercase 6-digit hex without a leading '#'.

    Returns None for a missing or empty color so that "no color requested" stays
    distinct from an explicit color. Does not validate hex digits.
    """
    if not color:
        return None
    hex_color = color.removeprefix("#").lower()
    if len(hex_color) == 3:
        return "".join(char * 2 for char in hex_color)
    return hex_color


def colors_equal(remote_color: str, desired_color: str | None) -> bool | None:
    """Compare a remote color with a canonical desired color.

    Returns None when no color is desired, meaning color does not take part
    in the diff at all.
    """
    if desired_color is None:
        return None
    return remote_color.lower() == desired_color


def descriptions_equal(remote_description: str | None, desired_description: str | None) -> bool:
    """Compare descriptions, treating a missing description and '' as equal."""
    return (remote_description or "") == (desired_description or "")


def matches_any_pattern(name: str, patterns: Iterable[str] | None) -> bool:
    """Return True if the label name matches any of the glob patterns.

    Supports '*', '?' and '[...]' character classes. Matching is case-sensitive.
    """
    if not patterns:
        return False
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)
