"""Volume number extraction from directory names."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

# Tried top to bottom; each has exactly one capture group holding the number.
DEFAULT_VOLUME_PATTERNS: tuple[str, ...] = (
    r'(?i)vol(?:ume)?[\s._-]*(\d+)',
    r'(?i)(?:^|[\s_\-\[(])v[\s._-]*(\d+)',
    r'(?i)ch(?:apter)?[\s._-]*(\d+)',
    r'第\s*(\d+)\s*[巻卷話话]',
    r'(?i)(?:^|[\s_\-\[(])c(\d+)',
    r'(\d+)\D*$',
)


def compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """
    Compile volume index patterns, checking each has one capture group.

    Args:
        patterns: Regular expression strings in priority order

    Returns:
        list[re.Pattern[str]]: Compiled patterns in the same order

    Raises:
        ValueError: If a pattern does not have exactly one capture group
        re.error: If a pattern is not a valid regular expression
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        regex = re.compile(pattern)
        if regex.groups != 1:
            raise ValueError(
                f"Volume pattern must have exactly one capture group: {pattern!r}"
            )
        compiled.append(regex)
    return compiled


def parse_volume_index(name: str, patterns: Sequence[re.Pattern[str]]) -> int | None:
    """
    Parse a volume index from a directory base name.

    Args:
        name: Directory base name
        patterns: Compiled patterns in priority order

    Returns:
        int | None: Index from the first pattern whose capture is an integer,
            or None if the name is unindexed
    """
    for regex in patterns:
        match = regex.search(name)
        if not match or match.group(1) is None:
            continue
        try:
            return int(match.group(1))
        except ValueError:
            continue
    return None
