# robots_protocol/txt/matcher.py
"""
Wildcard path matcher for robots.txt patterns.

Only two characters are special in a pattern: ``*`` matches any sequence of
characters (including none) and a trailing ``$`` anchors the pattern to the end
of the path. Everything else, ``.`` and an interior ``$`` included, is literal.

Patterns are evaluated by splitting on ``*`` and scanning the segments left to
right with :meth:`str.find`, so a test never backtracks.
"""
from __future__ import annotations

import time
from enum import Enum
from typing import List, Optional

WILDCARD = "*"
END_ANCHOR = "$"


class MatchMode(Enum):
    PREFIX = "prefix"
    SUBSTRING = "substring"
    SUFFIX = "suffix"


class MatchTimeoutError(Exception):
    """Raised when a pattern test runs past its deadline."""


def match_mode(pattern: str) -> MatchMode:
    """Return how *pattern* is anchored against a path."""
    if pattern.endswith(END_ANCHOR):
        return MatchMode.SUFFIX
    if pattern.endswith("/"):
        return MatchMode.SUBSTRING
    return MatchMode.PREFIX


def is_match(pattern: str, path: str, deadline: Optional[float] = None) -> bool:
    """Test *path* (with optional query) against a robots.txt *pattern*.

    Args:
        pattern: raw directive path, e.g. ``/fish*.php$``.
        path: path with optional query, e.g. ``/fish.php?id=1``.
        deadline: :func:`time.monotonic` value after which the test gives up.

    Raises:
        MatchTimeoutError: the deadline passed before a verdict was reached.
    """
    mode = match_mode(pattern)
    if mode is MatchMode.SUFFIX:
        glob = WILDCARD + pattern[: -len(END_ANCHOR)]
    elif mode is MatchMode.SUBSTRING:
        glob = WILDCARD + pattern + WILDCARD
    else:
        glob = pattern + WILDCARD
    return _fullmatch(glob.split(WILDCARD), path, deadline)


def _fullmatch(segments: List[str], text: str, deadline: Optional[float]) -> bool:
    """Check that *text* is fully covered by *segments* joined with wildcards."""
    if len(segments) == 1:
        return text == segments[0]

    head, *middle, tail = segments
    if not text.startswith(head):
        return False

    position = len(head)
    for segment in middle:
        if deadline is not None and time.monotonic() > deadline:
            raise MatchTimeoutError(f"Pattern evaluation exceeded deadline at {segment!r}")
        if not segment:
            continue
        index = text.find(segment, position)
        if index == -1:
            return False
        position = index + len(segment)

    # The tail must fit after everything consumed so far.
    return len(text) - len(tail) >= position and text.endswith(tail)


__all__ = ["MatchMode", "MatchTimeoutError", "is_match", "match_mode"]
