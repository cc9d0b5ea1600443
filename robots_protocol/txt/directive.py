# robots_protocol/txt/directive.py
"""
Allow/Disallow rule of a robots.txt.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Directive:
    """An allow or disallow decision over a path pattern.

    ``path`` is kept exactly as written. It may be empty, which inverts the
    meaning of the directive over the whole site, and may contain ``*``
    wildcards and a trailing ``$`` anchor.
    """

    is_allowed: bool
    path: str

    @property
    def name(self) -> str:
        return "Allow" if self.is_allowed else "Disallow"

    def __str__(self) -> str:
        return f"{self.name}: {self.path}"
