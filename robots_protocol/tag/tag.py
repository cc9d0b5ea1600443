# robots_protocol/tag/tag.py
"""
Single X-Robots-Tag directive.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Tag:
    """A page-level directive, optionally with a value and a user-agent.

    All parts are lowercased on construction, e.g.
    ``Tag("MAX-SNIPPET", "100", "Bot")`` renders as ``bot: max-snippet: 100``.
    """

    directive: str
    value: Optional[str] = None
    user_agent: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "directive", self.directive.lower())
        if self.value is not None:
            object.__setattr__(self, "value", self.value.lower())
        if self.user_agent is not None:
            object.__setattr__(self, "user_agent", self.user_agent.lower())

    def __str__(self) -> str:
        text = self.directive if self.value is None else f"{self.directive}: {self.value}"
        return text if self.user_agent is None else f"{self.user_agent}: {text}"
