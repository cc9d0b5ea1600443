# robots_protocol/models.py
"""
Shared value types: source lines, parse diagnostics and match results.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from robots_protocol.txt.directive import Directive


class _DescribedCode(Enum):
    """Enum whose members carry a human-readable description as their value."""

    @property
    def description(self) -> str:
        return self.value


class TxtErrorCode(_DescribedCode):
    """Diagnostics produced while loading a robots.txt."""

    MISSING_VALUE = "Missing value."
    INVALID_PATH_FORMAT = "Path must be empty or start with '/'."
    RULE_FOUND_BEFORE_USER_AGENT = "Rule found before any User-agent field."


class TagErrorCode(_DescribedCode):
    """Diagnostics produced while loading X-Robots-Tag values."""

    MISSING_VALUE = "Missing value."


CodeT = TypeVar("CodeT", TxtErrorCode, TagErrorCode)


@dataclass(frozen=True, slots=True)
class Line:
    """A 1-based line number and the (stripped) text found there."""

    number: int
    text: str

    def __str__(self) -> str:
        return f"{self.number}: {self.text}"


@dataclass(frozen=True, slots=True)
class Error(Generic[CodeT]):
    """A non-fatal problem found at a specific line."""

    line: Line
    code: CodeT

    def __str__(self) -> str:
        return f"{self.line} ; {self.code.name}"


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Verdict of a robots.txt query.

    ``user_agent`` is ``None`` when no user-agent group decided the verdict,
    which means everything is implicitly allowed.
    """

    directive: Directive
    user_agent: Optional[str] = None

    @property
    def is_allowed(self) -> bool:
        return self.directive.is_allowed


__all__ = ["Line", "Error", "MatchResult", "TxtErrorCode", "TagErrorCode"]
