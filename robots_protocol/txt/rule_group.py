# robots_protocol/txt/rule_group.py
"""
Directives and crawl-delay collected for one user-agent.
"""
from __future__ import annotations

import time
from typing import Dict, Iterator, List, Optional

from robots_protocol.logger import logger
from robots_protocol.models import MatchResult
from robots_protocol.txt.directive import Directive
from robots_protocol.txt.matcher import MatchTimeoutError, is_match

DEFAULT_MATCH_TIMEOUT: float = 5.0

#: Stands for user-agents that were named without any rule after them.
_ALLOW_ALL = Directive(is_allowed=True, path="/")


class RuleGroup:
    """Rule set of a single user-agent.

    Directives are kept unique by their rendered text and iterated in that
    order. ``None`` may be added to record that the user-agent was declared
    without any rule.
    """

    def __init__(self, user_agent: str) -> None:
        self.user_agent = user_agent
        self.crawl_delay: Optional[int] = None
        self._directives: Dict[str, Optional[Directive]] = {}

    @property
    def directives(self) -> List[Optional[Directive]]:
        """Directives sorted by rendered text; the absent directive comes first."""
        return [self._directives[key] for key in sorted(self._directives)]

    def __iter__(self) -> Iterator[Optional[Directive]]:
        return iter(self.directives)

    def __len__(self) -> int:
        return len(self._directives)

    def add_directive(self, directive: Optional[Directive]) -> None:
        key = "" if directive is None else str(directive)
        self._directives.setdefault(key, directive)

    def match(
        self, path_with_optional_query: str, match_timeout: float = DEFAULT_MATCH_TIMEOUT
    ) -> MatchResult:
        """Decide which directive governs *path_with_optional_query*.

        The longest matching path wins; when the longest allow and the longest
        disallow are equally long, allow wins. Without any match everything is
        allowed and the result carries no user-agent.
        """
        effected_allow: Optional[str] = None
        effected_disallow: Optional[str] = None

        for directive in self.directives:
            is_allowed, path = _effective(directive)
            deadline = time.monotonic() + match_timeout
            try:
                matched = is_match(path, path_with_optional_query, deadline)
            except MatchTimeoutError:
                logger.debug(
                    "Pattern %r for %s timed out on %r", path, self.user_agent, path_with_optional_query
                )
                matched = False
            if not matched:
                continue

            if is_allowed:
                if effected_allow is None or len(path) > len(effected_allow):
                    effected_allow = path
            elif effected_disallow is None or len(path) > len(effected_disallow):
                effected_disallow = path

        if effected_allow is None and effected_disallow is None:
            return MatchResult(_ALLOW_ALL)
        if effected_disallow is None:
            return MatchResult(Directive(True, effected_allow), self.user_agent)
        if effected_allow is None or len(effected_disallow) > len(effected_allow):
            return MatchResult(Directive(False, effected_disallow), self.user_agent)
        return MatchResult(Directive(True, effected_allow), self.user_agent)

    def __str__(self) -> str:
        lines = [f"User-agent: {self.user_agent}"]
        lines.extend(str(directive) for directive in self.directives if directive is not None)
        if self.crawl_delay is not None:
            lines.extend(["", f"Crawl-delay: {self.crawl_delay}"])
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"RuleGroup(user_agent={self.user_agent!r}, directives={len(self)}, crawl_delay={self.crawl_delay!r})"


def _effective(directive: Optional[Directive]) -> tuple[bool, str]:
    """Return the polarity and path a directive is actually matched with."""
    if directive is None:
        return _ALLOW_ALL.is_allowed, _ALLOW_ALL.path
    # An empty path inverts the directive: "Disallow:" allows everything.
    if not directive.path:
        return not directive.is_allowed, "/"
    return directive.is_allowed, directive.path


__all__ = ["RuleGroup", "DEFAULT_MATCH_TIMEOUT"]
