# robots_protocol/tag/robots_tag.py
"""
Parser and query layer for X-Robots-Tag values (and robots meta content).
"""
from __future__ import annotations

from typing import Collection, Dict, Iterable, List, Optional, Set

from robots_protocol.logger import logger
from robots_protocol.models import Error, Line, TagErrorCode
from robots_protocol.tag.tag import Tag

USER_AGENT_CATCH_ALL = "robots"

TagError = Error[TagErrorCode]


class RobotsTag:
    """Tags grouped by user-agent and directive.

    Each loaded entry looks like one of::

        all, max-snippet: 100
        robots: max-snippet: 100
        googlebot: noindex, nofollow

    A leading ``name:`` is read as a user-agent unless ``name`` is one of the
    *special words*, i.e. a directive that takes a value.
    """

    def __init__(self) -> None:
        self._user_agent_to_directive_to_tags: Dict[str, Dict[str, Dict[str, Tag]]] = {}

    def load(
        self, data: Iterable[str], special_words: Optional[Collection[str]] = None
    ) -> List[TagError]:
        """Replace the current tags with the ones parsed from *data* (one value per entry)."""
        words = {word.lower() for word in special_words or ()}
        tags: Dict[str, Dict[str, Dict[str, Tag]]] = {}
        errors: List[TagError] = []

        for line_number, datum in enumerate(data, start=1):
            text = datum.strip()
            user_agent, tokens = _split_user_agent(text, words)
            for token in tokens:
                token = token.strip()
                if not token:
                    error = Error(Line(line_number, text), TagErrorCode.MISSING_VALUE)
                    logger.debug("X-Robots-Tag %s: %s", error.code.name, error.line)
                    errors.append(error)
                    continue
                tag = _create_tag(user_agent, token)
                directive_to_tags = tags.setdefault(tag.user_agent, {})
                directive_to_tags.setdefault(tag.directive, {}).setdefault(str(tag), tag)

        self._user_agent_to_directive_to_tags = tags
        logger.debug("X-Robots-Tag loaded: %d user-agent(s), %d error(s)", len(tags), len(errors))
        return errors

    def get_tags(self, user_agent: Optional[str], directive: Optional[str] = None) -> Set[Tag]:
        """Return the tags of *user_agent*, all of them or only those of *directive*."""
        if user_agent is None:
            return set()
        directive_to_tags = self._user_agent_to_directive_to_tags.get(user_agent.lower())
        if directive_to_tags is None:
            return set()
        if directive is None:
            return {tag for tags in directive_to_tags.values() for tag in tags.values()}
        return set(directive_to_tags.get(directive.lower(), {}).values())

    def get_tag_count(self, user_agent: Optional[str], directive: Optional[str] = None) -> int:
        return len(self.get_tags(user_agent, directive))

    def has_tag(self, user_agent: Optional[str], directive: Optional[str] = None) -> bool:
        return self.get_tag_count(user_agent, directive) > 0

    @property
    def user_agents(self) -> List[str]:
        return list(self._user_agent_to_directive_to_tags)


def _split_user_agent(text: str, special_words: Set[str]) -> tuple[str, List[str]]:
    """Separate an optional ``user-agent:`` prefix from the comma-separated tokens."""
    tokens = text.split(",")
    prefix, colon, _rest = tokens[0].partition(":")
    if not colon:
        return USER_AGENT_CATCH_ALL, tokens

    prefix = prefix.rstrip()
    if prefix.lower() in special_words:
        # e.g. "max-snippet: 100"
        return USER_AGENT_CATCH_ALL, tokens
    # e.g. "bot: max-snippet: 100"
    return prefix.lower(), text.partition(":")[2].split(",")


def _create_tag(user_agent: str, content: str) -> Tag:
    directive, colon, value = content.partition(":")
    if not colon:
        return Tag(content, user_agent=user_agent)
    return Tag(directive.rstrip(), value.lstrip(), user_agent)


__all__ = ["RobotsTag", "TagError", "USER_AGENT_CATCH_ALL"]
