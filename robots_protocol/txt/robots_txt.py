# robots_protocol/txt/robots_txt.py
"""
Parser and query layer for robots.txt files.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    AsyncIterable,
    Collection,
    Dict,
    List,
    Mapping,
    Optional,
    Set,
    Union,
)

from robots_protocol.logger import logger
from robots_protocol.models import Error, Line, MatchResult, TxtErrorCode
from robots_protocol.txt.directive import Directive
from robots_protocol.txt.rule_group import DEFAULT_MATCH_TIMEOUT, RuleGroup
from robots_protocol.utils import (
    TextSource,
    decode_line,
    iter_lines,
    normalize_sitemap,
    normalize_user_agent,
    parse_int,
)

USER_AGENT_CATCH_ALL = "*"

TxtError = Error[TxtErrorCode]


@dataclass
class _State:
    """Collections rebuilt by every load."""

    user_agent_to_rule_group: Dict[str, RuleGroup] = field(default_factory=dict)
    sitemaps: Dict[str, None] = field(default_factory=dict)
    custom_field_to_values: Dict[str, Dict[str, None]] = field(default_factory=dict)


class RobotsTxt:
    """In-memory representation of a robots.txt.

    Example::

        robots = RobotsTxt()
        errors = robots.load(text, custom_fields={"host"})
        robots.is_allowed("my-bot", "/private/page.html")
    """

    def __init__(self, match_timeout: float = DEFAULT_MATCH_TIMEOUT) -> None:
        if match_timeout <= 0:
            raise ValueError(f"match_timeout must be positive, got {match_timeout}")
        self.match_timeout = match_timeout
        self._state = _State()

    # ------------------------------------------------------------------ #
    # Loading                                                            #
    # ------------------------------------------------------------------ #

    def load(
        self,
        data: TextSource,
        ignore_allow_directive: bool = False,
        custom_fields: Optional[Collection[str]] = None,
        misspelled_fields: Optional[Mapping[str, str]] = None,
    ) -> List[TxtError]:
        """Replace the current content with the rules parsed from *data*.

        *data* may be a string, UTF-8 bytes or an iterable of lines. Returns
        every diagnostic found, in input order; an empty list means a clean
        parse.
        """
        loader = _Loader(ignore_allow_directive, custom_fields, misspelled_fields)
        for text in iter_lines(data):
            loader.feed(text)
        return self._commit(loader)

    async def load_async(
        self,
        lines: AsyncIterable[Union[str, bytes]],
        ignore_allow_directive: bool = False,
        custom_fields: Optional[Collection[str]] = None,
        misspelled_fields: Optional[Mapping[str, str]] = None,
    ) -> List[TxtError]:
        """Same as :meth:`load` for a line source read asynchronously (e.g. a streamed body)."""
        loader = _Loader(ignore_allow_directive, custom_fields, misspelled_fields)
        first = True
        async for text in lines:
            loader.feed(decode_line(text, first=first))
            first = False
        return self._commit(loader)

    def _commit(self, loader: _Loader) -> List[TxtError]:
        self._state = loader.finish()
        logger.debug(
            "robots.txt loaded: %d user-agent(s), %d sitemap(s), %d error(s)",
            len(self._state.user_agent_to_rule_group),
            len(self._state.sitemaps),
            len(loader.errors),
        )
        return loader.errors

    # ------------------------------------------------------------------ #
    # Mutation                                                           #
    # ------------------------------------------------------------------ #

    def add_directive(self, user_agent: str, directive: Optional[Directive]) -> None:
        """Attach *directive* to *user_agent*; ``None`` records an agent without rules."""
        _rule_group(self._state, user_agent).add_directive(directive)

    def set_crawl_delay(self, user_agent: str, crawl_delay: int) -> None:
        _rule_group(self._state, user_agent).crawl_delay = crawl_delay

    def add_sitemap(self, sitemap: str) -> None:
        """Store *sitemap* if it normalizes to a URL with a filename."""
        normalized = normalize_sitemap(sitemap)
        if normalized is not None:
            self._state.sitemaps[normalized] = None

    def add_custom(self, field_name: str, value: str) -> None:
        values = self._state.custom_field_to_values.setdefault(field_name.lower(), {})
        values[value] = None

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #

    @property
    def user_agents(self) -> List[str]:
        return [group.user_agent for group in self._state.user_agent_to_rule_group.values()]

    @property
    def sitemaps(self) -> Set[str]:
        return set(self._state.sitemaps)

    @property
    def sitemap_count(self) -> int:
        return len(self._state.sitemaps)

    def get_custom(self, field_name: str) -> Set[str]:
        return set(self._state.custom_field_to_values.get(field_name.lower(), ()))

    def get_custom_count(self, field_name: str) -> int:
        return len(self._state.custom_field_to_values.get(field_name.lower(), ()))

    def get_specific_user_agent(self, user_agent: str) -> Optional[str]:
        """Return the registered user-agent key that governs *user_agent*.

        Tries an exact (case-insensitive) match first, then wildcard names
        obtained by dropping trailing characters: ``botx`` → ``bot*`` →
        ``bo*`` → ``b*`` → ``*``. Returns ``None`` if nothing matches.
        """
        groups = self._state.user_agent_to_rule_group
        name = user_agent.lower()
        candidate = name
        while candidate not in groups:
            if candidate == USER_AGENT_CATCH_ALL:
                return None
            name = name[:-1]
            candidate = f"{name}{USER_AGENT_CATCH_ALL}"
        return candidate

    def get_rule_group(self, user_agent: str) -> Optional[RuleGroup]:
        key = self.get_specific_user_agent(user_agent)
        if key is None:
            return None
        return self._state.user_agent_to_rule_group[key]

    def get_crawl_delay(self, user_agent: str) -> Optional[int]:
        rule_group = self.get_rule_group(user_agent)
        return None if rule_group is None else rule_group.crawl_delay

    def match(self, user_agent: str, path_with_optional_query: str) -> MatchResult:
        """Return the directive governing *path_with_optional_query* for *user_agent*."""
        rule_group = self.get_rule_group(user_agent)
        if rule_group is None:
            return MatchResult(Directive(is_allowed=True, path="/"))
        return rule_group.match(path_with_optional_query, self.match_timeout)

    def is_allowed(self, user_agent: str, path_with_optional_query: str) -> bool:
        return self.match(user_agent, path_with_optional_query).is_allowed


def _rule_group(state: _State, user_agent: str) -> RuleGroup:
    key = user_agent.lower()
    rule_group = state.user_agent_to_rule_group.get(key)
    if rule_group is None:
        rule_group = RuleGroup(user_agent)
        state.user_agent_to_rule_group[key] = rule_group
    return rule_group


class _Loader:
    """Single-pass line dispatcher building a fresh :class:`_State`."""

    def __init__(
        self,
        ignore_allow_directive: bool,
        custom_fields: Optional[Collection[str]],
        misspelled_fields: Optional[Mapping[str, str]],
    ) -> None:
        self.ignore_allow_directive = ignore_allow_directive
        self.custom_fields = {name.lower() for name in custom_fields or ()}
        self.misspelled_fields = {
            key.strip().lower(): value for key, value in (misspelled_fields or {}).items()
        }
        self.state = _State()
        self.errors: List[TxtError] = []
        # Names declared by the current run of User-agent lines.
        self.user_agents: Dict[str, None] = {}
        self.has_encountered_rule = False
        self.line_number = 0
        self.skipped_line_count = 0

    def feed(self, raw: str) -> None:
        text = raw.strip()
        # Numbering starts at the first non-blank line.
        if self.line_number == 0 and not text:
            return
        self.line_number += 1

        entry = text.split("#", 1)[0].rstrip()
        if not entry:
            self.skipped_line_count += 1
            return

        line = Line(self.line_number, text)
        field_name, colon, value = entry.partition(":")
        if not colon:
            # A bare field name means the value was left out.
            if self.ignore_allow_directive and entry.lower() == "allow":
                self.skipped_line_count += 1
            else:
                self._error(line, TxtErrorCode.MISSING_VALUE)
            return

        field_name = field_name.strip()
        field_name = self.misspelled_fields.get(field_name.lower(), field_name).lower()
        value = value.strip()

        if field_name in ("allow", "disallow"):
            self._on_rule(line, field_name == "allow", value)
        elif field_name == "crawl-delay":
            self._on_crawl_delay(line, value)
        elif field_name == "sitemap":
            if not value:
                self._error(line, TxtErrorCode.MISSING_VALUE)
            else:
                self._add_sitemap(value)
        elif field_name == "user-agent":
            self._on_user_agent(line, value)
        elif field_name in self.custom_fields:
            values = self.state.custom_field_to_values.setdefault(field_name, {})
            values[value.lower()] = None
        else:
            self.skipped_line_count += 1

    def finish(self) -> _State:
        if self.skipped_line_count == self.line_number:
            # Comments and blank lines only: same as an empty robots.txt.
            self.errors.clear()
            return _State()

        if not self.has_encountered_rule:
            for user_agent in self.user_agents:
                _rule_group(self.state, user_agent).add_directive(None)
        return self.state

    def _on_rule(self, line: Line, is_allowed: bool, value: str) -> None:
        if is_allowed and self.ignore_allow_directive:
            self.skipped_line_count += 1
            return
        if not self.user_agents:
            self._error(line, TxtErrorCode.RULE_FOUND_BEFORE_USER_AGENT)
            return

        if value and not value.startswith("/"):
            self._error(line, TxtErrorCode.INVALID_PATH_FORMAT)
        else:
            directive = Directive(is_allowed, value)
            for user_agent in self.user_agents:
                _rule_group(self.state, user_agent).add_directive(directive)
        self.has_encountered_rule = True

    def _on_crawl_delay(self, line: Line, value: str) -> None:
        if not self.user_agents:
            self._error(line, TxtErrorCode.RULE_FOUND_BEFORE_USER_AGENT)
            return
        if not value:
            self._error(line, TxtErrorCode.MISSING_VALUE)
            return

        crawl_delay = parse_int(value)
        if crawl_delay is None:
            logger.debug("Ignoring non-numeric crawl-delay at %s", line)
            return
        for user_agent in self.user_agents:
            _rule_group(self.state, user_agent).crawl_delay = crawl_delay
        self.has_encountered_rule = True

    def _on_user_agent(self, line: Line, value: str) -> None:
        if not value:
            self._error(line, TxtErrorCode.MISSING_VALUE)
        else:
            # A rule ends the current group of consecutive User-agent lines.
            if self.has_encountered_rule:
                self.user_agents.clear()
            self.user_agents[normalize_user_agent(value)] = None
        self.has_encountered_rule = False

    def _add_sitemap(self, value: str) -> None:
        normalized = normalize_sitemap(value)
        if normalized is not None:
            self.state.sitemaps[normalized] = None

    def _error(self, line: Line, code: TxtErrorCode) -> None:
        logger.debug("robots.txt %s: %s", code.name, line)
        self.errors.append(Error(line, code))


__all__ = ["RobotsTxt", "TxtError", "USER_AGENT_CATCH_ALL"]
