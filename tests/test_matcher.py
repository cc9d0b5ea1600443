# File: tests/test_matcher.py
import time

import pytest

from robots_protocol.txt import Directive, RuleGroup
from robots_protocol.txt.matcher import MatchMode, MatchTimeoutError, is_match, match_mode


@pytest.mark.parametrize(
    "pattern,mode",
    [
        ("/fish", MatchMode.PREFIX),
        ("/fish*", MatchMode.PREFIX),
        ("/fish/", MatchMode.SUBSTRING),
        ("/", MatchMode.SUBSTRING),
        ("/*.php$", MatchMode.SUFFIX),
        ("/$", MatchMode.SUFFIX),
        ("/a$b", MatchMode.PREFIX),
    ],
)
def test_match_mode(pattern, mode):
    assert match_mode(pattern) is mode


@pytest.mark.parametrize(
    "pattern,path,expected",
    [
        ("/fish", "/fish.html", True),
        ("/fish", "/catfish", False),
        ("/fish", "", False),
        ("/fish/", "/animals/fish/", True),
        ("/fish/", "/fish", False),
        ("/*/private/", "/a/b/private/c", True),
        ("/*.php$", "/folder/filename.php", True),
        ("/*.php$", "/filename.php?x", False),
        ("/*.php$", "/windows.PHP", False),
        ("/$", "/", True),
        ("/$", "/page", False),
        ("/a*b*c", "/axxbyyc", True),
        ("/a*b*c", "/axxcyyb", False),
        ("/a*b*c", "/acb", False),
        ("/ab*ba", "/aba", False),
        ("/ab*ba", "/abba", True),
        # Only '*' and a trailing '$' are special.
        ("/a.c", "/abc", False),
        ("/a.c", "/a.c", True),
        ("/a$b", "/a$b/c", True),
        ("/page?id=*", "/page?id=3", True),
        ("/(x)+", "/(x)+", True),
    ],
)
def test_is_match(pattern, path, expected):
    assert is_match(pattern, path) is expected


def test_is_match_raises_when_deadline_passed():
    with pytest.raises(MatchTimeoutError):
        is_match("/a*b*c", "/axbxc", deadline=time.monotonic() - 1)


def test_long_adversarial_path_is_fast():
    path = "/" + "a" * 100_000
    pattern = "/" + "*a" * 50 + "*b"
    started = time.monotonic()
    assert is_match(pattern, path) is False
    assert time.monotonic() - started < 1.0


def test_rule_group_treats_timeout_as_non_match(monkeypatch):
    import robots_protocol.txt.rule_group as rule_group_module

    def always_timeout(pattern, path, deadline=None):
        raise MatchTimeoutError(pattern)

    monkeypatch.setattr(rule_group_module, "is_match", always_timeout)
    group = RuleGroup("bot")
    group.add_directive(Directive(False, "/"))

    result = group.match("/page")

    assert result.directive == Directive(True, "/")
    assert result.user_agent is None


def test_rule_group_deduplicates_and_orders_directives():
    group = RuleGroup("bot")
    group.add_directive(Directive(False, "/b"))
    group.add_directive(Directive(True, "/a"))
    group.add_directive(Directive(False, "/b"))
    group.add_directive(Directive(False, "/B"))
    group.add_directive(None)

    assert group.directives == [
        None,
        Directive(True, "/a"),
        Directive(False, "/B"),
        Directive(False, "/b"),
    ]
    assert len(group) == 4


def test_rule_group_first_longest_match_wins_within_polarity():
    group = RuleGroup("bot")
    group.add_directive(Directive(False, "/ab*"))
    group.add_directive(Directive(False, "/a*c"))

    result = group.match("/abc")

    # Both are 4 characters long; "/a*c" sorts first.
    assert result.directive == Directive(False, "/a*c")
    assert result.user_agent == "bot"
