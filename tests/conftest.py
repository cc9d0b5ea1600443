# File: tests/conftest.py
from pathlib import Path
from typing import Callable, Dict

import pytest

from robots_protocol.tag import RobotsTag
from robots_protocol.txt import RobotsTxt

SAMPLE_ROBOTS_TXT = """
# Sample robots.txt
User-agent: my-bot
User-agent: your-bot
Dissalow: /         # intentionally misspelled

User-agent: your-bot
Crawl-delay: 5

Sitemap: http://www.example.com/sitemap.xml
Sitemap: http://www.example.com/sitemap2.xml

Host: example.com

Useragent: *        # intentionally misspelled
Crawl-delay: 2
"""


@pytest.fixture()
def robots_txt() -> RobotsTxt:
    """Empty RobotsTxt instance."""
    return RobotsTxt()


@pytest.fixture()
def load_txt(robots_txt: RobotsTxt) -> Callable[..., RobotsTxt]:
    """
    Load text into the ``robots_txt`` fixture and return it.
    Keyword arguments are passed to RobotsTxt.load.
    """

    def _load(text: str, **options) -> RobotsTxt:
        robots_txt.load(text, **options)
        return robots_txt

    return _load


@pytest.fixture()
def sample_robots_txt() -> str:
    """robots.txt with misspelled fields, a custom field and sitemaps."""
    return SAMPLE_ROBOTS_TXT


@pytest.fixture()
def robots_tag() -> RobotsTag:
    """Empty RobotsTag instance."""
    return RobotsTag()


@pytest.fixture()
def special_words() -> set:
    """X-Robots-Tag directives that carry a value."""
    return {"max-snippet", "max-image-preview"}


@pytest.fixture()
def sample_files(tmp_path) -> Dict[str, Path]:
    """
    Create a robots.txt, an X-Robots-Tag dump and a config for CLI tests.
    Returns dict with names to file paths.
    """
    robots = tmp_path / "robots.txt"
    tags = tmp_path / "tags.txt"
    config = tmp_path / "config.yaml"
    robots.write_text(SAMPLE_ROBOTS_TXT, encoding="utf-8")
    tags.write_text("bot: noindex, nofollow\nmax-snippet: 50\n", encoding="utf-8")
    config.write_text(
        "custom_fields: [Host]\n"
        "misspelled_fields: {Dissalow: Disallow, Useragent: User-agent}\n"
        "special_words: [max-snippet]\n"
        "user_agents: [my-bot, your-bot, other-bot]\n",
        encoding="utf-8",
    )
    return {"robots": robots, "tags": tags, "config": config}
