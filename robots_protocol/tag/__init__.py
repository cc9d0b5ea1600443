"""robots_protocol.tag: X-Robots-Tag parsing."""

from .robots_tag import RobotsTag, TagError
from .tag import Tag

__all__ = ["Tag", "RobotsTag", "TagError"]
