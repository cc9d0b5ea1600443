"""
robots_protocol package initializer.
Defines package version and exposes the parsers.
"""
__version__ = "0.1.0"

from robots_protocol.models import Error, Line, MatchResult, TagErrorCode, TxtErrorCode
from robots_protocol.tag import RobotsTag, Tag
from robots_protocol.txt import Directive, RobotsTxt, RuleGroup

__all__ = [
    "__version__",
    "Directive",
    "Error",
    "Line",
    "MatchResult",
    "RobotsTag",
    "RobotsTxt",
    "RuleGroup",
    "Tag",
    "TagErrorCode",
    "TxtErrorCode",
]
