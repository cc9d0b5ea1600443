"""robots_protocol.txt: robots.txt parsing and path matching."""

from .directive import Directive
from .robots_txt import RobotsTxt, TxtError
from .rule_group import RuleGroup

__all__ = ["Directive", "RuleGroup", "RobotsTxt", "TxtError"]
