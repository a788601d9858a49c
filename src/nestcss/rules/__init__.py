from nestcss.rules.model import BlockKind, RuleTree, Token
from nestcss.rules.parser import parse_rules, tokenize
from nestcss.rules.selectors import combine_selectors, is_valid_selector
from nestcss.rules.stringify import stringify

__all__ = [
    "BlockKind",
    "RuleTree",
    "Token",
    "combine_selectors",
    "is_valid_selector",
    "parse_rules",
    "stringify",
    "tokenize",
]
