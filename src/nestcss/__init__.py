"""Nested CSS-like rule text: parse, stringify, query and patch."""

__version__ = "0.1.0"

from nestcss.config import FilterConfig, SetterConfig  # noqa: E402
from nestcss.errors import StyleSyntaxError  # noqa: E402
from nestcss.query import (  # noqa: E402
    UNDEFINED,
    Query,
    compile_query,
    configure_filter,
    create_filter,
    make_filter,
)
from nestcss.rules import combine_selectors, parse_rules, stringify  # noqa: E402
from nestcss.setter import DELETED, configure_setter, create_setter  # noqa: E402
from nestcss.store import RuleHandle, Stylesheet  # noqa: E402

__all__ = [
    "DELETED",
    "UNDEFINED",
    "FilterConfig",
    "Query",
    "RuleHandle",
    "SetterConfig",
    "StyleSyntaxError",
    "Stylesheet",
    "combine_selectors",
    "compile_query",
    "configure_filter",
    "configure_setter",
    "create_filter",
    "create_setter",
    "make_filter",
    "parse_rules",
    "stringify",
]
