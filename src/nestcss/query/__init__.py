from nestcss.query.compiler import compile_query
from nestcss.query.filter import (
    FilterEngine,
    configure_filter,
    create_filter,
    create_regexp,
    deep_clone,
    make_filter,
)
from nestcss.query.model import UNDEFINED, Query, classify_spec

__all__ = [
    "UNDEFINED",
    "FilterEngine",
    "Query",
    "classify_spec",
    "compile_query",
    "configure_filter",
    "create_filter",
    "create_regexp",
    "deep_clone",
    "make_filter",
]
