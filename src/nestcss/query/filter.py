"""Structural filter engine.

``configure_filter(config) -> create_filter(query) -> matches(target) -> bool``

A query is matched against a target key by key:

- ``None`` / ``UNDEFINED`` query values match anything (configurable)
- a pattern is searched in a string target value
- a non-empty mapping requires every key in the target and recurses
- anything else is compared with ``==``

Targets may be mappings or plain objects; object attributes count as keys.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from nestcss.config import FilterConfig
from nestcss.errors import StyleSyntaxError
from nestcss.query.compiler import compile_query
from nestcss.query.model import UNDEFINED, CustomSpec, Query, classify_spec

__all__ = [
    "FilterEngine",
    "configure_filter",
    "create_filter",
    "create_regexp",
    "deep_clone",
    "make_filter",
]

Filter = Callable[..., bool]

_SPECIAL_RE = re.compile(r"[+*()\[\].^$:{}/\\]")
_WHITESPACE_RE = re.compile(r"\s+")


def create_regexp(value: Any) -> Any:
    """Turn a non-empty string into a whitespace-tolerant pattern.

    Regex metacharacters are escaped and whitespace runs match ``\\s+``.
    Patterns, empty strings and non-strings are returned unchanged.
    """
    if not isinstance(value, str) or value == "":
        return value
    source = _SPECIAL_RE.sub(r"\\\g<0>", value.strip())
    return re.compile(_WHITESPACE_RE.sub(r"\\s+", source))


def deep_clone(obj: Any, string_to_regexp: bool = True) -> Any:
    """Copy a query, optionally turning every string into a pattern."""
    if isinstance(obj, str):
        return create_regexp(obj) if string_to_regexp and obj else obj
    if isinstance(obj, Query):
        obj = obj.as_mapping()
    if not isinstance(obj, Mapping):
        return obj
    return {key: deep_clone(value, string_to_regexp) for key, value in obj.items()}


def _lookup(target: Any, key: Any) -> tuple[bool, Any]:
    if isinstance(target, Mapping):
        if key in target:
            return True, target[key]
        return False, UNDEFINED
    if target is None or target is UNDEFINED or isinstance(target, (str, bytes, int, float)):
        return False, UNDEFINED
    if isinstance(key, str) and hasattr(target, key):
        return True, getattr(target, key)
    return False, UNDEFINED


class FilterEngine:
    """Matches queries against targets under one FilterConfig."""

    def __init__(self, config: FilterConfig | None = None) -> None:
        if config is not None and not isinstance(config, FilterConfig):
            raise TypeError(f"invalid 'config' argument: expected FilterConfig, got {config!r}")
        self.config = config or FilterConfig()

    def match(self, target: Any, query: Any) -> bool:
        config = self.config
        if config.ignore_null and query is None:
            return True
        if config.ignore_undefined and query is UNDEFINED:
            return True

        if isinstance(query, re.Pattern) and isinstance(target, str):
            return query.search(target) is not None

        if isinstance(query, Mapping) and query:
            for key, value in query.items():
                found, actual = _lookup(target, key)
                if not found:
                    if config.result_if_no_target:
                        continue
                    return False
                if not self.match(actual, value):
                    return False
            return True

        return target == query

    def create_filter(self, query: Any = UNDEFINED) -> Filter:
        """Build a predicate for *query*. Callables are returned unchanged."""
        if callable(query):
            return query

        compiled = deep_clone(query, self.config.string_to_regexp)

        def matches(target: Any = UNDEFINED) -> bool:
            return self.match(target, compiled)

        return matches


def configure_filter(config: FilterConfig | None = None, **overrides: bool) -> Callable[..., Filter]:
    """Build a ``create_filter`` function bound to one configuration.

    Keyword overrides are applied on top of *config* (or the defaults).
    """
    if config is not None and not isinstance(config, FilterConfig):
        raise TypeError(f"invalid 'config' argument: expected FilterConfig, got {config!r}")
    engine = FilterEngine(replace(config or FilterConfig(), **overrides))
    return engine.create_filter


create_filter = configure_filter()


def make_filter(spec: Any, config: FilterConfig | None = None) -> Filter:
    """Compile a query spec (text, pattern, mapping or callable) into a filter.

    Raises StyleSyntaxError for any other kind of spec.
    """
    matcher = classify_spec(spec)
    if matcher is None:
        raise StyleSyntaxError(
            f"Invalid filter {spec!r}: expected a non-empty string, a pattern, "
            "a mapping or a callable"
        )
    if isinstance(matcher, CustomSpec):
        return spec
    return configure_filter(config)(compile_query(spec))
