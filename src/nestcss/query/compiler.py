"""Compile query text into a Query.

Syntax example::

    .foo > img { width: 10rem; }

compiles to ``Query(css_text=".foo > img", style={"width": "10rem"})``.
Text after the closing brace is ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from lark import Lark, Transformer
from lark.exceptions import LarkError

from nestcss.query.model import (
    CustomSpec,
    PatternSpec,
    PredicateSpec,
    Query,
    classify_spec,
)
from nestcss.rules.parser import parse_rules

__all__ = ["compile_query"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_parser = Lark(GRAMMAR_PATH.read_text(), parser="lalr")


class _QueryTransformer(Transformer):
    """Collects the query parts into a dict keyed by part name."""

    def prefix(self, children: list) -> tuple[str, str]:
        return ("css_text", str(children[0]))

    def body(self, children: list) -> tuple[str, str]:
        return ("style", str(children[0]))

    def suffix(self, children: list) -> tuple[str, str]:
        return ("suffix", str(children[0]))

    def block(self, children: list) -> list[tuple[str, str]]:
        return children

    def start(self, children: list) -> dict[str, str]:
        parts: dict[str, str] = {}
        for child in children:
            if isinstance(child, list):
                parts.update(child)
            else:
                parts[child[0]] = child[1]
        return parts


def _compile_text(text: str) -> Query:
    try:
        parts = _QueryTransformer().transform(_parser.parse(text))
    except LarkError:
        # Nested or unbalanced braces: the whole string is the text matcher.
        parts = {"css_text": text}

    css_text = parts.get("css_text", "").strip()
    style = parse_rules(parts["style"]) if "style" in parts else None
    return Query(css_text=css_text or None, style=style)


def compile_query(spec: Any) -> Any:
    """Compile *spec* into a Query.

    - pattern: ``Query(css_text=pattern)``
    - mapping, Query, or callable: returned unchanged
    - non-empty string: text before an optional ``{ ... }`` block becomes
      ``css_text``; the block is parsed into ``style``
    - anything else: None
    """
    matcher = classify_spec(spec)
    if matcher is None:
        return None
    if isinstance(matcher, PatternSpec):
        return Query(css_text=matcher.pattern)
    if isinstance(matcher, (PredicateSpec, CustomSpec)):
        return spec
    return _compile_text(matcher.text)
