"""Query model: compiled queries and the tagged matcher spec variants."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from nestcss.rules.model import RuleTree


class _Undefined:
    """Marker for "no value given", kept distinct from ``None``."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class Query:
    """A compiled query.

    Attributes:
        css_text: Matched against a target's ``css_text``. Plain strings are
            turned into whitespace-tolerant patterns by the filter engine.
        style: A RuleTree fragment matched structurally against the
            target's ``style``.
    """

    css_text: str | re.Pattern | None = None
    style: RuleTree | None = None

    def as_mapping(self) -> dict[str, Any]:
        mapping: dict[str, Any] = {}
        if self.css_text is not None:
            mapping["css_text"] = self.css_text
        if self.style is not None:
            mapping["style"] = self.style
        return mapping


@dataclass(frozen=True)
class TextSpec:
    text: str


@dataclass(frozen=True)
class PatternSpec:
    pattern: re.Pattern


@dataclass(frozen=True)
class PredicateSpec:
    predicate: Mapping | Query


@dataclass(frozen=True)
class CustomSpec:
    function: Callable[[Any], bool]


MatcherSpec = Union[TextSpec, PatternSpec, PredicateSpec, CustomSpec]


def classify_spec(spec: object) -> MatcherSpec | None:
    """Tag *spec* with its matcher kind, or return None if it has none."""
    if isinstance(spec, re.Pattern):
        return PatternSpec(spec)
    if isinstance(spec, (Mapping, Query)):
        return PredicateSpec(spec)
    if callable(spec):
        return CustomSpec(spec)
    if isinstance(spec, str) and spec:
        return TextSpec(spec)
    return None
