"""Selector flattening and pseudo-class validation.

Nested selector segments never create nested tree levels. They are combined
into one comma-joined selector::

    ["div, .foo", "img, > #bar"]  ->  "div img, div > #bar, .foo img, .foo > #bar"
    [".foo", "&__active", "body > &"]  ->  "body > .foo__active"
"""

from __future__ import annotations

import re
from collections.abc import Sequence

__all__ = ["PSEUDO_CLASSES", "combine_selectors", "is_valid_selector", "normalize_whitespace"]

# https://developer.mozilla.org/en-US/docs/Web/CSS/Reference (pseudo-classes and pseudo-elements)
PSEUDO_CLASSES: frozenset[str] = frozenset(
    {
        ":active",
        "::after",
        ":any-link",
        "::backdrop",
        "::before",
        ":blank",
        ":checked",
        "::cue",
        "::cue-region",
        ":current",
        ":default",
        ":defined",
        ":dir",
        ":disabled",
        ":empty",
        ":enabled",
        ":first",
        ":first-child",
        "::first-letter",
        "::first-line",
        ":first-of-type",
        ":focus",
        ":focus-visible",
        ":focus-within",
        ":fullscreen",
        ":future",
        "::grammar-error",
        ":has",
        ":host",
        ":host-context",
        ":hover",
        ":in-range",
        ":indeterminate",
        ":invalid",
        ":is",
        ":lang",
        ":last-child",
        ":last-of-type",
        ":left",
        ":link",
        ":local-link",
        "::marker",
        ":not",
        ":nth-child",
        ":nth-col",
        ":nth-last-child",
        ":nth-last-col",
        ":nth-last-of-type",
        ":nth-of-type",
        ":only-child",
        ":only-of-type",
        ":optional",
        ":out-of-range",
        "::part",
        ":past",
        ":paused",
        ":picture-in-picture",
        "::placeholder",
        ":placeholder-shown",
        ":playing",
        ":read-only",
        ":read-write",
        ":required",
        ":right",
        ":root",
        ":scope",
        "::selection",
        "::slotted",
        "::spelling-error",
        ":target",
        "::target-text",
        ":target-within",
        ":user-invalid",
        ":user-valid",
        ":valid",
        ":visited",
        ":where",
    }
)

_WHITESPACE_RE = re.compile(r"\s+")
_PSEUDO_RE = re.compile(r"::?[\w-]*")
_AT_LINE_RE = re.compile(r"^\s*@")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _split_alternatives(segment: str) -> list[str]:
    # Commas inside parentheses (``:is(a, b)``) are not split points.
    parts: list[str] = []
    depth = 0
    start = 0
    for index, ch in enumerate(segment):
        if ch == "(":
            depth += 1
        elif ch == ")" and depth > 0:
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(segment[start:index])
            start = index + 1
    parts.append(segment[start:])
    return parts


def _join(prefix: str, alternative: str) -> str:
    if "&" in alternative:
        return normalize_whitespace(alternative.replace("&", prefix))
    return normalize_whitespace(f"{prefix} {alternative}")


def combine_selectors(segments: Sequence[str]) -> str | None:
    """Flatten a stack of nested selector segments into one selector.

    Returns None if *segments* is not a non-empty list of strings.
    """
    if not isinstance(segments, (list, tuple)) or not segments:
        return None
    if not all(isinstance(s, str) for s in segments):
        return None

    if len(segments) == 1:
        return normalize_whitespace(segments[0])

    combined = _split_alternatives(segments[0])
    for segment in segments[1:]:
        alternatives = _split_alternatives(segment)
        combined = [_join(prefix, alt) for prefix in combined for alt in alternatives]

    unique = dict.fromkeys(normalize_whitespace(s) for s in combined)
    return ", ".join(unique)


def is_valid_selector(token: str) -> bool:
    """Return True unless *token* uses a pseudo-class outside PSEUDO_CLASSES."""
    if ":" not in token or _AT_LINE_RE.match(token):
        return True
    return all(m in PSEUDO_CLASSES for m in _PSEUDO_RE.findall(token))
