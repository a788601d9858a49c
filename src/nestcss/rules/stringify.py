"""Render a RuleTree back into rule text, one string per top-level entry."""

from __future__ import annotations

from collections.abc import Mapping

from nestcss.rules.model import RuleTree

__all__ = ["stringify"]


def _render(rule: Mapping, depth: int, indentation: int, delimiter: str) -> list[str]:
    indent = " " * (indentation * depth)
    segments: list[str] = []
    for key, value in rule.items():
        if isinstance(value, Mapping):
            body = "".join(_render(value, depth + 1, indentation, delimiter))
            segments.append(f"{indent}{key} {{{delimiter}{body}{indent}}}{delimiter}")
        elif value is None:
            segments.append(f"{indent}{key};{delimiter}")
        else:
            segments.append(f"{indent}{key}: {value};{delimiter}")
    return segments


def stringify(tree: RuleTree, indentation: int = 2) -> list[str]:
    """Render *tree* as rule text.

    Each top-level selector or at-rule becomes its own string. A tree made of
    properties only is rendered as a single style block without braces.
    With ``indentation <= 0`` the output has no newlines.
    """
    if not isinstance(tree, Mapping) or not tree:
        return []

    delimiter = "\n" if indentation > 0 else " "
    segments = _render(tree, 0, max(indentation, 0), delimiter)
    if not any(isinstance(v, Mapping) for v in tree.values()):
        return ["".join(segments)]
    return segments
