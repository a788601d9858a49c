"""In-memory stylesheet: an ordered, thread-safe collection of rule handles."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from nestcss.config import FilterConfig
from nestcss.errors import StyleSyntaxError
from nestcss.query.filter import make_filter
from nestcss.rules.model import RuleTree
from nestcss.rules.parser import parse_rules
from nestcss.rules.stringify import stringify

__all__ = ["RuleHandle", "Stylesheet"]

logger = logging.getLogger(__name__)


@dataclass
class RuleHandle:
    """A rule stored in a Stylesheet.

    ``css_text`` is the single-line rule text, ``selector`` the top-level key
    (None for a bare style block) and ``style`` the rule body.
    """

    css_text: str
    selector: str | None = None
    style: dict[str, Any] = field(default_factory=dict)


def _make_handle(tree: RuleTree, css_text: str) -> RuleHandle:
    if len(tree) == 1:
        key, body = next(iter(tree.items()))
        if isinstance(body, dict):
            return RuleHandle(css_text=css_text, selector=key, style=body)
        if body is None:
            return RuleHandle(css_text=css_text, selector=key)
    return RuleHandle(css_text=css_text, style=dict(tree))


class Stylesheet:
    """Holds compiled rules in insertion order.

    All public methods take a lock so one stylesheet can be shared across
    threads.
    """

    def __init__(self, filter_config: FilterConfig | None = None) -> None:
        self._lock = threading.Lock()
        self._rules: list[RuleHandle] = []
        self.filter_config = filter_config

    @staticmethod
    def _compile(rule_text: str) -> RuleHandle:
        tree = parse_rules(rule_text)
        if tree is None:
            raise StyleSyntaxError(f"No rule found in {rule_text!r}")
        segments = stringify(tree, indentation=0)
        if len(segments) != 1:
            raise StyleSyntaxError(f"Expected exactly one rule, found {len(segments)}")

        return _make_handle(tree, segments[0].strip())

    def insert(self, rule_text: str) -> RuleHandle:
        """Parse one rule and append it.

        Raises StyleSyntaxError when *rule_text* holds no rule or more than one.
        """
        handle = self._compile(rule_text)
        with self._lock:
            self._rules.append(handle)
        logger.info("Inserted rule: %s", handle.css_text)
        return handle

    def extend(self, text: str) -> list[RuleHandle]:
        """Insert every top-level rule found in *text*.

        All rules are compiled before any is stored, so a StyleSyntaxError
        leaves the stylesheet unchanged.
        """
        tree = parse_rules(text)
        if tree is None:
            return []
        handles = [self._compile(segment) for segment in stringify(tree, indentation=0)]
        with self._lock:
            self._rules.extend(handles)
        for handle in handles:
            logger.info("Inserted rule: %s", handle.css_text)
        return handles

    def delete(self, handle: RuleHandle) -> bool:
        """Remove *handle*. Returns False if it is not in this stylesheet."""
        with self._lock:
            for index, rule in enumerate(self._rules):
                if rule is handle:
                    del self._rules[index]
                    break
            else:
                return False
        logger.info("Deleted rule: %s", handle.css_text)
        return True

    def rules(self, query: Any = None) -> list[RuleHandle]:
        """Return the stored rules, filtered by *query* when one is given."""
        with self._lock:
            snapshot = list(self._rules)
        if query is None:
            return snapshot
        matches = make_filter(query, self.filter_config)
        return [rule for rule in snapshot if matches(rule)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __iter__(self) -> Iterator[RuleHandle]:
        return iter(self.rules())

    def __repr__(self) -> str:
        return f"Stylesheet(rules={len(self)})"
