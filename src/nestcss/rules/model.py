"""Rule tree model: the RuleTree alias, scanner tokens, and block kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

# A parsed rule tree. Keys are flattened selectors, at-rule preludes, or
# dash-joined property names. ``None`` marks a statement at-rule (``@import``).
RuleTree = dict[str, Union["RuleTree", str, None]]


class BlockKind(Enum):
    """What kind of ``{ ... }`` block is open at a given depth."""

    SELECTOR = "selector"
    AT_RULE = "at-rule"
    PROPERTY_SEGMENT = "property-segment"


@dataclass(frozen=True)
class Token:
    """Text scanned up to a delimiter.

    ``delimiter`` is one of ``{``, ``}``, ``;``, or ``""`` for end of text.
    ``position`` is the delimiter's index in the normalized source.
    """

    text: str
    delimiter: str
    position: int

    @property
    def is_end(self) -> bool:
        return self.delimiter == ""
