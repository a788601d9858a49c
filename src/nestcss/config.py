"""Filter and setter configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SetterMode = Literal["add", "change", "both"]


@dataclass(frozen=True)
class FilterConfig:
    string_to_regexp: bool = True  # bare strings in a query become patterns
    result_if_no_target: bool = False  # outcome for a query key the target lacks
    ignore_null: bool = True  # None in a query matches anything
    ignore_undefined: bool = True  # UNDEFINED in a query matches anything


@dataclass(frozen=True)
class SetterConfig:
    mode: SetterMode = "both"
