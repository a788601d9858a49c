"""Reversible property setter.

``configure_setter(mode) -> create_setter(prop_set) -> set_properties(target) -> patch``

The setter mutates *target* in place and returns a patch. Applying a setter
built from that patch (same mode) to the same target restores it::

    set_width = create_setter({"style": {"width": "10rem"}})
    patch = set_width(rule)
    create_setter(patch)(rule)   # rule is back to its original state

Modes:
    add     only keys missing from the target are written
    change  only keys already present in the target are written
    both    every key is written
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any

from nestcss.config import SetterConfig

__all__ = ["DELETED", "Deleted", "Patch", "configure_setter", "create_setter"]

_MODES = ("add", "change", "both")

Patch = dict[str, Any]


class Deleted:
    """Patch value for a key that did not exist before the setter ran.

    Applying it removes the key again.
    """

    _instance: Deleted | None = None

    def __new__(cls) -> Deleted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETED"

    def __deepcopy__(self, memo: dict) -> Deleted:
        return self


DELETED = Deleted()


def _assert_mode(mode: object) -> None:
    if mode not in _MODES:
        raise TypeError(f"invalid mode {mode!r}; possible values: 'add', 'change', 'both'")


def _is_branch(value: object) -> bool:
    return isinstance(value, Mapping) and len(value) > 0


def _apply(target: MutableMapping, prop_set: Mapping, mode: str, patch: Patch) -> None:
    for key, value in prop_set.items():
        exists = key in target

        if exists and _is_branch(value) and isinstance(target[key], MutableMapping):
            nested: Patch = {}
            _apply(target[key], value, mode, nested)
            if nested:
                patch[key] = nested
            continue

        if isinstance(value, Deleted):
            if exists:
                patch[key] = target.pop(key)
            continue

        if (exists and mode in ("change", "both")) or (not exists and mode in ("add", "both")):
            patch[key] = target[key] if exists else DELETED
            target[key] = copy.deepcopy(value)


def configure_setter(mode: str = "both") -> Callable[[Mapping], Callable[[MutableMapping], Patch]]:
    """Build a ``create_setter`` function for *mode*.

    Raises TypeError for a mode other than 'add', 'change' or 'both'.
    """
    _assert_mode(mode)
    config = SetterConfig(mode=mode)  # type: ignore[arg-type]

    def create_setter(prop_set: Mapping) -> Callable[[MutableMapping], Patch]:
        if not _is_branch(prop_set):
            raise TypeError("invalid 'prop_set' argument: should be a non-empty mapping")
        prop_set = copy.deepcopy(prop_set)

        def set_properties(target: MutableMapping) -> Patch:
            if not isinstance(target, MutableMapping):
                raise TypeError("invalid 'target' argument: should be a mutable mapping")
            patch: Patch = {}
            _apply(target, prop_set, config.mode, patch)
            return patch

        return set_properties

    return create_setter


create_setter = configure_setter()
