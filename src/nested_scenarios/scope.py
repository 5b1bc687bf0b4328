"""Scope stack for nested scenario declarations."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from nested_scenarios.errors import InvalidDeclaration


logger = logging.getLogger(__name__)

POST_KEY = "post"


def validate_options(options: Any) -> dict[Any, Any]:
    """Check a scenario options mapping and return it as a plain dict.

    Raises:
        InvalidDeclaration: If ``options`` is not a non-empty mapping, a key is
            unhashable or blank, two keys share a string form, or the reserved
            ``post`` value is not a mapping.
    """
    if not isinstance(options, Mapping):
        msg = f"Scenario options must be a mapping, got {type(options).__name__}"
        raise InvalidDeclaration(msg)
    if not options:
        msg = "Scenario options must not be empty"
        raise InvalidDeclaration(msg)

    seen: dict[str, Any] = {}
    for key, value in options.items():
        if key is None or not isinstance(key, Hashable) or not str(key).strip():
            msg = f"Invalid scenario key: {key!r}"
            raise InvalidDeclaration(msg)
        # Names are built from str(key), so 1 and "1" would be ambiguous.
        if str(key) in seen:
            msg = f"Scenario keys {seen[str(key)]!r} and {key!r} clash"
            raise InvalidDeclaration(msg)
        seen[str(key)] = key
        if key == POST_KEY and not isinstance(value, Mapping):
            msg = f"The {POST_KEY!r} option must be a mapping, got {type(value).__name__}"
            raise InvalidDeclaration(msg)

    return dict(options)


class ScopeStack:
    """Live scenario scope plus the snapshots needed to restore it.

    Each push merges options over the live scope (inner values win) and each
    pop restores the scope exactly as it was before the matching push.
    """

    def __init__(self) -> None:
        self._scope: dict[Any, Any] = {}
        self._snapshots: list[dict[Any, Any]] = []

    @property
    def current(self) -> dict[Any, Any]:
        """Copy of the live scope."""
        return dict(self._scope)

    @property
    def depth(self) -> int:
        return len(self._snapshots)

    def push(self, options: Mapping[Any, Any]) -> None:
        merged = validate_options(options)
        self._snapshots.append(dict(self._scope))
        self._scope.update(merged)
        logger.debug("Entered scenario %r (depth %d)", merged, self.depth)

    def pop(self) -> None:
        if not self._snapshots:
            msg = "Scenario scope popped more times than it was pushed"
            raise InvalidDeclaration(msg)
        self._scope = self._snapshots.pop()
        logger.debug("Left scenario (depth %d)", self.depth)

    @contextmanager
    def scoped(self, options: Mapping[Any, Any]) -> Iterator[dict[Any, Any]]:
        """Push ``options`` for the duration of the block."""
        self.push(options)
        try:
            yield self.current
        finally:
            self.pop()
