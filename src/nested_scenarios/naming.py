"""Canonical test names derived from a description and a scenario scope.

The format is part of the public contract since reporters and CI filters
select generated tests by name::

    test_<description>_<key1>_<value1>_and_<key2>_<value2>...

Keys are sorted by their string form and the whole name is lower-cased, so
the same description and scope always give the same name no matter in which
order the options were declared.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from nested_scenarios.errors import InvalidDeclaration


SEPARATOR = "_"
CONJUNCTION = "_and_"
DEFAULT_PREFIX = "test_"

_NON_WORD = re.compile(r"\W+")


def _collapse(text: str) -> str:
    """Replace runs of whitespace and punctuation so the name stays an identifier."""
    return _NON_WORD.sub(SEPARATOR, text).strip(SEPARATOR)


def render_value(value: Any) -> str:
    """Render an option value for use inside a name token.

    Mappings render as their own sorted ``key_value`` tokens so nested data
    such as the ``post`` options does not depend on insertion order.
    """
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda pair: str(pair[0]))
        return SEPARATOR.join(
            f"{_collapse(str(key))}{SEPARATOR}{render_value(inner)}" for key, inner in items
        )
    return _collapse(str(value))


def scope_tokens(scope: Mapping[Any, Any]) -> list[str]:
    """Return the ``key_value`` tokens for ``scope`` sorted by key."""
    items = sorted(scope.items(), key=lambda pair: str(pair[0]))
    return [f"{_collapse(str(key))}{SEPARATOR}{render_value(value)}" for key, value in items]


def canonical_name(description: str | None, scope: Mapping[Any, Any]) -> str:
    """Build the canonical name for a test declared under ``scope``.

    Raises:
        InvalidDeclaration: If both the description and the scope are empty.
    """
    parts = []
    label = _collapse(description or "")
    if label:
        parts.append(label)
    # Parts are joined, not suffixed, so a description-only test has no
    # trailing separator.
    tokens = CONJUNCTION.join(scope_tokens(scope))
    if tokens:
        parts.append(tokens)

    name = SEPARATOR.join(parts).lower()
    if not name:
        msg = "Cannot name a test with a blank description outside of any scenario"
        raise InvalidDeclaration(msg)
    return name


def host_test_name(name: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Host-facing test identifier for a canonical name."""
    return f"{prefix}{name}"
