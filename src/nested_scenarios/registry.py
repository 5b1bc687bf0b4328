"""Stored scenario records keyed by canonical test name."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from nested_scenarios.errors import UnknownScenario
from nested_scenarios.naming import DEFAULT_PREFIX, host_test_name
from nested_scenarios.scope import POST_KEY


logger = logging.getLogger(__name__)


def copy_scope(value: Any) -> Any:
    """Copy the container structure of a scope, sharing leaf values.

    Option values are often fixtures or handles that must keep their
    identity, so only mappings, lists, tuples and sets are rebuilt.
    """
    if isinstance(value, Mapping):
        return {key: copy_scope(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [copy_scope(item) for item in value]
    if isinstance(value, tuple):
        return tuple(copy_scope(item) for item in value)
    if isinstance(value, set):
        return {copy_scope(item) for item in value}
    return value


class TestRecord(BaseModel):
    """Scenario definition captured when a test is registered.

    Attributes
    ----------
    name:
        Canonical name (without the host prefix).
    description:
        Description given at registration, possibly empty.
    scope:
        Scope in effect at registration, including any ``post`` options.
    prefix:
        Prefix used to build the host-facing test name.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str = ""
    scope: dict[Any, Any] = Field(default_factory=dict)
    prefix: str = DEFAULT_PREFIX

    @property
    def test_name(self) -> str:
        return host_test_name(self.name, self.prefix)

    def pre_scope(self) -> dict[Any, Any]:
        """Scope handed to pre-processing and to the test body, minus ``post``."""
        scope = copy_scope(self.scope)
        scope.pop(POST_KEY, None)
        return scope

    def post_options(self) -> dict[Any, Any]:
        """Options handed to post-processing, empty when none were declared."""
        return copy_scope(dict(self.scope.get(POST_KEY) or {}))


class ScenarioRegistry:
    """Process-lifetime map from canonical name to :class:`TestRecord`.

    Registering a name twice replaces the earlier record (last write wins)
    and logs the collision.
    """

    def __init__(self, *, warn_on_collision: bool = True) -> None:
        self.warn_on_collision = warn_on_collision
        self._records: dict[str, TestRecord] = {}

    def add(self, record: TestRecord) -> bool:
        """Store ``record``. Returns True when it replaced an existing one."""
        replaced = record.name in self._records
        if replaced:
            level = logging.WARNING if self.warn_on_collision else logging.DEBUG
            logger.log(
                level,
                "Scenario test %r declared more than once; the later declaration wins",
                record.test_name,
            )
        self._records[record.name] = record
        return replaced

    def get(self, name: str) -> TestRecord:
        try:
            return self._records[name]
        except KeyError:
            raise UnknownScenario(name) from None

    def names(self) -> list[str]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[TestRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)
