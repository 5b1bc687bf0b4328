"""Attach generated scenario tests to unittest or pytest test classes."""

from __future__ import annotations

import logging
import unittest
from collections.abc import Callable
from typing import Any, TypeVar

from nested_scenarios.context import ScenarioContext, current_scenario
from nested_scenarios.errors import InvalidDeclaration
from nested_scenarios.hooks import ScenarioHooks
from nested_scenarios.suite import GeneratedTest, ScenarioSuite


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

SUITE_ATTRIBUTE = "__scenario_suite__"


def _make_method(generated: GeneratedTest) -> Callable[[Any], None]:
    def method(self: Any) -> None:
        generated.run(self)

    method.__name__ = generated.test_name
    method.__qualname__ = generated.test_name
    method.__doc__ = generated.record.description or None
    method.__scenario_test__ = generated  # type: ignore[attr-defined]
    return method


def scenario_tests(suite: ScenarioSuite) -> Callable[[T], T]:
    """Class decorator installing one test method per generated test.

    Each method is named ``<prefix><canonical name>`` and runs the test with
    the instance as host, so the class's ``scenario_pre_processing`` and
    ``scenario_post_processing`` wrap every body::

        @scenario_tests(cars)
        class CarsTest(ScenarioTestCase):
            def scenario_pre_processing(self, scope): ...

    Raises:
        InvalidDeclaration: If a generated name clashes with a method the
            class defines or inherits.
    """

    def decorator(cls: T) -> T:
        for generated in suite:
            attribute = generated.test_name
            existing = getattr(cls, attribute, None)
            if existing is not None and not hasattr(existing, "__scenario_test__"):
                msg = f"{cls.__name__}.{attribute} is already defined"
                raise InvalidDeclaration(msg)
            setattr(cls, attribute, _make_method(generated))

        setattr(cls, SUITE_ATTRIBUTE, suite)
        logger.debug("Attached %d scenario tests to %s", len(suite), cls.__name__)
        return cls

    return decorator


class ScenarioTestCase(ScenarioHooks, unittest.TestCase):
    """``unittest.TestCase`` with no-op scenario hooks to override."""

    @property
    def scenario(self) -> ScenarioContext:
        """Context of the scenario test currently running."""
        return current_scenario()
