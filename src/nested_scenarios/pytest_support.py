"""Table-driven pytest integration.

Instead of installing methods on a class, the suite's generated tests become
the parameter table of a single pytest function::

    @parametrize_scenarios(cars)
    def test_cars(scenario_test, hooks):
        scenario_test.run(hooks)

Each case is reported as ``test_cars[<canonical name>]`` so ``-k`` filters
written against the canonical names keep working.
"""

from __future__ import annotations

from typing import Any

import pytest

from nested_scenarios.suite import ScenarioSuite


DEFAULT_ARGNAME = "scenario_test"


def parametrize_scenarios(suite: ScenarioSuite, argname: str = DEFAULT_ARGNAME) -> Any:
    """Return a ``pytest.mark.parametrize`` mark over the suite's tests."""
    tests = suite.tests
    return pytest.mark.parametrize(argname, tests, ids=[test.name for test in tests])
