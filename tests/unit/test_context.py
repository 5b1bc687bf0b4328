import pytest

from nested_scenarios.context import (
    SCENARIO_CONTEXT,
    ScenarioContext,
    current_scenario,
    scenario_context_scope,
)


def test_context_scope_sets_and_resets():
    ctx = ScenarioContext(name="viewer_buyer", test_name="test_viewer_buyer", scope={"viewer": "buyer"})
    assert SCENARIO_CONTEXT.get() is None

    with scenario_context_scope(ctx):
        assert current_scenario() is ctx

    assert SCENARIO_CONTEXT.get() is None


def test_context_reset_after_exception():
    ctx = ScenarioContext(name="a_1", test_name="test_a_1")
    with pytest.raises(RuntimeError):
        with scenario_context_scope(ctx):
            raise RuntimeError
    with pytest.raises(LookupError, match="No scenario test is running"):
        current_scenario()


def test_nested_contexts_restore_outer():
    outer = ScenarioContext(name="outer", test_name="test_outer")
    inner = ScenarioContext(name="inner", test_name="test_inner")
    with scenario_context_scope(outer):
        with scenario_context_scope(inner):
            assert current_scenario() is inner
        assert current_scenario() is outer
