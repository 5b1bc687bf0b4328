"""Tests for nested_scenarios.registry module."""

import logging

import pytest

from nested_scenarios.errors import UnknownScenario
from nested_scenarios.registry import ScenarioRegistry, TestRecord, copy_scope


def test_record_splits_post_options():
    record = TestRecord(name="post_cleanup_true_and_role_admin", scope={"role": "admin", "post": {"cleanup": True}})
    assert record.pre_scope() == {"role": "admin"}
    assert record.post_options() == {"cleanup": True}
    # The stored scope keeps the post options.
    assert record.scope["post"] == {"cleanup": True}


def test_record_without_post_gives_empty_post_options():
    record = TestRecord(name="viewer_buyer", scope={"viewer": "buyer"})
    assert record.post_options() == {}
    assert record.test_name == "test_viewer_buyer"


def test_record_views_are_copies():
    record = TestRecord(name="a_1", scope={"a": 1, "post": {"b": [1]}})
    record.pre_scope()["a"] = 2
    record.post_options()["b"].append(2)
    assert record.scope == {"a": 1, "post": {"b": [1]}}


def test_copy_scope_copies_containers_and_shares_leaves():
    fixture = object()
    original = {"user": fixture, "post": {"ids": [1, 2]}}
    copied = copy_scope(original)
    assert copied == original
    assert copied["post"] is not original["post"]
    assert copied["post"]["ids"] is not original["post"]["ids"]
    assert copied["user"] is fixture


class TestScenarioRegistry:
    """Tests for ScenarioRegistry."""

    def test_add_and_get(self):
        registry = ScenarioRegistry()
        record = TestRecord(name="x_1", scope={"x": 1})
        assert registry.add(record) is False
        assert registry.get("x_1") is record
        assert "x_1" in registry
        assert len(registry) == 1
        assert registry.names() == ["x_1"]

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownScenario, match="x_1"):
            ScenarioRegistry().get("x_1")

    def test_collision_is_last_write_wins_with_warning(self, caplog):
        registry = ScenarioRegistry()
        first = TestRecord(name="x_1", scope={"x": 1}, description="first")
        second = TestRecord(name="x_1", scope={"x": 1}, description="second")

        registry.add(first)
        with caplog.at_level(logging.WARNING, logger="nested_scenarios.registry"):
            replaced = registry.add(second)

        assert replaced is True
        assert registry.get("x_1") is second
        assert len(registry) == 1
        assert "test_x_1" in caplog.text
        assert "declared more than once" in caplog.text

    def test_collision_warning_can_be_silenced(self, caplog):
        registry = ScenarioRegistry(warn_on_collision=False)
        registry.add(TestRecord(name="x_1"))
        with caplog.at_level(logging.WARNING, logger="nested_scenarios.registry"):
            registry.add(TestRecord(name="x_1"))
        assert caplog.records == []

    def test_clear(self):
        registry = ScenarioRegistry()
        registry.add(TestRecord(name="x_1"))
        registry.clear()
        assert len(registry) == 0
        assert list(registry) == []
