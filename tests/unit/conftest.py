"""Shared fixtures for unit tests."""

from typing import Any

import pytest

from nested_scenarios import ScenarioHooks, ScenarioSuite


class RecordingHost(ScenarioHooks):
    """Host that records every hook call and body run, in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def scenario_pre_processing(self, scope: dict[Any, Any]) -> None:
        self.calls.append(("pre", scope))

    def scenario_post_processing(self, scope: dict[Any, Any]) -> None:
        self.calls.append(("post", scope))


@pytest.fixture
def suite() -> ScenarioSuite:
    """Provide a fresh suite with default configuration."""
    return ScenarioSuite()


@pytest.fixture
def host() -> RecordingHost:
    """Provide a host that records hook invocations."""
    return RecordingHost()
