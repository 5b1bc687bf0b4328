"""Pre/post-processing extension points for generated scenario tests."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SupportsScenarioHooks(Protocol):
    """Interface a host test class implements to react to scenario options."""

    def scenario_pre_processing(self, scope: dict[Any, Any]) -> None:
        """Called before the test body with the scenario options minus ``post``."""
        ...

    def scenario_post_processing(self, scope: dict[Any, Any]) -> None:
        """Called after the test body with the ``post`` options."""
        ...


class ScenarioHooks:
    """No-op hook implementations for host classes to override.

    Example::

        class CarsTest(ScenarioHooks, unittest.TestCase):
            def scenario_pre_processing(self, scope):
                if "viewer" in scope:
                    self.login(scope["viewer"])
    """

    def scenario_pre_processing(self, scope: dict[Any, Any]) -> None:
        pass

    def scenario_post_processing(self, scope: dict[Any, Any]) -> None:
        pass


NO_HOOKS = ScenarioHooks()
