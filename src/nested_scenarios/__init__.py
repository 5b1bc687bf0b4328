"""Nested scenarios - generate named tests from nested scenario declarations."""

from .config import ScenarioConfig, load_config
from .context import ScenarioContext, current_scenario
from .errors import InvalidDeclaration, NestedScenariosError, UnknownScenario
from .hooks import ScenarioHooks, SupportsScenarioHooks
from .naming import canonical_name
from .registry import ScenarioRegistry, TestRecord
from .scope import ScopeStack
from .suite import GeneratedTest, ScenarioSuite
from .testcase import ScenarioTestCase, scenario_tests
from .version import __version__


__all__ = [
    # Declaration
    "ScenarioSuite",
    "GeneratedTest",
    "ScopeStack",
    "canonical_name",
    # Records
    "ScenarioRegistry",
    "TestRecord",
    # Hosts
    "ScenarioHooks",
    "SupportsScenarioHooks",
    "ScenarioTestCase",
    "scenario_tests",
    "ScenarioContext",
    "current_scenario",
    # Configuration
    "ScenarioConfig",
    "load_config",
    # Errors
    "NestedScenariosError",
    "InvalidDeclaration",
    "UnknownScenario",
    "__version__",
]
