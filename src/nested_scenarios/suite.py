"""Scenario suites: nested scenario declarations and the tests they generate.

A :class:`ScenarioSuite` is built once, at import time of a test module::

    cars = ScenarioSuite()

    with cars.scenario(latest_models=True):
        with cars.scenario(sedan=True):

            @cars.add_test("unlogged in view of latest sedan cars")
            def _(test):
                test.assertRedirects(test.client.get("/cars"), "/login")

            with cars.scenario(viewer="buyer"):

                @cars.add_test
                def _(test):
                    test.assertEqual(test.client.get("/cars").status_code, 200)

which generates ``test_unlogged_in_view_of_latest_sedan_cars_latest_models_true_and_sedan_true``
and ``test_latest_models_true_and_sedan_true_and_viewer_buyer``. The generated
tests are attached to a host class with
:func:`nested_scenarios.testcase.scenario_tests` or parametrized with
:func:`nested_scenarios.pytest_support.parametrize_scenarios`.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nested_scenarios.config import DEFAULT_CONFIG, ScenarioConfig, load_config
from nested_scenarios.context import ScenarioContext, scenario_context_scope
from nested_scenarios.errors import InvalidDeclaration
from nested_scenarios.hooks import NO_HOOKS
from nested_scenarios.naming import canonical_name, host_test_name
from nested_scenarios.registry import ScenarioRegistry, TestRecord, copy_scope
from nested_scenarios.scope import ScopeStack, validate_options


logger = logging.getLogger(__name__)

TestBody = Callable[..., Any]


def _takes_host(body: TestBody) -> bool:
    """Whether ``body`` expects the host test instance as its only argument."""
    try:
        signature = inspect.signature(body)
    except (TypeError, ValueError):
        return False

    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    required = [
        param
        for param in signature.parameters.values()
        if param.kind in positional and param.default is inspect.Parameter.empty
    ]
    if len(required) > 1:
        msg = f"Test body {body!r} must take no arguments or only the test instance"
        raise InvalidDeclaration(msg)
    return len(required) == 1


def _merge_options(options: Any, kwargs: dict[str, Any]) -> Any:
    if not kwargs:
        return options
    if options is None:
        return kwargs
    if not isinstance(options, Mapping):
        validate_options(options)
    shared = sorted(str(key) for key in options if key in kwargs)
    if shared:
        msg = f"Scenario option(s) given twice in one declaration: {', '.join(shared)}"
        raise InvalidDeclaration(msg)
    return {**options, **kwargs}


@dataclass(frozen=True)
class GeneratedTest:
    """A registered scenario test, runnable against any host."""

    __test__ = False

    name: str
    body: TestBody = field(repr=False)
    suite: ScenarioSuite = field(repr=False, compare=False)
    passes_host: bool = False

    @property
    def test_name(self) -> str:
        return host_test_name(self.name, self.suite.config.test_prefix)

    @property
    def record(self) -> TestRecord:
        return self.suite.registry.get(self.name)

    def run(self, host: Any = None) -> None:
        """Run pre-processing, the body and post-processing against ``host``.

        The record is looked up by name so the scope is always the one that was
        active when the test was declared. Failures from the hooks or the body
        propagate unchanged. Post-processing still runs after a failing body
        unless ``post_process_on_failure`` is disabled.
        """
        record = self.record
        hooks = host if host is not None else NO_HOOKS
        pre_process = getattr(hooks, "scenario_pre_processing", None)
        post_process = getattr(hooks, "scenario_post_processing", None)

        pre_scope = record.pre_scope()
        post_options = record.post_options()
        ctx = ScenarioContext(
            name=record.name,
            test_name=record.test_name,
            scope=pre_scope,
            post=post_options,
        )

        if pre_process is not None:
            pre_process(copy_scope(pre_scope))

        if self.suite.config.post_process_on_failure:
            try:
                self._run_body(host, ctx)
            finally:
                if post_process is not None:
                    post_process(post_options)
        else:
            self._run_body(host, ctx)
            if post_process is not None:
                post_process(post_options)

    def _run_body(self, host: Any, ctx: ScenarioContext) -> None:
        with scenario_context_scope(ctx):
            if self.passes_host:
                self.body(host)
            else:
                self.body()


class ScenarioSuite:
    """Builds scenario tests from nested scenario declarations.

    The suite owns the scope stack and the record registry so that separate
    suites never see each other's scenarios. Declarations are serialised with
    a re-entrant lock; a nested declaration block holds it until it exits.
    """

    def __init__(self, config: ScenarioConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.registry = ScenarioRegistry(warn_on_collision=self.config.warn_on_collision)
        self._stack = ScopeStack()
        self._tests: dict[str, GeneratedTest] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_pyproject(cls, start: Path | None = None) -> ScenarioSuite:
        """Create a suite configured from the nearest pyproject.toml."""
        return cls(load_config(start))

    @property
    def scope(self) -> dict[Any, Any]:
        """Scenario options in effect at this point of the declaration."""
        return self._stack.current

    @property
    def tests(self) -> list[GeneratedTest]:
        return list(self._tests.values())

    def names(self) -> list[str]:
        return list(self._tests)

    def get(self, name: str) -> GeneratedTest:
        """Look up a generated test by canonical or host-facing name."""
        if name in self._tests:
            return self._tests[name]
        prefix = self.config.test_prefix
        if prefix and name.startswith(prefix) and name[len(prefix):] in self._tests:
            return self._tests[name[len(prefix):]]
        msg = f"No scenario test named {name!r}"
        raise KeyError(msg)

    @contextmanager
    def scenario(
        self, options: Mapping[Any, Any] | None = None, /, **kwargs: Any
    ) -> Iterator[dict[Any, Any]]:
        """Declare a nested scenario for the duration of the ``with`` block.

        Options may be given as a mapping, as keyword arguments, or both, but
        a key may appear only once per declaration. Yields the merged scope.
        """
        merged = _merge_options(options, kwargs)
        with self._lock, self._stack.scoped(merged) as scope:
            yield scope

    def declare_scenario(self, options: Mapping[Any, Any], body: Callable[[], Any]) -> None:
        """Merge ``options`` into the scope, call ``body`` and restore the scope."""
        with self.scenario(options):
            body()

    def register_test(self, description: str | None, body: TestBody) -> GeneratedTest:
        """Register ``body`` as a test under the current scope.

        Raises:
            InvalidDeclaration: If the body is not callable, takes unexpected
                arguments, or the test would have an empty name.
        """
        if not callable(body):
            msg = f"Test body must be callable, got {type(body).__name__}"
            raise InvalidDeclaration(msg)

        with self._lock:
            scope = self._stack.current
            name = canonical_name(description, scope)
            record = TestRecord(
                name=name,
                description=description or "",
                scope=copy_scope(scope),
                prefix=self.config.test_prefix,
            )
            test = GeneratedTest(name=name, body=body, suite=self, passes_host=_takes_host(body))
            self.registry.add(record)
            self._tests[name] = test

        logger.debug("Registered scenario test %s", record.test_name)
        return test

    def add_test(self, description: str | TestBody = "") -> Any:
        """Decorator registering the decorated function as a scenario test.

        Usable with or without a description::

            @suite.add_test("shows the catalogue")
            def _(test): ...

            @suite.add_test
            def _(test): ...
        """
        if callable(description):
            self.register_test("", description)
            return description

        def decorator(body: TestBody) -> TestBody:
            self.register_test(description, body)
            return body

        return decorator

    def __iter__(self) -> Iterator[GeneratedTest]:
        return iter(self.tests)

    def __len__(self) -> int:
        return len(self._tests)

    def __repr__(self) -> str:
        return f"<ScenarioSuite tests={len(self)} depth={self._stack.depth}>"
