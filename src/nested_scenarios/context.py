from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True, slots=True)
class ScenarioContext:
    """Scenario data visible to a running generated test.

    Attributes
    ----------
    name
        Canonical name of the running test.
    test_name
        Host-facing name (canonical name with the test prefix).
    scope
        Scenario options in effect, without the reserved ``post`` key.
    post
        Options reserved for post-processing.
    """

    name: str
    test_name: str
    scope: dict[Any, Any] = field(default_factory=dict)
    post: dict[Any, Any] = field(default_factory=dict)


SCENARIO_CONTEXT: ContextVar[ScenarioContext | None] = ContextVar(
    "scenario_context", default=None
)


@contextmanager
def scenario_context_scope(ctx: ScenarioContext) -> Iterator[None]:
    token = SCENARIO_CONTEXT.set(ctx)
    try:
        yield
    finally:
        SCENARIO_CONTEXT.reset(token)


def current_scenario() -> ScenarioContext:
    """Return the context of the generated test currently running.

    Raises:
        LookupError: When called outside a generated test.
    """
    ctx = SCENARIO_CONTEXT.get()
    if ctx is None:
        msg = "No scenario test is running"
        raise LookupError(msg)
    return ctx
