"""Error types raised while declaring scenario tests."""


class NestedScenariosError(Exception):
    """Base class for all nested-scenarios errors."""


class InvalidDeclaration(NestedScenariosError, ValueError):
    """Raised when a scenario or test declaration is malformed.

    Declarations run while the suite is being built, before any test
    executes, so these errors abort suite construction instead of silently
    dropping a test.
    """


class UnknownScenario(NestedScenariosError, LookupError):
    """Raised when a generated test cannot find its stored record."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No scenario record registered under {name!r}")
