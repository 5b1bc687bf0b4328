"""Locate scenario suites in modules and files for tooling."""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType

from nested_scenarios.suite import ScenarioSuite
from nested_scenarios.testcase import SUITE_ATTRIBUTE


def _load_file(path: Path) -> ModuleType:
    module_name = f"_nested_scenarios_{path.stem}_{abs(hash(path.resolve()))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import {path}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    # Sibling imports inside test directories resolve like they would under pytest.
    parent = str(path.resolve().parent)
    added = parent not in sys.path
    if added:
        sys.path.insert(0, parent)
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    finally:
        if added:
            sys.path.remove(parent)
    return module


def load_module(target: str | Path) -> ModuleType:
    """Import ``target`` given as a ``.py`` file path or a dotted module name."""
    path = Path(target)
    if path.suffix == ".py" or path.is_file():
        if not path.is_file():
            msg = f"No such file: {path}"
            raise FileNotFoundError(msg)
        return _load_file(path)
    return importlib.import_module(str(target))


def find_suites(module: ModuleType) -> list[tuple[str, ScenarioSuite]]:
    """Return ``(label, suite)`` pairs defined in ``module``.

    Module-level suites are labelled by their variable name; suites attached to
    a class with ``scenario_tests`` are labelled by the class name. A suite
    reachable both ways is reported once, under the class.
    """
    found: dict[int, tuple[str, ScenarioSuite]] = {}

    for name, obj in inspect.getmembers(module):
        if isinstance(obj, ScenarioSuite):
            found.setdefault(id(obj), (name, obj))

    for name, obj in inspect.getmembers(module, inspect.isclass):
        suite = obj.__dict__.get(SUITE_ATTRIBUTE)
        if isinstance(suite, ScenarioSuite) and obj.__module__ == module.__name__:
            found[id(suite)] = (name, suite)

    return sorted(found.values(), key=lambda pair: pair[0])
