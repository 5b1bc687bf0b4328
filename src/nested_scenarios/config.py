"""Project configuration read from ``[tool.nested_scenarios]`` in pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"
TOOL_SECTION = "nested_scenarios"


class ScenarioConfig(BaseModel):
    """Settings that shape generated scenario tests.

    Attributes
    ----------
    test_prefix:
        Prefix joined to the canonical name to form the host test name.
    post_process_on_failure:
        Run post-processing even when the test body raises.
    warn_on_collision:
        Log a warning when two declarations produce the same name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    test_prefix: str = "test_"
    post_process_on_failure: bool = True
    warn_on_collision: bool = True


DEFAULT_CONFIG = ScenarioConfig()


def find_project_root(start: Path | None = None) -> Path | None:
    """Return the closest directory at or above ``start`` holding a pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        if (directory / PYPROJECT).is_file():
            return directory
    return None


def _read_section(pyproject: Path) -> dict[str, Any]:
    with pyproject.open("rb") as fh:
        data = tomllib.load(fh)
    section = data.get("tool", {}).get(TOOL_SECTION, {})
    if not isinstance(section, dict):
        msg = f"[tool.{TOOL_SECTION}] in {pyproject} must be a table"
        raise ValueError(msg)
    return section


def load_config(start: Path | None = None) -> ScenarioConfig:
    """Load configuration from the nearest pyproject.toml.

    Missing files or sections fall back to :data:`DEFAULT_CONFIG`. Unknown or
    mistyped keys raise :class:`pydantic.ValidationError`.
    """
    root = find_project_root(start)
    if root is None:
        return DEFAULT_CONFIG

    section = _read_section(root / PYPROJECT)
    if not section:
        return DEFAULT_CONFIG

    logger.debug("Loaded [tool.%s] from %s", TOOL_SECTION, root / PYPROJECT)
    return ScenarioConfig.model_validate(section)
