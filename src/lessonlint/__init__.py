"""Consistency checks for a curriculum index and its Markdown lessons."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

__all__ = ["__version__"]


def _checkout_version() -> str | None:
    """Version declared by the source checkout this package is imported from, if any."""
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        with pyproject.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != "lessonlint":
        return None
    return project.get("version")


def _installed_version() -> str:
    try:
        return version("lessonlint")
    except PackageNotFoundError:
        return "0+unknown"


__version__ = _checkout_version() or _installed_version()
