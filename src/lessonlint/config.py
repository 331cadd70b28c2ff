"""Validation settings and their TOML overrides."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

INDEX_FILE = "index.json"
CONTENT_DIR = "chapters"
SUBMISSION_HEADING = "課題提出"
COMPLETION_HEADING = "完了記録"
EXPECTED_HEADINGS = (
    "前提",
    "この章でできるようになること",
    "AIに聞いてみよう",
    "演習",
    "ふりかえり",
    "次の章",
)
DIFFICULTIES = ("beginner", "intermediate", "advanced")
ITEM_TYPES = ("guide", "lesson", "hands-on", "project", "reference")
BRANCH_PREFIX = "feature/"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


@dataclass(frozen=True)
class LintConfig:
    """Settings shared by every validator in one run."""

    index_file: str = INDEX_FILE
    content_dir: str = CONTENT_DIR
    submission_heading: str = SUBMISSION_HEADING
    completion_heading: str = COMPLETION_HEADING
    expected_headings: tuple[str, ...] = EXPECTED_HEADINGS
    difficulties: tuple[str, ...] = DIFFICULTIES
    item_types: tuple[str, ...] = ITEM_TYPES
    branch_prefix: str = BRANCH_PREFIX

    @property
    def content_prefix(self) -> str:
        return self.content_dir.rstrip("/") + "/"


_LIST_FIELDS = {"expected_headings", "difficulties", "item_types"}


def _apply(config: LintConfig, table: dict[str, Any], source: str) -> LintConfig:
    """Return a copy of ``config`` with values from one TOML table."""
    known = {item.name for item in fields(LintConfig)}
    changes: dict[str, Any] = {}
    for raw_key, value in table.items():
        key = raw_key.replace("-", "_")
        if key not in known:
            raise ConfigError(f"{source}: unknown setting '{raw_key}'.")
        if key in _LIST_FIELDS:
            if not isinstance(value, list) or not all(isinstance(entry, str) and entry.strip() for entry in value):
                raise ConfigError(f"{source}: '{raw_key}' must be a list of non-empty strings.")
            changes[key] = tuple(value)
        else:
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{source}: '{raw_key}' must be a non-empty string.")
            changes[key] = value
    return replace(config, **changes)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc


def _tool_table(data: dict[str, Any]) -> Any:
    tool = data.get("tool")
    if isinstance(tool, dict):
        return tool.get("lessonlint")
    return None


def load_config(root: Path, config_path: Path | None = None) -> LintConfig:
    """Load settings for a curriculum rooted at ``root``.

    An explicit ``config_path`` may hold settings at top level or under
    ``[tool.lessonlint]``. Without one, ``pyproject.toml`` in ``root`` is
    consulted when present.
    """
    if config_path is not None:
        source = config_path
        data = _read_toml(config_path)
        table = _tool_table(data)
        if table is None and "tool" not in data:
            table = data
    else:
        source = root / "pyproject.toml"
        if not source.is_file():
            return LintConfig()
        table = _tool_table(_read_toml(source))

    if table is None:
        return LintConfig()
    if not isinstance(table, dict):
        raise ConfigError(f"{source}: [tool.lessonlint] must be a table.")
    return _apply(LintConfig(), table, str(source))
