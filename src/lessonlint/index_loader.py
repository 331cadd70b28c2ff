"""Parse the curriculum index and validate the shape of units and items."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from .config import LintConfig
from .models import MISSING_UNIT_ID, Curriculum, DiagnosticSink, Item, Unit

logger = logging.getLogger(__name__)

KEBAB_CASE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class IndexLoadError(ValueError):
    """Raised when the index cannot be used at all."""


def is_kebab_case(value: str) -> bool:
    return KEBAB_CASE.fullmatch(value) is not None


def parse_index(text: str) -> dict[str, Any]:
    """Decode index text and check the top-level shape."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IndexLoadError(f"Failed to parse index: {exc}") from exc
    if not isinstance(raw, dict):
        raise IndexLoadError("Index must be a JSON object.")
    if not isinstance(raw.get("chapters"), list):
        raise IndexLoadError("Index must contain a top-level `chapters` array.")
    return raw


def _string(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return value if isinstance(value, str) else None


def _number(raw: dict[str, Any], key: str) -> float | None:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # JSON integers may exceed float range; only floats can be inf or nan.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _boolean(raw: dict[str, Any], key: str) -> bool | None:
    value = raw.get(key)
    return value if isinstance(value, bool) else None


def _string_list(raw: dict[str, Any], key: str) -> tuple[str, ...] | None:
    value = raw.get(key)
    if not isinstance(value, list) or not all(isinstance(entry, str) for entry in value):
        return None
    return tuple(value)


def _item_from_dict(unit_id: str, sequence: int, raw: Any) -> Item:
    """Decode one item; wrong-typed or missing fields become ``None``."""
    if not isinstance(raw, dict):
        raw = {}
    return Item(
        unit_id=unit_id,
        sequence=sequence,
        id=_string(raw, "id"),
        title=_string(raw, "title"),
        path=_string(raw, "path"),
        estimated_minutes=_number(raw, "estimatedMinutes"),
        practice_minutes=_number(raw, "practiceMinutes"),
        has_assignment=_boolean(raw, "hasAssignment"),
        difficulty=_string(raw, "difficulty"),
        type=_string(raw, "type"),
        tags=_string_list(raw, "tags"),
        prerequisites=_string_list(raw, "prerequisites"),
    )


def _non_empty(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def _has_duplicates(values: tuple[str, ...]) -> bool:
    normalized = [value.strip() for value in values]
    return len(set(normalized)) != len(normalized)


def _check_unit(raw: Any, sink: DiagnosticSink) -> Unit:
    """Validate unit-level fields; items are attached by the caller."""
    fields = raw if isinstance(raw, dict) else {}
    unit_id = _string(fields, "id")
    title = _string(fields, "title")
    label = unit_id if _non_empty(unit_id) else MISSING_UNIT_ID
    if not _non_empty(unit_id):
        sink.error(f"Unit {label}: missing a non-empty string `id`.")
    elif not is_kebab_case(unit_id):
        sink.error(f"Unit {label}: unit id must be kebab-case (got `{unit_id}`).")
    if not _non_empty(title):
        sink.error(f"Unit {label}: missing a non-empty string `title`.")
    return Unit(id=unit_id if _non_empty(unit_id) else None, title=title, items=())


def check_item_fields(item: Item, sink: DiagnosticSink, config: LintConfig) -> None:
    """Append one error per violated field constraint of ``item``."""
    ref = item.ref
    if not _non_empty(item.id):
        sink.error(f"{ref}: item is missing a non-empty string `id`.")
    elif not is_kebab_case(item.id):
        sink.error(f"{ref}: lesson id must be kebab-case (got `{item.id}`).")
    if not _non_empty(item.title):
        sink.error(f"{ref}: missing a non-empty string `title`.")
    if not _non_empty(item.path):
        sink.error(f"{ref}: missing a non-empty string `path`.")
    if item.estimated_minutes is None or item.estimated_minutes <= 0:
        sink.error(f"{ref}: missing or invalid `estimatedMinutes` (expected number > 0).")
    if item.has_assignment is None:
        sink.error(f"{ref}: missing or invalid `hasAssignment` (expected boolean).")
    if item.practice_minutes is None or item.practice_minutes < 0:
        sink.error(f"{ref}: missing or invalid `practiceMinutes` (expected number >= 0).")
    if item.type not in config.item_types:
        sink.error(f"{ref}: missing or invalid `type` (expected one of: {', '.join(config.item_types)}).")
    if item.difficulty not in config.difficulties:
        sink.error(
            f"{ref}: missing or invalid `difficulty` (expected one of: {', '.join(config.difficulties)})."
        )

    if item.tags is None or not item.tags or not all(_non_empty(tag) for tag in item.tags):
        sink.error(f"{ref}: missing or invalid `tags` (expected non-empty string[]).")
    elif _has_duplicates(item.tags):
        sink.error(f"{ref}: `tags` contains duplicates.")

    if item.prerequisites is None or not all(_non_empty(entry) for entry in item.prerequisites):
        sink.error(f"{ref}: missing or invalid `prerequisites` (expected string[]).")
    elif _has_duplicates(item.prerequisites):
        sink.error(f"{ref}: `prerequisites` contains duplicates.")


def load_curriculum(raw: dict[str, Any], sink: DiagnosticSink, config: LintConfig) -> Curriculum:
    """Decode units and items from a parsed index, recording schema errors."""
    units: list[Unit] = []
    sequence = 0
    for raw_unit in raw["chapters"]:
        unit = _check_unit(raw_unit, sink)
        raw_items = raw_unit.get("items") if isinstance(raw_unit, dict) else None
        if not isinstance(raw_items, list):
            sink.error(f"Unit {unit.label}: missing or invalid `items` array.")
            units.append(unit)
            continue

        items: list[Item] = []
        for raw_item in raw_items:
            item = _item_from_dict(unit.label, sequence, raw_item)
            sequence += 1
            check_item_fields(item, sink, config)
            items.append(item)
        units.append(Unit(id=unit.id, title=unit.title, items=tuple(items)))

    logger.debug("Loaded %d units with %d items", len(units), sequence)
    return Curriculum(units=tuple(units))
