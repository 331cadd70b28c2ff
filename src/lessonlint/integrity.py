"""Duplicate identity and dangling prerequisite checks."""

from __future__ import annotations

from dataclasses import dataclass

from .models import DiagnosticSink, Item


@dataclass(frozen=True)
class ItemIndex:
    """Lookups over the flattened item list shared by later validators."""

    by_id: dict[str, list[Item]]
    by_path: dict[str, list[Item]]

    @property
    def ids(self) -> set[str]:
        return set(self.by_id)

    def first(self, item_id: str) -> Item | None:
        """Return the first item carrying ``item_id`` in document order."""
        group = self.by_id.get(item_id)
        return group[0] if group else None

    def title_for_path(self, path: str) -> str | None:
        group = self.by_path.get(path)
        return group[0].title if group else None


def build_index(items: tuple[Item, ...]) -> ItemIndex:
    """Group items by id and by path, skipping items missing either."""
    by_id: dict[str, list[Item]] = {}
    by_path: dict[str, list[Item]] = {}
    for item in items:
        if item.id is not None and item.id.strip():
            by_id.setdefault(item.id, []).append(item)
        if item.path is not None and item.path.strip():
            by_path.setdefault(item.path, []).append(item)
    return ItemIndex(by_id=by_id, by_path=by_path)


def validate_integrity(items: tuple[Item, ...], sink: DiagnosticSink) -> ItemIndex:
    """Report duplicate ids, duplicate paths, and unknown prerequisites."""
    index = build_index(items)

    for item_id, group in index.by_id.items():
        if len(group) > 1:
            sink.error(f"Duplicate lesson id `{item_id}`: {', '.join(item.ref for item in group)}")

    for path, group in index.by_path.items():
        if len(group) > 1:
            sink.error(
                f"Lesson path `{path}` is referenced by multiple items: "
                f"{', '.join(item.short_ref for item in group)}"
            )

    known = index.ids
    for item in items:
        if item.prerequisites is None:
            continue
        for prerequisite in item.prerequisites:
            if prerequisite == item.id:
                sink.error(f"{item.ref}: `prerequisites` must not contain itself.")
            elif prerequisite not in known:
                sink.error(f"{item.ref}: `prerequisites` references unknown id `{prerequisite}`.")
    return index
