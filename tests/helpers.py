"""Builders for curriculum fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from lessonlint.config import COMPLETION_HEADING, EXPECTED_HEADINGS, SUBMISSION_HEADING


def item_payload(item_id: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": item_id,
        "title": f"Title {item_id}",
        "path": f"chapters/{item_id}.md",
        "estimatedMinutes": 30,
        "practiceMinutes": 10,
        "hasAssignment": False,
        "difficulty": "beginner",
        "type": "lesson",
        "tags": ["basics"],
        "prerequisites": [],
    }
    payload.update(overrides)
    return payload


def index_payload(*units: tuple[str, list[dict[str, Any]]]) -> dict[str, Any]:
    return {"chapters": [{"id": unit_id, "title": f"Unit {unit_id}", "items": items} for unit_id, items in units]}


def lesson_markdown(title: str, *, branch: str | None = None, body: str = "") -> str:
    """Well-formed lesson; ``branch`` switches it to an assignment lesson."""
    lines = [f"# {title}", ""]
    for heading in EXPECTED_HEADINGS:
        lines += [f"## {heading}", "", "Text.", ""]
    if body:
        lines += [body, ""]
    if branch is not None:
        lines += [f"## {SUBMISSION_HEADING}", "", f"git switch -c {branch}", ""]
    else:
        lines += [f"## {COMPLETION_HEADING}", "", "Done.", ""]
    return "\n".join(lines)


def documents_for(index: dict[str, Any]) -> dict[str, str]:
    """Matching well-formed documents for every item of an index payload."""
    documents: dict[str, str] = {}
    for unit in index["chapters"]:
        for item in unit["items"]:
            branch = None
            if item.get("hasAssignment"):
                branch = "feature/" + Path(item["path"]).stem
            documents[item["path"]] = lesson_markdown(item["title"], branch=branch)
    return documents


def reader(documents: dict[str, str]):
    def read(path: str) -> str:
        try:
            return documents[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    return read


def lister(documents: dict[str, str]):
    def list_dir(directory: str) -> list[str]:
        prefix = directory.rstrip("/") + "/"
        names = [path[len(prefix) :] for path in documents if path.startswith(prefix)]
        if not names:
            raise FileNotFoundError(directory)
        return sorted(name for name in names if "/" not in name)

    return list_dir


def write_curriculum(root: Path, index: dict[str, Any], documents: dict[str, str]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "index.json").write_text(json.dumps(index, ensure_ascii=False), encoding="utf-8")
    for relative, text in documents.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root
