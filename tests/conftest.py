from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = Path(__file__).resolve().parent
for entry in (SRC, TESTS):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))

from helpers import documents_for, index_payload, item_payload, write_curriculum  # noqa: E402


@pytest.fixture
def valid_index() -> dict[str, Any]:
    """Two units, three lessons, one assignment, prerequisites declared in order."""
    return index_payload(
        (
            "getting-started",
            [
                item_payload("01-setup", title="Setup"),
                item_payload("02-git", title="Git Basics", prerequisites=["01-setup"]),
            ],
        ),
        (
            "building",
            [
                item_payload(
                    "03-first-app",
                    title="First App",
                    hasAssignment=True,
                    type="project",
                    prerequisites=["01-setup", "02-git"],
                ),
            ],
        ),
    )


@pytest.fixture
def valid_documents(valid_index: dict[str, Any]) -> dict[str, str]:
    return documents_for(valid_index)


@pytest.fixture
def curriculum_root(tmp_path: Path, valid_index: dict[str, Any], valid_documents: dict[str, str]) -> Path:
    """Well-formed curriculum checkout on disk."""
    return write_curriculum(tmp_path / "curriculum", valid_index, valid_documents)
