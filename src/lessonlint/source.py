"""File access for a curriculum checkout."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

ReadFn = Callable[[str], str]
ListFn = Callable[[str], list[str]]


class ContentRoot:
    """Read documents relative to a curriculum root directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def read_text(self, relative_path: str) -> str:
        """Read one document as UTF-8.

        Paths the operating system rejects outright, such as ones with an
        embedded NUL, raise ``OSError`` like any other unreadable file.
        """
        try:
            return (self.root / relative_path).read_text(encoding="utf-8")
        except UnicodeDecodeError:
            raise
        except ValueError as exc:
            raise OSError(f"Cannot read {relative_path!r}: {exc}") from exc

    def list_markdown(self, directory: str) -> list[str]:
        """List ``*.md`` file names directly inside ``directory``.

        Raises ``FileNotFoundError`` when the directory does not exist.
        """
        base = self.root / directory
        return sorted(entry.name for entry in base.iterdir() if entry.is_file() and entry.name.endswith(".md"))
