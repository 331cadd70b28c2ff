"""Line-based Markdown scanning with code fence tracking."""

from __future__ import annotations

import re
from collections.abc import Iterator

FENCE_MARKER = "```"
H1_PATTERN = re.compile(r"^#\s+(.+?)\s*$")


def split_lines(markdown: str) -> list[str]:
    return re.split(r"\r?\n", markdown)


def is_fence(line: str) -> bool:
    return line.startswith(FENCE_MARKER)


def iter_prose_lines(markdown: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for lines outside fenced code.

    Fence markers toggle the state whatever follows them and are never
    yielded. Line numbers are 1-based.
    """
    in_fence = False
    for number, line in enumerate(split_lines(markdown), start=1):
        if is_fence(line):
            in_fence = not in_fence
            continue
        if not in_fence:
            yield number, line


def first_h1(markdown: str) -> str | None:
    """Return the text of the first top-level heading outside fences."""
    for _, line in iter_prose_lines(markdown):
        match = H1_PATTERN.match(line)
        if match:
            return match.group(1).strip()
    return None


def count_h1(markdown: str) -> int:
    return sum(1 for _, line in iter_prose_lines(markdown) if H1_PATTERN.match(line))


def first_non_blank_line(markdown: str) -> str | None:
    for line in split_lines(markdown):
        if line.strip():
            return line
    return None


def fences_without_language(markdown: str) -> list[int]:
    """Return line numbers of opening fences that declare no language."""
    issues: list[int] = []
    in_fence = False
    for number, line in enumerate(split_lines(markdown), start=1):
        if not is_fence(line):
            continue
        if not in_fence and not line[len(FENCE_MARKER) :].strip():
            issues.append(number)
        in_fence = not in_fence
    return issues


def has_unclosed_fence(markdown: str) -> bool:
    markers = sum(1 for line in split_lines(markdown) if is_fence(line))
    return markers % 2 == 1


def _h2_pattern(heading: str) -> re.Pattern[str]:
    return re.compile(rf"^##\s+{re.escape(heading)}\s*$")


def has_h2(markdown: str, heading: str) -> bool:
    pattern = _h2_pattern(heading)
    return any(pattern.match(line) for line in split_lines(markdown))


def extract_h2_section(markdown: str, heading: str) -> str | None:
    """Return the section under ``## heading`` up to the next H2, or ``None``."""
    lines = split_lines(markdown)
    pattern = _h2_pattern(heading)
    start = next((index for index, line in enumerate(lines) if pattern.match(line)), None)
    if start is None:
        return None
    end = next((index for index in range(start + 1, len(lines)) if lines[index].startswith("## ")), len(lines))
    return "\n".join(lines[start:end])
