"""Per-document structural checks."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath, PureWindowsPath

from . import markdown
from .config import LintConfig
from .models import DiagnosticSink, Item
from .source import ReadFn

logger = logging.getLogger(__name__)


def is_unsafe_path(path: str) -> bool:
    """Return True for absolute paths or paths with parent-directory segments."""
    if PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute() or path.startswith("\\"):
        return True
    return ".." in path.replace("\\", "/").split("/")


def branch_name(path: str, config: LintConfig) -> str:
    """Branch name students are told to use for an assignment document."""
    name = PurePosixPath(path.replace("\\", "/")).name
    if name.endswith(".md"):
        name = name[: -len(".md")]
    return f"{config.branch_prefix}{name}"


def _check_sections(item: Item, text: str, sink: DiagnosticSink, config: LintConfig) -> None:
    ref = item.ref
    if item.has_assignment is True:
        section = markdown.extract_h2_section(text, config.submission_heading)
        if section is None:
            sink.error(f"{ref}: missing required section `## {config.submission_heading}`.")
        else:
            expected = branch_name(item.path or "", config)
            if expected not in section:
                sink.error(f"{ref}: `## {config.submission_heading}` must include branch name `{expected}`.")
    elif item.has_assignment is False:
        if markdown.extract_h2_section(text, config.completion_heading) is None:
            sink.error(f"{ref}: missing required section `## {config.completion_heading}`.")


def check_document(item: Item, read_fn: ReadFn, sink: DiagnosticSink, config: LintConfig) -> None:
    """Validate the document referenced by one item."""
    path = item.path
    if path is None or not path.strip():
        return
    ref = item.ref

    if is_unsafe_path(path):
        sink.error(f"{ref}: invalid relative path `{path}`.")
        return
    if not path.startswith(config.content_prefix) or not path.endswith(".md"):
        sink.warning(f"{ref}: expected path under `{config.content_prefix}` with `.md` extension.")

    try:
        text = read_fn(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read %s: %s", path, exc)
        sink.error(f"{ref}: referenced file not found.")
        return

    heading = markdown.first_h1(text)
    if heading is None:
        sink.error(f"{ref}: missing a top-level H1 (# ...) in Markdown.")
        return
    if item.title and item.title.strip() and heading != item.title:
        sink.error(f'{ref}: title mismatch (index: "{item.title}" vs H1: "{heading}").')

    first_line = markdown.first_non_blank_line(text)
    if first_line is None or not first_line.startswith("# "):
        sink.warning(f"{ref}: expected the first non-empty line to be a top-level H1.")
    if markdown.count_h1(text) != 1:
        sink.warning(f"{ref}: expected exactly one top-level H1 in Markdown.")

    for line_number in markdown.fences_without_language(text):
        sink.warning(f"{ref}: code fence missing language tag at line {line_number}.")
    if markdown.has_unclosed_fence(text):
        sink.warning(f"{ref}: code fence is not closed (unmatched ```).")

    _check_sections(item, text, sink, config)

    for expected_heading in config.expected_headings:
        if not markdown.has_h2(text, expected_heading):
            sink.warning(f"{ref}: missing heading `## {expected_heading}`.")


def validate_documents(
    items: tuple[Item, ...], read_fn: ReadFn, sink: DiagnosticSink, config: LintConfig
) -> None:
    for item in items:
        with sink.isolated(item.ref):
            check_document(item, read_fn, sink, config)
