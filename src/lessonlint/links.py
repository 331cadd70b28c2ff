"""Internal link checks between curriculum documents."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from . import markdown
from .config import LintConfig
from .documents import is_unsafe_path
from .integrity import ItemIndex
from .models import DiagnosticSink, Item
from .source import ReadFn


def _link_pattern(config: LintConfig, *, allow_empty_label: bool = False) -> re.Pattern[str]:
    prefix = re.escape(config.content_prefix)
    label = r"[^\]]*" if allow_empty_label else r"[^\]]+"
    return re.compile(rf"\[({label})\]\(((?:\./|{prefix})[^)\s]+?\.md)\)")


def _raw_path_pattern(config: LintConfig) -> re.Pattern[str]:
    prefix = re.escape(config.content_prefix)
    return re.compile(rf"(?:{prefix}|\./)[^\s)]+?\.md")


def canonical_path(target: str, config: LintConfig) -> str:
    """Resolve a ``./x.md`` or prefixed link target to a content path."""
    if target.startswith("./"):
        return config.content_prefix + target[2:]
    return target


def relative_target(canonical: str) -> str:
    return f"./{PurePosixPath(canonical).name}"


def check_links(item: Item, text: str, index: ItemIndex, sink: DiagnosticSink, config: LintConfig) -> None:
    """Validate internal links and raw path mentions in one document."""
    ref = item.ref
    link_pattern = _link_pattern(config)
    raw_pattern = _raw_path_pattern(config)
    strip_pattern = _link_pattern(config, allow_empty_label=True)

    for line_number, line in markdown.iter_prose_lines(text):
        for match in link_pattern.finditer(line):
            label = match.group(1).strip()
            target = match.group(2).strip()
            canonical = canonical_path(target, config)
            # Untitled lessons cannot be linked by title, so they count as unknown targets.
            expected = index.title_for_path(canonical)
            if not expected:
                sink.error(
                    f"{ref}: link target `{target}` does not match any lesson path in the index "
                    f"(expected a `./NN-*.md` lesson link) at line {line_number}."
                )
                continue
            recommended = relative_target(canonical)
            if label != expected:
                sink.warning(
                    f"{ref}: link text should match sidebar title ([{expected}]({recommended})) at line {line_number}."
                )
            if target.startswith(config.content_prefix):
                sink.error(
                    f"{ref}: use relative links like `{recommended}` instead of `{target}` at line {line_number}."
                )

        stripped = strip_pattern.sub("", line)
        raw = raw_pattern.search(stripped)
        if raw:
            sink.warning(
                f"{ref}: avoid showing raw lesson path `{raw.group(0)}` at line {line_number} (use a title link)."
            )


def validate_links(
    items: tuple[Item, ...], read_fn: ReadFn, index: ItemIndex, sink: DiagnosticSink, config: LintConfig
) -> None:
    for item in items:
        path = item.path
        if path is None or not path.strip() or is_unsafe_path(path):
            continue
        with sink.isolated(item.ref):
            try:
                text = read_fn(path)
            except (OSError, UnicodeDecodeError):
                # Reported by the document checks.
                continue
            check_links(item, text, index, sink, config)
