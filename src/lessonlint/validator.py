"""Run every curriculum check in order against one shared sink."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import LintConfig
from .documents import validate_documents
from .graph import validate_graph
from .index_loader import IndexLoadError, load_curriculum, parse_index
from .integrity import validate_integrity
from .links import validate_links
from .models import DiagnosticSink
from .orphans import validate_orphans
from .source import ContentRoot, ListFn, ReadFn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation run."""

    lesson_count: int
    sink: DiagnosticSink

    @property
    def ok(self) -> bool:
        return self.sink.ok


def validate_text(index_text: str, read_fn: ReadFn, list_fn: ListFn, config: LintConfig) -> ValidationResult:
    """Validate an index and the documents it references.

    Raises ``IndexLoadError`` before any diagnostics are collected when the
    index cannot be parsed or has the wrong top-level shape.
    """
    raw = parse_index(index_text)
    sink = DiagnosticSink()
    curriculum = load_curriculum(raw, sink, config)
    items = curriculum.items

    index = validate_integrity(items, sink)
    validate_graph(items, index, sink)
    validate_documents(items, read_fn, sink, config)
    validate_links(items, read_fn, index, sink, config)
    validate_orphans(items, list_fn, sink, config)

    logger.debug("Validated %d items: %d errors, %d warnings", len(items), len(sink.errors), len(sink.warnings))
    return ValidationResult(lesson_count=len(items), sink=sink)


def validate(root: Path, config: LintConfig | None = None) -> ValidationResult:
    """Validate the curriculum checked out at ``root``."""
    config = config or LintConfig()
    source = ContentRoot(root)
    try:
        index_text = source.read_text(config.index_file)
    except (OSError, UnicodeDecodeError) as exc:
        raise IndexLoadError(f"Failed to read {config.index_file}: {exc}") from exc
    return validate_text(index_text, source.read_text, source.list_markdown, config)
