"""Detect content files that no index item references."""

from __future__ import annotations

import logging

from .config import LintConfig
from .models import DiagnosticSink, Item
from .source import ListFn

logger = logging.getLogger(__name__)


def validate_orphans(items: tuple[Item, ...], list_fn: ListFn, sink: DiagnosticSink, config: LintConfig) -> None:
    """Warn once about every content file not referenced by an item."""
    try:
        names = list_fn(config.content_dir)
    except OSError as exc:
        logger.debug("Skipping unreferenced file scan: %s", exc)
        return

    present = sorted(config.content_prefix + name for name in names if name.endswith(".md"))
    referenced = {item.path for item in items if item.path}
    extra = [path for path in present if path not in referenced]
    if extra:
        sink.warning(f"Unreferenced lesson files: {', '.join(extra)}")
