"""Render validation results for people and tools."""

from __future__ import annotations

import json

from .models import DiagnosticSink


def format_text(lesson_count: int, sink: DiagnosticSink) -> list[str]:
    """Return report lines: counts, then error and warning bullets."""
    errors = sink.errors
    warnings = sink.warnings
    lines = [
        f"Lessons: {lesson_count}",
        f"Errors: {len(errors)}",
        f"Warnings: {len(warnings)}",
    ]
    if errors:
        lines.append("")
        lines.append("Errors:")
        lines.extend(f"- {message}" for message in errors)
    if warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"- {message}" for message in warnings)
    return lines


def format_json(lesson_count: int, sink: DiagnosticSink) -> str:
    payload = {"lessons": lesson_count, "errors": list(sink.errors), "warnings": list(sink.warnings)}
    return json.dumps(payload, ensure_ascii=False, indent=2)
