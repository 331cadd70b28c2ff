"""Core data model for curriculum validation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

MISSING_UNIT_ID = "(missing-unit-id)"
MISSING_ITEM_ID = "(missing-id)"
MISSING_PATH = "(missing-path)"


class Severity(Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """One validation finding."""

    severity: Severity
    message: str


@dataclass
class DiagnosticSink:
    """Append-only collection of diagnostics for one validation run."""

    _diagnostics: list[Diagnostic] = field(default_factory=list)

    def error(self, message: str) -> None:
        self._diagnostics.append(Diagnostic(Severity.ERROR, message))

    def warning(self, message: str) -> None:
        self._diagnostics.append(Diagnostic(Severity.WARNING, message))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(item.message for item in self._diagnostics if item.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(item.message for item in self._diagnostics if item.severity is Severity.WARNING)

    @property
    def ok(self) -> bool:
        """True when no errors were recorded; warnings never fail a run."""
        return not self.errors

    @contextmanager
    def isolated(self, scope: str) -> Iterator[None]:
        """Record an unexpected failure inside the block as an error for ``scope``."""
        try:
            yield
        except Exception as exc:
            logger.exception("Check failed for %s", scope)
            self.error(f"{scope}: check failed unexpectedly ({type(exc).__name__}: {exc}).")


@dataclass(frozen=True)
class Item:
    """One lesson entry decoded from the index.

    Every metadata field is ``None`` when it was missing or had the wrong type
    in the source document.
    """

    unit_id: str
    sequence: int
    id: str | None
    title: str | None
    path: str | None
    estimated_minutes: float | None
    practice_minutes: float | None
    has_assignment: bool | None
    difficulty: str | None
    type: str | None
    tags: tuple[str, ...] | None
    prerequisites: tuple[str, ...] | None

    @property
    def ref(self) -> str:
        """Human-readable reference used as the diagnostic scope."""
        return f"{self.unit_id}/{self.id or MISSING_ITEM_ID} ({self.path or MISSING_PATH})"

    @property
    def short_ref(self) -> str:
        return f"{self.unit_id}/{self.id or MISSING_ITEM_ID}"


@dataclass(frozen=True)
class Unit:
    """Ordered group of items."""

    id: str | None
    title: str | None
    items: tuple[Item, ...]

    @property
    def label(self) -> str:
        return self.id or MISSING_UNIT_ID


@dataclass(frozen=True)
class Curriculum:
    """Loaded index with items flattened in document order."""

    units: tuple[Unit, ...]

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(item for unit in self.units for item in unit.items)
