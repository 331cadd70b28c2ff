"""Prerequisite ordering advisories and cycle detection."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from enum import Enum

from .integrity import ItemIndex
from .models import DiagnosticSink, Item

logger = logging.getLogger(__name__)


class _Color(Enum):
    WHITE = 0
    GRAY = 1
    BLACK = 2


def build_graph(index: ItemIndex) -> dict[str, tuple[str, ...]]:
    """Map each known id to the prerequisites of its first declaring item."""
    graph: dict[str, tuple[str, ...]] = {}
    for item_id in index.by_id:
        item = index.first(item_id)
        if item is not None:
            graph[item_id] = tuple(dict.fromkeys(item.prerequisites or ()))
    return graph


def find_cycles(graph: Mapping[str, Sequence[str]]) -> list[list[str]]:
    """Return every cycle met during a depth-first walk of ``graph``.

    Each cycle is the slice of the walk path from the first occurrence of the
    repeated node, closed by that node again. Self-edges and edges to nodes
    outside the graph are ignored. Finished nodes are never revisited.
    """
    color = {node: _Color.WHITE for node in graph}
    cycles: list[list[str]] = []

    for root in graph:
        if color[root] is not _Color.WHITE:
            continue
        path = [root]
        color[root] = _Color.GRAY
        stack: list[Iterator[str]] = [iter(graph[root])]
        while stack:
            node = path[-1]
            for child in stack[-1]:
                if child == node or child not in color:
                    continue
                state = color[child]
                if state is _Color.GRAY:
                    start = path.index(child)
                    cycles.append(path[start:] + [child])
                elif state is _Color.WHITE:
                    color[child] = _Color.GRAY
                    path.append(child)
                    stack.append(iter(graph[child]))
                    break
            else:
                stack.pop()
                path.pop()
                color[node] = _Color.BLACK
    return cycles


def check_ordering(items: tuple[Item, ...], index: ItemIndex, sink: DiagnosticSink) -> None:
    """Warn when a prerequisite is declared after the item needing it."""
    for item in items:
        if item.prerequisites is None or not item.id:
            continue
        for prerequisite in item.prerequisites:
            target = index.first(prerequisite)
            if target is None or prerequisite == item.id:
                continue
            if target.sequence > item.sequence:
                sink.warning(f"{item.ref}: prerequisite `{prerequisite}` appears after this lesson in the index.")


def validate_graph(items: tuple[Item, ...], index: ItemIndex, sink: DiagnosticSink) -> None:
    check_ordering(items, index, sink)
    cycles = find_cycles(build_graph(index))
    logger.debug("Found %d prerequisite cycle(s)", len(cycles))
    for cycle in cycles:
        sink.error(f"Prerequisite cycle detected: {' -> '.join(cycle)}")
