"""Indent-tree inference and connector geometry.

A row's subtree is the maximal contiguous run of following rows whose indent
level is strictly greater than its own. The hierarchy is recovered in a single
pass with a stack of open ancestors: a row is closed by the first later row
whose level is less than or equal to its own, and the stack stays strictly
increasing in level from bottom to top.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .config import LayoutConfig, TagPalette
from .models import Connector, LineAnalysis


@dataclass(frozen=True)
class Hierarchy:
    parent_indices: tuple[Optional[int], ...]
    # Exclusive end of each row's subtree
    subtree_ends: tuple[int, ...]

    def children_of(self, index: int) -> list[int]:
        return list(range(index + 1, self.subtree_ends[index]))


@dataclass(frozen=True)
class ConnectorSpan:
    height: float
    offset: float

    @property
    def visible(self) -> bool:
        return self.height > 0


EMPTY_SPAN = ConnectorSpan(height=0.0, offset=0.0)


def build_hierarchy(indent_levels: Sequence[int]) -> Hierarchy:
    count = len(indent_levels)
    parents: list[Optional[int]] = [None] * count
    ends: list[int] = [count] * count
    open_rows: list[int] = []

    for j, level in enumerate(indent_levels):
        while open_rows and indent_levels[open_rows[-1]] >= level:
            ends[open_rows.pop()] = j
        parents[j] = open_rows[-1] if open_rows else None
        open_rows.append(j)

    return Hierarchy(parent_indices=tuple(parents), subtree_ends=tuple(ends))


def span_between(
    parent_center: float,
    first_child_center: float,
    last_child_center: float,
    row_height: float,
) -> ConnectorSpan:
    """Vertical bar from the first child's top edge to the last child's bottom edge.

    The returned offset is relative to the parent row's center.
    """
    top = first_child_center - row_height / 2
    bottom = last_child_center + row_height / 2
    height = max(0.0, bottom - top)
    return ConnectorSpan(height=height, offset=top + height / 2 - parent_center)


def span_for_children(
    parent_index: int,
    child_indices: Sequence[int],
    line_centers: Sequence[float],
    row_height: float,
) -> ConnectorSpan:
    if not child_indices:
        return EMPTY_SPAN
    return span_between(
        line_centers[parent_index],
        line_centers[child_indices[0]],
        line_centers[child_indices[-1]],
        row_height,
    )


def resolve_connectors(
    analyses: Sequence[LineAnalysis],
    line_centers: Sequence[float],
    layout: LayoutConfig,
    palette: TagPalette,
    hierarchy: Optional[Hierarchy] = None,
) -> list[Optional[Connector]]:
    """Build the connector for every row with a leading tag and a non-empty subtree."""
    if hierarchy is None:
        hierarchy = build_hierarchy([a.indent_level for a in analyses])

    connectors: list[Optional[Connector]] = []
    for index, analysis in enumerate(analyses):
        tag_name = analysis.connector_tag_name
        children = hierarchy.children_of(index)
        if not tag_name or not children:
            connectors.append(None)
            continue

        span = span_for_children(index, children, line_centers, layout.row_height)
        connectors.append(
            Connector(
                tag_name=tag_name,
                color=palette.color_for(tag_name),
                child_indices=tuple(children),
                height=span.height,
                offset=span.offset,
            )
        )
    return connectors
