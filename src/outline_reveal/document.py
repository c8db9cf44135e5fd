"""Assemble a Document from raw outline lines.

The Document is rebuilt from scratch on every call; callers own the current
line list and re-derive after each mutation.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .analyzer import analyze_line, line_content, parse_segments
from .config import LayoutConfig, TagPalette
from .connectors import build_hierarchy, resolve_connectors
from .models import (
    Document,
    LineRange,
    ParsedLine,
    PositionedToken,
    TokenKind,
)
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

_MARKER_KINDS = (TokenKind.CHECKBOX, TokenKind.BULLET)


def row_centers(count: int, layout: LayoutConfig) -> list[float]:
    """Vertical row centers for a stack centered around zero."""
    total_height = count * layout.row_height + max(0, count - 1) * layout.column_gap
    first_center = -total_height / 2 + layout.row_height / 2
    return [first_center + index * layout.row_pitch for index in range(count)]


def split_line_tokens(
    tokens: Sequence[PositionedToken],
) -> tuple[tuple[PositionedToken, ...], Optional[PositionedToken], tuple[PositionedToken, ...]]:
    """Split a row's tokens into (indent, marker, content)."""
    index = 0
    while index < len(tokens) and tokens[index].kind == TokenKind.SPACE:
        index += 1
    indent_tokens = tuple(tokens[:index])

    marker_token = None
    if index < len(tokens) and tokens[index].kind in _MARKER_KINDS:
        marker_token = tokens[index]
        index += 1

    return indent_tokens, marker_token, tuple(tokens[index:])


def reveal_threshold(
    marker_token: Optional[PositionedToken],
    content_tokens: Sequence[PositionedToken],
    line_range: LineRange,
) -> int:
    """Offset at which a row counts as revealed for connector growth."""
    if marker_token is not None:
        return marker_token.end
    if content_tokens:
        return content_tokens[0].start
    return line_range.end


def derive_document(
    lines: Sequence[str],
    layout: Optional[LayoutConfig] = None,
    palette: Optional[TagPalette] = None,
) -> Document:
    """Tokenize, analyze and lay out every row.

    Args:
        lines: Raw outline rows in display order
        layout: Row and marker geometry (defaults to LayoutConfig())
        palette: Tag colors (defaults to TagPalette())

    Returns:
        A fully derived Document; the input sequence is not retained
    """
    layout = layout or LayoutConfig()
    palette = palette or TagPalette()

    analyses = [analyze_line(line) for line in lines]
    centers = row_centers(len(lines), layout)

    running_total = 0
    positioned: list[tuple[PositionedToken, ...]] = []
    ranges: list[LineRange] = []
    for line_index, line in enumerate(lines):
        line_start = running_total
        line_tokens = []
        for token in tokenize(line, layout):
            start = running_total
            running_total = start + token.length
            line_tokens.append(PositionedToken(token=token, start=start, end=running_total, line_index=line_index))
        positioned.append(tuple(line_tokens))
        # Empty rows sit at the running offset so ranges stay contiguous
        ranges.append(LineRange(start=line_start, end=running_total))

    hierarchy = build_hierarchy([a.indent_level for a in analyses])
    connectors = resolve_connectors(analyses, centers, layout, palette, hierarchy=hierarchy)

    parsed_lines: list[ParsedLine] = []
    for index, line in enumerate(lines):
        indent_tokens, marker_token, content_tokens = split_line_tokens(positioned[index])
        parsed_lines.append(
            ParsedLine(
                index=index,
                raw=line,
                analysis=analyses[index],
                segments=tuple(parse_segments(line_content(line), palette)),
                tokens=positioned[index],
                indent_tokens=indent_tokens,
                marker_token=marker_token,
                content_tokens=content_tokens,
                center=centers[index],
                range=ranges[index],
                reveal_threshold=reveal_threshold(marker_token, content_tokens, ranges[index]),
                parent_index=hierarchy.parent_indices[index],
                connector=connectors[index],
            )
        )

    connector_count = sum(1 for c in connectors if c is not None)
    logger.debug(
        f"Derived document: {len(parsed_lines)} lines, {running_total} characters, "
        f"{connector_count} connectors"
    )

    return Document(
        lines=tuple(parsed_lines),
        line_centers=tuple(centers),
        total_characters=running_total,
        layout=layout,
        palette=palette,
    )
