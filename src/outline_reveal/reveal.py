"""Progressive reveal: visible state as a function of the typed cursor.

Everything here is derived from a single scalar ``typed`` (characters typed so
far). Out-of-range values are clamped and NaN is treated as zero, so any
number is a legal cursor.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from .analyzer import INDENT_WIDTH
from .checkbox_style import CheckboxStyle, style_for
from .config import LayoutConfig, TagPalette
from .connectors import EMPTY_SPAN, span_for_children
from .models import (
    Document,
    ParsedLine,
    PositionedToken,
    TokenKind,
)

Number = Union[int, float]

BULLET_GLYPH = "•"


def _cursor(typed: Number) -> Number:
    if isinstance(typed, float) and math.isnan(typed):
        return 0
    return typed


def reveal_portion(token: PositionedToken, typed: Number) -> Number:
    """Number of the token's characters revealed at ``typed``, in [0, length]."""
    return max(0, min(token.length, _cursor(typed) - token.start))


def visible_count(token: PositionedToken, typed: Number) -> int:
    return int(math.floor(reveal_portion(token, typed)))


def visible_text(token: PositionedToken, typed: Number) -> str:
    return token.raw[: visible_count(token, typed)]


@dataclass(frozen=True)
class TokenView:
    """Presentation state of one token at a given cursor.

    ``text`` is what a renderer draws as characters. A completed checkbox
    draws no text and exposes ``checkbox_style`` instead; a completed bullet
    draws the bullet glyph.
    """

    token: PositionedToken
    portion: Number
    text: str
    complete: bool
    width: Optional[float] = None
    pill_color: Optional[str] = None
    checkbox_style: Optional[CheckboxStyle] = None

    @property
    def visible(self) -> bool:
        return self.portion > 0

    @property
    def pill(self) -> bool:
        return self.pill_color is not None


def reveal_token(token: PositionedToken, typed: Number, palette: Optional[TagPalette] = None) -> TokenView:
    palette = palette or TagPalette()
    portion = reveal_portion(token, typed)
    complete = portion >= token.length
    kind = token.kind

    if kind == TokenKind.CHECKBOX:
        if complete:
            return TokenView(token, portion, "", True, checkbox_style=style_for(token.token.state))
        return TokenView(token, portion, visible_text(token, typed), False)

    if kind == TokenKind.BULLET:
        text = BULLET_GLYPH if complete else visible_text(token, typed)
        return TokenView(token, portion, text, complete)

    if kind == TokenKind.TAG:
        tag_name = token.token.tag_name
        text = visible_text(token, typed)
        pill_color = palette.color_for(tag_name) if text and tag_name else None
        return TokenView(token, portion, text, complete, pill_color=pill_color)

    if kind == TokenKind.SPACE:
        shown = portion > 0
        return TokenView(
            token,
            portion,
            token.raw if shown else "",
            complete,
            width=token.token.width if shown else 0.0,
        )

    return TokenView(token, portion, visible_text(token, typed), complete)


@dataclass(frozen=True)
class ConnectorView:
    color: str
    height: float
    offset: float
    covered_children: tuple[int, ...]
    width: float = 0.0

    @property
    def visible(self) -> bool:
        return self.height > 0


def connector_span_at(document: Document, line_index: int, typed: Number) -> Optional[ConnectorView]:
    """Currently drawable connector span for a row, or None if it has no connector.

    The connector stays empty until the owning row's reveal threshold is
    reached, then grows to cover each child whose own threshold has passed.
    """
    line = document.lines[line_index]
    connector = line.connector
    if connector is None:
        return None

    cursor = _cursor(typed)
    if cursor < line.reveal_threshold:
        return ConnectorView(
            connector.color, EMPTY_SPAN.height, EMPTY_SPAN.offset, (), document.layout.connector_width
        )

    covered = tuple(
        child for child in connector.child_indices if cursor >= document.lines[child].reveal_threshold
    )
    span = span_for_children(line_index, covered, document.line_centers, document.layout.row_height)
    return ConnectorView(connector.color, span.height, span.offset, covered, document.layout.connector_width)


def marker_frame_width(line: ParsedLine, layout: LayoutConfig) -> float:
    if line.marker_token is None:
        return 0.0
    if line.marker_token.kind == TokenKind.CHECKBOX:
        return layout.checkbox_frame_size
    return layout.bullet_frame_width


def marker_width_at(line: ParsedLine, typed: Number, layout: LayoutConfig) -> float:
    """Marker column width, growing per typed character until the marker completes."""
    marker = line.marker_token
    if marker is None:
        return 0.0
    frame = marker_frame_width(line, layout)
    portion = reveal_portion(marker, typed)
    if portion >= marker.length:
        return frame
    return min(frame, portion * layout.marker_char_width)


def indent_width(line: ParsedLine, layout: LayoutConfig) -> float:
    """Horizontal offset of a row's marker column for its indent level."""
    return line.indent_level * INDENT_WIDTH * layout.indent_space_width


def caret_visible(document: Document, typed: Number) -> bool:
    return _cursor(typed) < document.total_characters


def active_line_index(document: Document, typed: Number) -> int:
    """Row the caret sits on: the first row whose end lies beyond the cursor."""
    cursor = _cursor(typed)
    for line in document.lines:
        if cursor < line.range.end:
            return line.index
    return max(0, len(document.lines) - 1)


def line_break_stops(document: Document) -> list[int]:
    return [line.range.end for line in document.lines[:-1]]


@dataclass(frozen=True)
class LineView:
    index: int
    center: float
    indent: tuple[TokenView, ...]
    marker: Optional[TokenView]
    content: tuple[TokenView, ...]
    marker_width: float
    connector: Optional[ConnectorView]
    indent_width: float = 0.0

    @property
    def text(self) -> str:
        views = self.indent + ((self.marker,) if self.marker else ()) + self.content
        return "".join(view.text for view in views)


def reveal_line(document: Document, line_index: int, typed: Number) -> LineView:
    line = document.lines[line_index]
    palette = document.palette
    return LineView(
        index=line.index,
        center=line.center,
        indent=tuple(reveal_token(t, typed, palette) for t in line.indent_tokens),
        marker=reveal_token(line.marker_token, typed, palette) if line.marker_token else None,
        content=tuple(reveal_token(t, typed, palette) for t in line.content_tokens),
        marker_width=marker_width_at(line, typed, document.layout),
        connector=connector_span_at(document, line_index, typed),
        indent_width=indent_width(line, document.layout),
    )


def reveal_document(document: Document, typed: Number) -> list[LineView]:
    return [reveal_line(document, line.index, typed) for line in document.lines]
