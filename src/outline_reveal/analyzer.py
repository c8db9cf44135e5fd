"""Per-line analysis: indentation, marker and leading connector tag."""

from __future__ import annotations

import re
from typing import Optional

from .config import TagPalette
from .models import (
    CheckboxState,
    LineAnalysis,
    LinkSegment,
    MarkerKind,
    Segment,
    TagSegment,
    TextSegment,
    checkbox_state_for,
)
from .tokenizer import CHECKBOX_RE

INDENT_WIDTH = 4

_LEADING_SPACES_RE = re.compile(r"^ *")
_LEADING_TAG_RE = re.compile(r"^#(\S+)")


def _split_marker(remainder: str) -> tuple[Optional[MarkerKind], Optional[CheckboxState], str]:
    m = CHECKBOX_RE.match(remainder)
    if m:
        return MarkerKind.CHECKBOX, checkbox_state_for(m.group(1)), remainder[m.end():]
    if remainder.startswith("-"):
        return MarkerKind.BULLET, None, remainder[1:]
    return None, None, remainder


def analyze_line(raw_line: str) -> LineAnalysis:
    """Compute indentation, marker kind and connector tag for one row.

    Indentation counts literal leading spaces only; the level is the count
    floor-divided by four. Only a tag that directly follows the marker (after
    optional spaces) counts as a connector tag.
    """
    indent_spaces = len(_LEADING_SPACES_RE.match(raw_line).group(0))
    marker, checkbox_state, remainder = _split_marker(raw_line[indent_spaces:])

    m = _LEADING_TAG_RE.match(remainder.lstrip())
    connector_tag_name = m.group(1) if m else None

    return LineAnalysis(
        indent_spaces=indent_spaces,
        indent_level=indent_spaces // INDENT_WIDTH,
        marker=marker,
        connector_tag_name=connector_tag_name,
        checkbox_state=checkbox_state,
    )


def line_content(raw_line: str) -> str:
    """Return the row text after indentation and marker."""
    indent_spaces = len(_LEADING_SPACES_RE.match(raw_line).group(0))
    return _split_marker(raw_line[indent_spaces:])[2]


def _parse_link(content: str, index: int) -> Optional[tuple[LinkSegment, int]]:
    alias_end = content.find("]", index + 1)
    if alias_end == -1 or content[alias_end + 1 : alias_end + 2] != "(":
        return None
    url_end = content.find(")", alias_end + 2)
    if url_end == -1:
        return None
    segment = LinkSegment(alias=content[index + 1 : alias_end], url=content[alias_end + 2 : url_end])
    return segment, url_end + 1


def parse_segments(content: str, palette: Optional[TagPalette] = None) -> list[Segment]:
    """Split row content into text, tag and ``[alias](url)`` link segments.

    Tags run from ``#`` to the next whitespace. An unterminated link falls
    through to plain text. Empty content yields one empty text segment.
    """
    palette = palette or TagPalette()
    segments: list[Segment] = []
    index = 0

    while index < len(content):
        char = content[index]

        if char == "#":
            end = index + 1
            while end < len(content) and not content[end].isspace():
                end += 1
            raw = content[index:end]
            tag_name = raw[1:]
            recognized = palette.is_recognized(tag_name)
            segments.append(
                TagSegment(
                    raw=raw,
                    tag_name=tag_name,
                    recognized=recognized,
                    color=palette.colors[tag_name] if recognized else None,
                )
            )
            index = end
            continue

        if char == "[":
            link = _parse_link(content, index)
            if link is not None:
                segment, index = link
                segments.append(segment)
                continue

        end = index + 1
        while end < len(content) and content[end] not in "#[":
            end += 1
        segments.append(TextSegment(text=content[index:end]))
        index = end

    if not segments:
        segments.append(TextSegment(text=""))

    return segments
