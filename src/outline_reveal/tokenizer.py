"""Single-line tokenizer for outline rows.

Every character of a line is consumed by exactly one token, so joining the
``raw`` of the returned tokens reproduces the input. Matching is tried in a
fixed priority order at each cursor position:

1. checkbox ``- [c]`` for any single character ``c`` (unknown ones read as unchecked)
2. a run of ASCII spaces
3. a bullet dash (``-`` followed by a space; only the dash is consumed)
4. a tag from ``#`` up to the next whitespace
5. a text run up to the next ``#`` or whitespace
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from .config import LayoutConfig
from .models import (
    BulletToken,
    CheckboxToken,
    SpaceToken,
    TagToken,
    TextToken,
    Token,
    TokenKind,
    checkbox_state_for,
)

CHECKBOX_RE = re.compile(r"- \[([^\]])\]")

_DEFAULT_LAYOUT = LayoutConfig()


def _space_base_width(previous: Optional[Token], layout_widths: tuple[float, float, float]) -> float:
    after_checkbox, after_bullet, otherwise = layout_widths
    if previous is None:
        return otherwise
    if previous.kind == TokenKind.CHECKBOX:
        return after_checkbox
    if previous.kind == TokenKind.BULLET:
        return after_bullet
    return otherwise


def _scan_until(line: str, start: int, stop_on_hash: bool) -> int:
    end = start
    while end < len(line):
        char = line[end]
        if char.isspace() or (stop_on_hash and char == "#"):
            break
        end += 1
    return end


@lru_cache(maxsize=4096)
def _tokenize_cached(line: str, layout_widths: tuple[float, float, float]) -> tuple[Token, ...]:
    tokens: list[Token] = []
    index = 0

    while index < len(line):
        current = line[index]

        m = CHECKBOX_RE.match(line, index)
        if m:
            tokens.append(CheckboxToken(raw=m.group(0), state=checkbox_state_for(m.group(1))))
            index = m.end()
            continue

        if current == " ":
            end = index + 1
            while end < len(line) and line[end] == " ":
                end += 1
            raw = line[index:end]
            base = _space_base_width(tokens[-1] if tokens else None, layout_widths)
            tokens.append(SpaceToken(raw=raw, width=base * len(raw)))
            index = end
            continue

        if current == "-" and line[index + 1 : index + 2] == " ":
            tokens.append(BulletToken(raw="-"))
            index += 1
            continue

        if current == "#":
            end = _scan_until(line, index + 1, stop_on_hash=False)
            raw = line[index:end]
            tokens.append(TagToken(raw=raw, tag_name=raw[1:]))
            index = end
            continue

        # Text runs take at least one character, so a tab or other
        # non-space whitespace starts a run of its own.
        end = _scan_until(line, index + 1, stop_on_hash=True)
        tokens.append(TextToken(raw=line[index:end]))
        index = end

    return tuple(tokens)


def tokenize(line: str, layout: Optional[LayoutConfig] = None) -> list[Token]:
    """Split one raw line into typed tokens.

    Args:
        line: Raw outline row (no trailing newline)
        layout: Geometry used for space-run widths (defaults to LayoutConfig())

    Returns:
        Ordered tokens partitioning the line
    """
    layout = layout or _DEFAULT_LAYOUT
    widths = (layout.checkbox_space_width, layout.bullet_space_width, layout.text_space_width)
    return list(_tokenize_cached(line, widths))
