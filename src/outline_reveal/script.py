"""Line-array mutation sequences for typing-style animations.

Each generator yields successive snapshots of the whole outline as tuples.
Snapshots carry no timing; the driver decides how long each one is shown and
re-derives the Document after every step.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from .models import TokenKind
from .tokenizer import tokenize

Snapshot = tuple[str, ...]


def _check_line_index(lines: Sequence[str], line_index: int) -> None:
    if not 0 <= line_index < len(lines):
        raise IndexError(f"Line index {line_index} out of range for {len(lines)} lines")


def type_lines(target_lines: Sequence[str]) -> Iterator[Snapshot]:
    """Fill empty rows with their target text one character at a time.

    Blank target rows appear in a single step.
    """
    current = ["" for _ in target_lines]
    for line_index, target in enumerate(target_lines):
        if not target:
            current[line_index] = ""
            yield tuple(current)
            continue
        for end in range(1, len(target) + 1):
            current[line_index] = target[:end]
            yield tuple(current)


def insert_text(lines: Sequence[str], line_index: int, column: int, text: str) -> Iterator[Snapshot]:
    """Type ``text`` into one row at ``column``, one character per snapshot."""
    _check_line_index(lines, line_index)
    original = lines[line_index]
    if not 0 <= column <= len(original):
        raise IndexError(f"Column {column} out of range for line of length {len(original)}")

    current = list(lines)
    for end in range(1, len(text) + 1):
        current[line_index] = original[:column] + text[:end] + original[column:]
        yield tuple(current)


def _first_tag_span(line: str) -> tuple[int, int]:
    offset = 0
    for token in tokenize(line):
        if token.kind == TokenKind.TAG:
            return offset, offset + token.length
        offset += token.length
    raise ValueError(f"No tag to rename in line: {line!r}")


def retag(lines: Sequence[str], line_index: int, new_name: str) -> Iterator[Snapshot]:
    """Backspace the first tag's name down to ``#`` then type ``new_name``.

    Raises:
        IndexError: If ``line_index`` is out of range
        ValueError: If the row has no tag
    """
    _check_line_index(lines, line_index)
    line = lines[line_index]
    start, end = _first_tag_span(line)
    before, old_name, after = line[:start], line[start + 1 : end], line[end:]

    current = list(lines)
    for remaining in range(len(old_name) - 1, -1, -1):
        current[line_index] = f"{before}#{old_name[:remaining]}{after}"
        yield tuple(current)
    for typed in range(1, len(new_name) + 1):
        current[line_index] = f"{before}#{new_name[:typed]}{after}"
        yield tuple(current)
