"""Checkbox icon styling per state."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import CheckboxState


class CheckboxGlyph(str, Enum):
    NONE = "none"
    CHECKMARK = "checkmark"
    PROGRESS_WEDGE = "progress_wedge"
    BLOCKED_BAR = "blocked_bar"
    EXCLAMATION = "exclamation"
    QUESTION = "question"


@dataclass(frozen=True)
class CheckboxStyle:
    fill: str
    stroke: Optional[str]
    stroke_width: float
    glyph: CheckboxGlyph
    glyph_color: Optional[str]

    @property
    def outlined(self) -> bool:
        return self.stroke_width > 0


OUTLINE_WIDTH = 4
BACKGROUND_FILL = "#0f1218"

_STYLES: dict[CheckboxState, CheckboxStyle] = {
    CheckboxState.UNCHECKED: CheckboxStyle(
        fill=BACKGROUND_FILL,
        stroke="#cbd5f5",
        stroke_width=OUTLINE_WIDTH,
        glyph=CheckboxGlyph.NONE,
        glyph_color=None,
    ),
    CheckboxState.IN_PROGRESS: CheckboxStyle(
        fill="#f59e0b",
        stroke="#fbbf24",
        stroke_width=OUTLINE_WIDTH,
        glyph=CheckboxGlyph.PROGRESS_WEDGE,
        glyph_color=BACKGROUND_FILL,
    ),
    CheckboxState.DONE: CheckboxStyle(
        fill="#5eea91",
        stroke=None,
        stroke_width=0,
        glyph=CheckboxGlyph.CHECKMARK,
        glyph_color="#06130a",
    ),
    CheckboxState.CANCELLED: CheckboxStyle(
        fill="#475569",
        stroke=None,
        stroke_width=0,
        glyph=CheckboxGlyph.BLOCKED_BAR,
        glyph_color="#e2e8f0",
    ),
    CheckboxState.ERROR: CheckboxStyle(
        fill="#ef4444",
        stroke=None,
        stroke_width=0,
        glyph=CheckboxGlyph.EXCLAMATION,
        glyph_color="#fef2f2",
    ),
    CheckboxState.QUESTION: CheckboxStyle(
        fill="#a855f7",
        stroke=None,
        stroke_width=0,
        glyph=CheckboxGlyph.QUESTION,
        glyph_color="#ede9fe",
    ),
}


def style_for(state: CheckboxState) -> CheckboxStyle:
    """Return the icon style for a normalized checkbox state."""
    return _STYLES[CheckboxState(state)]


def checkmark_points() -> list[tuple[float, float]]:
    return [(-6.0, 0.0), (-1.0, 6.0), (9.0, -6.0)]


def progress_wedge_points(
    radius: float,
    samples: int = 10,
    start_angle: float = -math.pi / 3,
    sweep: float = math.pi / 2.6,
) -> list[tuple[float, float]]:
    """Closed pie-wedge polygon (center first) for the in-progress glyph."""
    arc = [
        (radius * math.cos(start_angle + sweep * i / (samples - 1)),
         radius * math.sin(start_angle + sweep * i / (samples - 1)))
        for i in range(samples)
    ]
    return [(0.0, 0.0)] + arc
