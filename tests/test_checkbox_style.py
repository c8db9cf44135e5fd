"""Tests for the checkbox state style map."""

import math

import pytest

from outline_reveal.checkbox_style import (
    CheckboxGlyph,
    checkmark_points,
    progress_wedge_points,
    style_for,
)
from outline_reveal.models import CheckboxState


def test_every_state_has_a_style():
    glyphs = {state: style_for(state).glyph for state in CheckboxState}
    assert glyphs == {
        CheckboxState.UNCHECKED: CheckboxGlyph.NONE,
        CheckboxState.DONE: CheckboxGlyph.CHECKMARK,
        CheckboxState.IN_PROGRESS: CheckboxGlyph.PROGRESS_WEDGE,
        CheckboxState.CANCELLED: CheckboxGlyph.BLOCKED_BAR,
        CheckboxState.ERROR: CheckboxGlyph.EXCLAMATION,
        CheckboxState.QUESTION: CheckboxGlyph.QUESTION,
    }


def test_outlined_states():
    unchecked = style_for(CheckboxState.UNCHECKED)
    in_progress = style_for(CheckboxState.IN_PROGRESS)
    assert unchecked.outlined and in_progress.outlined
    assert unchecked.stroke != in_progress.stroke
    assert unchecked.stroke_width == in_progress.stroke_width == 4


@pytest.mark.parametrize(
    "state",
    [CheckboxState.DONE, CheckboxState.CANCELLED, CheckboxState.ERROR, CheckboxState.QUESTION],
)
def test_filled_states_have_no_stroke(state):
    style = style_for(state)
    assert not style.outlined
    assert style.stroke is None
    assert style.glyph_color is not None


def test_accepts_state_values():
    assert style_for("done") == style_for(CheckboxState.DONE)


def test_unknown_state_is_rejected():
    with pytest.raises(ValueError):
        style_for("maybe")


def test_checkmark_points():
    assert checkmark_points() == [(-6.0, 0.0), (-1.0, 6.0), (9.0, -6.0)]


def test_progress_wedge_points():
    points = progress_wedge_points(15)
    assert points[0] == (0.0, 0.0)
    assert len(points) == 11
    for x, y in points[1:]:
        assert math.hypot(x, y) == pytest.approx(15)
    assert points[1] == pytest.approx((15 * math.cos(-math.pi / 3), 15 * math.sin(-math.pi / 3)))
    end_angle = -math.pi / 3 + math.pi / 2.6
    assert points[-1] == pytest.approx((15 * math.cos(end_angle), 15 * math.sin(end_angle)))
