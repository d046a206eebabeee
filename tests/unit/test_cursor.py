"""Unit tests for the layout cursor and page-break control."""

import pytest

from vitae.contexts.rendering.config import Margins
from vitae.contexts.rendering.cursor import LayoutCursor, ensure_space


def make_cursor(y: float, page: int = 1) -> LayoutCursor:
    return LayoutCursor(
        y=y,
        page=page,
        page_width=210.0,
        page_height=297.0,
        margins=Margins(top=20.0, bottom=20.0, left=20.0, right=20.0),
    )


@pytest.mark.unit
def test_no_break_when_space_fits():
    cursor = make_cursor(y=100.0)
    calls = []

    broke = ensure_space(cursor, 10.0, on_new_page=lambda: calls.append(1))

    assert broke is False
    assert (cursor.y, cursor.page) == (100.0, 1)
    assert calls == []


@pytest.mark.unit
def test_break_moves_to_next_page_top():
    cursor = make_cursor(y=270.0, page=2)
    calls = []

    broke = ensure_space(cursor, 10.0, on_new_page=lambda: calls.append(1))

    assert broke is True
    assert cursor.page == 3
    assert cursor.y == 20.0
    assert calls == [1]


@pytest.mark.unit
def test_exact_fit_does_not_break():
    """Content may end exactly on the bottom margin."""
    cursor = make_cursor(y=267.0)

    assert ensure_space(cursor, 10.0) is False
    assert cursor.page == 1


@pytest.mark.unit
def test_oversized_request_breaks_exactly_once():
    """A request taller than the page still advances a single page."""
    cursor = make_cursor(y=50.0)

    assert ensure_space(cursor, 500.0) is True
    assert (cursor.page, cursor.y) == (2, 20.0)


@pytest.mark.unit
@pytest.mark.parametrize("y", [20.0, 100.0, 250.0, 276.0, 277.0, 290.0])
@pytest.mark.parametrize("required", [0.0, 5.0, 25.0])
def test_cursor_within_band_after_check(y, required):
    """After any check the cursor sits between the top and bottom margins."""
    cursor = make_cursor(y=y)
    ensure_space(cursor, required)

    assert cursor.margins.top <= cursor.y <= cursor.bottom_limit


@pytest.mark.unit
def test_from_config(layout_config):
    cursor = LayoutCursor.from_config(layout_config)

    assert cursor.y == layout_config.margins.top
    assert cursor.page == 1
    assert cursor.content_width == pytest.approx(170.0)
    assert cursor.remaining == pytest.approx(257.0)
