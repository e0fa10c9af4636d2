"""Tests for fixed-size pagination."""

import pytest

from fleet_dashboard.domain.models import FlatRow
from fleet_dashboard.domain.services import paginate


def _rows(count: int) -> list[FlatRow]:
    return [
        FlatRow(record_id=str(index), levels=(), keys=())
        for index in range(count)
    ]


def test_last_page_is_partial() -> None:
    """The last page should hold the remaining rows."""
    page = paginate(_rows(125), 3, 50)

    assert len(page.rows) == 25
    assert page.rows[0].record_id == "100"
    assert page.total_rows == 125
    assert page.total_pages == 3
    assert page.offset == 100
    assert page.has_previous
    assert not page.has_next


def test_page_past_the_end_is_empty() -> None:
    """A page past the end should be empty."""
    page = paginate(_rows(125), 4, 50)

    assert page.rows == ()
    assert page.total_pages == 3


def test_first_page() -> None:
    """The first page should hold the first rows."""
    page = paginate(_rows(125), 1, 50)

    assert len(page.rows) == 50
    assert page.has_next
    assert not page.has_previous


def test_empty_input_has_no_pages() -> None:
    """Empty input should have no pages."""
    page = paginate([], 1, 50)

    assert page.rows == ()
    assert page.total_pages == 0


@pytest.mark.parametrize(("page", "size"), [(0, 50), (1, 0), (-1, 10)])
def test_invalid_page_or_size(page: int, size: int) -> None:
    """Invalid page numbers or sizes should raise."""
    with pytest.raises(ValueError):
        paginate(_rows(10), page, size)
