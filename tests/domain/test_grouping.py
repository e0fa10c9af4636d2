"""Tests for merged-cell span computation."""

from fleet_dashboard.domain.models import FlatRow
from fleet_dashboard.domain.services import (
    compute_group_spans,
    iter_runs,
    paginate,
)

_LEVELS = ("vehicle", "driver", "cluster")


def _row(record_id: str, *keys: str) -> FlatRow:
    return FlatRow(record_id=record_id, levels=_LEVELS, keys=keys)


_ROWS = [
    _row("1", "TRK-1", "Amy", "North"),
    _row("2", "TRK-1", "Amy", "North"),
    _row("3", "TRK-1", "Amy", "South"),
    _row("4", "TRK-1", "Ben", "South"),
    _row("5", "TRK-2", "Ben", "South"),
]


def test_spans_per_level() -> None:
    """Each level should span its contiguous run."""
    result = compute_group_spans(_ROWS, _LEVELS)

    assert [row.spans for row in result] == [
        (4, 3, 2),
        (0, 0, 0),
        (0, 0, 1),
        (0, 1, 1),
        (1, 1, 1),
    ]


def test_inner_run_restarts_when_outer_key_changes() -> None:
    """Same driver and cluster under another vehicle is a new run."""
    result = compute_group_spans(_ROWS[3:], _LEVELS)

    assert [row.spans for row in result] == [(1, 1, 1), (1, 1, 1)]


def test_span_conservation() -> None:
    """Spans at each level should add up to the row count."""
    result = compute_group_spans(_ROWS, _LEVELS)

    for level_index in range(len(_LEVELS)):
        assert sum(row.spans[level_index] for row in result) == len(_ROWS)
        runs = iter_runs(result, level_index)
        assert runs[0][0] == 0
        for (start, length), (next_start, _) in zip(runs, runs[1:]):
            assert start + length == next_start


def test_empty_rows_and_levels() -> None:
    """Empty rows or levels should give no spans."""
    assert compute_group_spans([], _LEVELS) == []
    result = compute_group_spans(_ROWS[:1], ())
    assert result[0].spans == ()


def test_paging_keeps_full_list_spans() -> None:
    """Pages should keep spans computed over the full list."""
    spanned = compute_group_spans(_ROWS, _LEVELS)

    page = paginate(spanned, 2, 2)

    assert [row.spans for row in page.rows] == [(0, 0, 1), (0, 1, 1)]
