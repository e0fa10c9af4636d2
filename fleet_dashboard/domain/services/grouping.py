"""Merged-cell span computation over sorted rows."""

from collections.abc import Sequence

from fleet_dashboard.domain.models.records import FlatRow


def compute_group_spans(
    rows: Sequence[FlatRow],
    levels: Sequence[str],
) -> list[FlatRow]:
    """Attach a span per level to every row in one forward pass.

    A row starts a run at level ``i`` when it is the first row, or when its
    value at any level ``0..i`` differs from the previous row. The starting
    row carries the run length; every other row of the run carries 0.
    Work is O(len(rows) * len(levels)).

    Args:
        rows: Rows already filtered and sorted, never a page slice.
        levels: Span levels, coarsest first.

    Returns:
        list[FlatRow]: Copies of the rows with ``spans`` set.
    """
    depth = len(levels)
    spans: list[list[int]] = []
    run_start = [0] * depth
    previous: tuple | None = None

    for index, row in enumerate(rows):
        values = tuple(row.value(level) for level in levels)
        changed_at = _first_difference(previous, values)
        row_spans = [0] * depth
        for level_index in range(depth):
            if level_index >= changed_at:
                run_start[level_index] = index
                row_spans[level_index] = 1
            else:
                spans[run_start[level_index]][level_index] += 1
        spans.append(row_spans)
        previous = values

    return [
        row.with_spans(tuple(row_spans))
        for row, row_spans in zip(rows, spans)
    ]


def _first_difference(previous: tuple | None, values: tuple) -> int:
    if previous is None:
        return 0
    for index, (before, current) in enumerate(zip(previous, values)):
        if before != current:
            return index
    return len(values)


def iter_runs(
    rows: Sequence[FlatRow],
    level_index: int,
) -> list[tuple[int, int]]:
    """Return (start, length) for each run at a level of spanned rows."""
    runs: list[tuple[int, int]] = []
    for index, row in enumerate(rows):
        span = row.spans[level_index]
        if span:
            runs.append((index, span))
    return runs


__all__ = ["compute_group_spans", "iter_runs"]
