"""Fixed-size pagination of processed rows."""

from collections.abc import Sequence

from fleet_dashboard.domain.models.records import FlatRow
from fleet_dashboard.domain.models.reporting import Page


def paginate(
    rows: Sequence[FlatRow],
    page: int,
    page_size: int,
) -> Page:
    """Slice rows into a 1-based page.

    Spans must already be computed over the whole list; slicing never
    recomputes them. Pages past the end are empty, not errors.

    Args:
        rows: Filtered, sorted and spanned rows.
        page: 1-based page number.
        page_size: Rows per page.

    Returns:
        Page: The requested slice with paging metadata.

    Raises:
        ValueError: If page or page_size is below 1.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    start = (page - 1) * page_size
    return Page(
        number=page,
        size=page_size,
        rows=tuple(rows[start:start + page_size]),
        total_rows=len(rows),
    )


__all__ = ["paginate"]
