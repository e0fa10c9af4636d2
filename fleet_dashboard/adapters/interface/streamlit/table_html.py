"""HTML rendering of a report page with merged grouping cells.

Spans are computed over the whole filtered list, so a run can start on
an earlier page or continue past this one. Rowspans are clipped to the
page and a run that began on an earlier page is marked as continued.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from html import escape

from fleet_dashboard.domain.models import ColumnDescriptor, Page

CONTINUED_MARKER = "(cont.)"


@dataclass(frozen=True)
class HtmlCell:
    """One rendered table cell."""

    text: str
    rowspan: int = 1
    numeric: bool = False
    continued: bool = False


def format_cell(column: ColumnDescriptor, value) -> str:
    """Format a cell value for display."""
    if column.is_numeric:
        amount = value if isinstance(value, Decimal) else Decimal(value or 0)
        return f"{amount:,.2f}"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return "" if value is None else str(value)


def layout_page(
    page: Page,
    columns: Sequence[ColumnDescriptor],
    span_levels: Sequence[str],
) -> list[list[HtmlCell]]:
    """Lay out the cells of each page row.

    Cells covered by a rowspan from an earlier row are omitted, so each
    returned row holds only the cells it emits.

    Args:
        page: Page of spanned rows.
        columns: Table columns in display order.
        span_levels: Levels rendered as merged cells, coarsest first.

    Returns:
        list[list[HtmlCell]]: Emitted cells per page row.
    """
    span_index = {level: index for index, level in enumerate(span_levels)}
    rows = page.rows
    layout: list[list[HtmlCell]] = []
    for position, row in enumerate(rows):
        cells: list[HtmlCell] = []
        remaining = len(rows) - position
        for column in columns:
            text = format_cell(column, column.extract(row))
            level_index = span_index.get(column.key)
            if level_index is None or level_index >= len(row.spans):
                cells.append(HtmlCell(text=text, numeric=column.is_numeric))
                continue
            span = row.spans[level_index]
            if span > 0:
                cells.append(HtmlCell(text=text, rowspan=min(span, remaining)))
            elif position == 0:
                cells.append(
                    HtmlCell(
                        text=text,
                        rowspan=_continued_length(rows, level_index),
                        continued=True,
                    )
                )
        layout.append(cells)
    return layout


def _continued_length(rows, level_index: int) -> int:
    """Return how many leading page rows belong to a carried-over run."""
    length = 1
    for row in rows[1:]:
        if row.spans[level_index] > 0:
            break
        length += 1
    return length


def render_table_html(
    page: Page,
    columns: Sequence[ColumnDescriptor],
    span_levels: Sequence[str],
) -> str:
    """Render a page as an HTML table with merged grouping cells."""
    head = "".join(
        f"<th>{escape(column.label)}</th>" for column in columns
    )
    body_rows = []
    for cells in layout_page(page, columns, span_levels):
        rendered = []
        for cell in cells:
            attrs = []
            if cell.rowspan > 1:
                attrs.append(f'rowspan="{cell.rowspan}"')
            if cell.numeric:
                attrs.append('style="text-align:right"')
            text = escape(cell.text)
            if cell.continued:
                attrs.append('class="continued"')
                text = f"{text} <small>{CONTINUED_MARKER}</small>"
            attr_text = (" " + " ".join(attrs)) if attrs else ""
            rendered.append(f"<td{attr_text}>{text}</td>")
        body_rows.append(f"<tr>{''.join(rendered)}</tr>")
    if not body_rows:
        body_rows.append(
            f'<tr><td colspan="{max(len(columns), 1)}">'
            "No records match the selected filters.</td></tr>"
        )
    return (
        '<table class="report-table">'
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(body_rows)}</tbody>"
        "</table>"
    )


__all__ = [
    "CONTINUED_MARKER",
    "HtmlCell",
    "format_cell",
    "layout_page",
    "render_table_html",
]
