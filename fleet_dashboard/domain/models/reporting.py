"""Domain models for table pages, summaries and report documents."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from math import ceil

from fleet_dashboard.domain.models.records import FlatRow

COLUMN_GROUP = "group"
COLUMN_TEXT = "text"
COLUMN_DATE = "date"
COLUMN_AMOUNT = "amount"
COLUMN_TOTAL = "total"


@dataclass(frozen=True)
class ColumnDescriptor:
    """Declarative table column shared by screen and export renderers."""

    key: str
    label: str
    kind: str = COLUMN_TEXT

    @property
    def is_numeric(self) -> bool:
        return self.kind in (COLUMN_AMOUNT, COLUMN_TOTAL)

    def extract(self, row: FlatRow):
        """Return this column's cell value for a row."""
        if self.kind == COLUMN_TOTAL:
            return row.total
        if self.kind == COLUMN_AMOUNT:
            return row.amounts.get(self.key, Decimal("0"))
        value = row.value(self.key)
        return "" if value is None else value


@dataclass(frozen=True)
class GroupSubtotal:
    """Subtotal for one coarsest-level group."""

    label: str
    amount: Decimal


@dataclass(frozen=True)
class AggregationSummary:
    """Per-group subtotals and their grand total.

    Attributes:
        level: Grouping level the subtotals are keyed by.
        subtotals: Subtotals ordered alphabetically by label.
        grand_total: Sum of all subtotals.
    """

    level: str
    subtotals: tuple[GroupSubtotal, ...]
    grand_total: Decimal

    def subtotal_for(self, label: str) -> Decimal:
        for subtotal in self.subtotals:
            if subtotal.label == label:
                return subtotal.amount
        return Decimal("0")


@dataclass(frozen=True)
class Page:
    """One fixed-size slice of the processed row list."""

    number: int
    size: int
    rows: tuple[FlatRow, ...]
    total_rows: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_rows / self.size) if self.total_rows else 0

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 1


@dataclass(frozen=True)
class ReportHeader:
    """Header metadata printed above the exported table."""

    title: str
    report_type: str
    period_label: str
    generated_at: datetime
    filter_summary: str


@dataclass(frozen=True)
class ReportDocument:
    """Complete report assembled for rendering.

    Attributes:
        header: Title, period, generation time and filter summary.
        columns: Column descriptors of the main table.
        rows: Every matching row, sorted, with spans.
        summary: Per-group subtotals and grand total.
        bucket_totals: Total per displayed status bucket.
        record_count: Number of matching source records.
        span_levels: Levels whose cells are merged over their spans.
    """

    header: ReportHeader
    columns: tuple[ColumnDescriptor, ...]
    rows: tuple[FlatRow, ...]
    summary: AggregationSummary
    bucket_totals: tuple[tuple[str, Decimal], ...] = ()
    record_count: int = 0
    span_levels: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def table_rows(self) -> list[list]:
        """Return the main table as a list of cell value lists."""
        return [
            [column.extract(row) for column in self.columns]
            for row in self.rows
        ]

    def filename(self, extension: str) -> str:
        """Return the deterministic export filename."""
        stamp = self.header.generated_at.strftime("%Y-%m-%d")
        return f"{self.header.report_type}_{stamp}.{extension}"


__all__ = [
    "COLUMN_GROUP",
    "COLUMN_TEXT",
    "COLUMN_DATE",
    "COLUMN_AMOUNT",
    "COLUMN_TOTAL",
    "ColumnDescriptor",
    "GroupSubtotal",
    "AggregationSummary",
    "Page",
    "ReportHeader",
    "ReportDocument",
]
