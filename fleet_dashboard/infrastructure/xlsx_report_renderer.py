"""Excel rendering of report documents with openpyxl."""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from fleet_dashboard.application.ports.report_renderer import (
    ReportRendererPort,
)
from fleet_dashboard.domain.models import ReportDocument

TITLE_BG = "1F2937"
TITLE_FG = "FFFFFF"
HEADER_BG = "E5E7EB"
TOTAL_BG = "F3F4F6"
AMOUNT_FORMAT = "#,##0.00"
EMPTY_MESSAGE = "No records match the selected filters."


class XlsxReportRenderer(ReportRendererPort):
    """Render a report document as a single printable worksheet.

    The sheet holds the header block, the main table with grouping cells
    merged over their spans, per-bucket totals, the per-group summary and
    the grand total.
    """

    extension = "xlsx"

    def render(self, document: ReportDocument) -> bytes:
        """Render the document to xlsx bytes.

        Args:
            document: Assembled report.

        Returns:
            bytes: Workbook content.
        """
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Report"
        width = max(len(document.columns), 2)

        next_row = self._write_header(sheet, document, width)
        next_row = self._write_table(sheet, document, next_row + 1)
        next_row = self._write_bucket_totals(sheet, document, next_row + 1)
        self._write_summary(sheet, document, next_row + 1)

        for index, column in enumerate(document.columns, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = (
                16 if column.is_numeric else 22
            )

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    @staticmethod
    def _write_header(sheet, document: ReportDocument, width: int) -> int:
        header = document.header
        title = sheet.cell(row=1, column=1, value=header.title)
        title.font = Font(size=16, bold=True, color=TITLE_FG)
        title.fill = PatternFill(
            start_color=TITLE_BG, end_color=TITLE_BG, fill_type="solid"
        )
        title.alignment = Alignment(horizontal="left", vertical="center")
        sheet.merge_cells(
            start_row=1, start_column=1, end_row=1, end_column=width
        )
        details = (
            ("Period", header.period_label),
            ("Generated", header.generated_at.strftime("%Y-%m-%d %H:%M")),
            ("Filters", header.filter_summary),
            ("Records", document.record_count),
        )
        for offset, (label, value) in enumerate(details, start=2):
            label_cell = sheet.cell(row=offset, column=1, value=label)
            label_cell.font = Font(bold=True)
            sheet.cell(row=offset, column=2, value=value)
        return 1 + len(details)

    @staticmethod
    def _write_table(sheet, document: ReportDocument, start_row: int) -> int:
        row_index = start_row + 1
        for col_index, column in enumerate(document.columns, start=1):
            cell = sheet.cell(
                row=row_index, column=col_index, value=column.label
            )
            cell.font = Font(bold=True)
            cell.fill = PatternFill(
                start_color=HEADER_BG, end_color=HEADER_BG, fill_type="solid"
            )
            cell.alignment = Alignment(horizontal="center", vertical="center")

        if document.is_empty:
            row_index += 1
            sheet.cell(row=row_index, column=1, value=EMPTY_MESSAGE)
            return row_index

        span_columns = _span_columns(document)
        first_data_row = row_index + 1
        for offset, row in enumerate(document.rows):
            excel_row = first_data_row + offset
            for col_index, column in enumerate(document.columns, start=1):
                value = column.extract(row)
                cell = sheet.cell(
                    row=excel_row, column=col_index, value=value
                )
                if column.is_numeric:
                    cell.number_format = AMOUNT_FORMAT
                    cell.alignment = Alignment(horizontal="right")
            for level_index, col_index in span_columns:
                if level_index >= len(row.spans):
                    continue
                span = row.spans[level_index]
                if span > 1:
                    sheet.merge_cells(
                        start_row=excel_row,
                        start_column=col_index,
                        end_row=excel_row + span - 1,
                        end_column=col_index,
                    )
                    sheet.cell(row=excel_row, column=col_index).alignment = (
                        Alignment(vertical="top")
                    )
        return first_data_row + len(document.rows) - 1

    @staticmethod
    def _write_bucket_totals(
        sheet,
        document: ReportDocument,
        start_row: int,
    ) -> int:
        if not document.bucket_totals:
            return start_row - 1
        labels = {column.key: column.label for column in document.columns}
        row_index = start_row
        for bucket, amount in document.bucket_totals:
            sheet.cell(
                row=row_index, column=1, value=labels.get(bucket, bucket)
            ).font = Font(bold=True)
            cell = sheet.cell(row=row_index, column=2, value=amount)
            cell.number_format = AMOUNT_FORMAT
            row_index += 1
        return row_index - 1

    @staticmethod
    def _write_summary(sheet, document: ReportDocument, start_row: int) -> int:
        summary = document.summary
        heading = sheet.cell(
            row=start_row,
            column=1,
            value=f"Summary by {summary.level.title()}",
        )
        heading.font = Font(size=12, bold=True)
        row_index = start_row + 1
        for subtotal in summary.subtotals:
            sheet.cell(row=row_index, column=1, value=subtotal.label)
            cell = sheet.cell(row=row_index, column=2, value=subtotal.amount)
            cell.number_format = AMOUNT_FORMAT
            row_index += 1
        fill = PatternFill(
            start_color=TOTAL_BG, end_color=TOTAL_BG, fill_type="solid"
        )
        label = sheet.cell(row=row_index, column=1, value="Grand Total")
        label.font = Font(bold=True)
        label.fill = fill
        total = sheet.cell(row=row_index, column=2, value=summary.grand_total)
        total.font = Font(bold=True)
        total.fill = fill
        total.number_format = AMOUNT_FORMAT
        return row_index


def _span_columns(document: ReportDocument) -> list[tuple[int, int]]:
    """Pair each span level index with its 1-based column index."""
    positions = {
        column.key: index
        for index, column in enumerate(document.columns, start=1)
    }
    return [
        (level_index, positions[level])
        for level_index, level in enumerate(document.span_levels)
        if level in positions
    ]


__all__ = ["XlsxReportRenderer"]
