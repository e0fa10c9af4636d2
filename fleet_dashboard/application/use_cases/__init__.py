"""Application use cases package."""

from .export_report import ExportReportUseCase, ExportResult, ExportScope
from .get_report_table import (
    GetReportTableUseCase,
    ReportTableView,
    TableRequest,
)
from .live_table import LiveTableController, TableState
from .report_pipeline import ProcessedRows, build_store_query, process_records

__all__ = [
    "ExportReportUseCase",
    "ExportResult",
    "ExportScope",
    "GetReportTableUseCase",
    "ReportTableView",
    "TableRequest",
    "LiveTableController",
    "TableState",
    "ProcessedRows",
    "build_store_query",
    "process_records",
]
