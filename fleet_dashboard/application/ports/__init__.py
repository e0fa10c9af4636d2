"""Application ports package."""

from .database import DatabaseEnginePort
from .record_store import RecordPage, RecordQuery, RecordStorePort
from .report_renderer import ReportRendererPort

__all__ = [
    "DatabaseEnginePort",
    "RecordPage",
    "RecordQuery",
    "RecordStorePort",
    "ReportRendererPort",
]
