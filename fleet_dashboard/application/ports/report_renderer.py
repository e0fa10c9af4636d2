"""Port for the document renderer used by report exports."""

from typing import Protocol

from fleet_dashboard.domain.models import ReportDocument


class ReportRendererPort(Protocol):
    """Port turning an assembled report into file content."""

    extension: str

    def render(self, document: ReportDocument) -> bytes:
        """Return the encoded document."""


__all__ = ["ReportRendererPort"]
