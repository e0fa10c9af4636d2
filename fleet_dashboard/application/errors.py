"""Application-level errors."""


class RecordStoreError(RuntimeError):
    """Raised when the external record store cannot serve a request."""


class OperationCancelledError(RuntimeError):
    """Raised when a cancellable operation observes its cancel request."""


class ReportExportError(RuntimeError):
    """Raised when a report cannot be rendered or written."""


__all__ = [
    "RecordStoreError",
    "OperationCancelledError",
    "ReportExportError",
]
