"""Cooperative cancellation shared between callers and workers."""

import threading

from fleet_dashboard.application.errors import OperationCancelledError


class CancellationToken:
    """Thread-safe flag checked by long-running loops."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError once cancel() has been called."""
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")


__all__ = ["CancellationToken"]
