"""Debounced, cancellable refresh of the live report table."""

import asyncio
from dataclasses import dataclass

from fleet_dashboard.application.cancellation import CancellationToken
from fleet_dashboard.application.errors import (
    OperationCancelledError,
    RecordStoreError,
)
from fleet_dashboard.application.use_cases.get_report_table import (
    GetReportTableUseCase,
    ReportTableView,
    TableRequest,
)
from fleet_dashboard.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class TableState:
    """What the live view shows while and after loading.

    Attributes:
        loading: True while a request is pending.
        error: Message of the last failed fetch, if any.
        result: Last successful table; cleared when a fetch fails.
    """

    loading: bool = False
    error: str | None = None
    result: ReportTableView | None = None


class LiveTableController:
    """Keep at most one table request in flight.

    Each new request cancels the previous one. Requests wait for the
    debounce window before fetching, so rapid filter changes collapse into
    a single fetch, and only the latest request may update the state.
    """

    def __init__(
        self,
        use_case: GetReportTableUseCase,
        debounce_seconds: float = 0.4,
        logger=None,
    ) -> None:
        self._use_case = use_case
        self._debounce_seconds = debounce_seconds
        self._logger = logger or get_app_logger()
        self._state = TableState()
        self._task: asyncio.Task | None = None
        self._token: CancellationToken | None = None
        self._generation = 0

    @property
    def state(self) -> TableState:
        return self._state

    def request(self, table_request: TableRequest) -> asyncio.Task:
        """Schedule a refresh, superseding any pending one.

        Must be called from a running event loop.

        Args:
            table_request: Filters, sort, page and status scope.

        Returns:
            asyncio.Task: The scheduled refresh.
        """
        self.cancel()
        self._generation += 1
        token = CancellationToken()
        self._token = token
        self._state = TableState(
            loading=True,
            error=None,
            result=self._state.result,
        )
        self._task = asyncio.get_running_loop().create_task(
            self._run(table_request, token, self._generation)
        )
        return self._task

    def cancel(self) -> None:
        """Cancel the pending request, if any."""
        if self._token is not None:
            self._token.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait_idle(self) -> TableState:
        """Wait until no request is pending and return the state."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._state

    async def _run(
        self,
        table_request: TableRequest,
        token: CancellationToken,
        generation: int,
    ) -> None:
        await asyncio.sleep(self._debounce_seconds)
        try:
            result = await asyncio.to_thread(
                self._use_case.execute, table_request, token
            )
        except OperationCancelledError:
            self._logger.debug("Discarded cancelled table request")
            return
        except (RecordStoreError, ValueError) as exc:
            if generation != self._generation:
                return
            self._logger.error(f"Failed to load table: {exc}")
            self._state = TableState(
                loading=False, error=str(exc), result=None
            )
            return
        if generation != self._generation:
            self._logger.debug("Discarded stale table result")
            return
        self._state = TableState(loading=False, error=None, result=result)


__all__ = ["TableState", "LiveTableController"]
