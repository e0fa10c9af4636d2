"""Tests for the debounced live table controller."""

import asyncio
import threading
from unittest.mock import MagicMock

from fleet_dashboard.application.errors import RecordStoreError
from fleet_dashboard.application.use_cases import (
    LiveTableController,
    TableRequest,
)


class _FakeUseCase:
    def __init__(self, failures: set[int] | None = None) -> None:
        self.calls: list[TableRequest] = []
        self.tokens = []
        self._failures = failures or set()

    def execute(self, request: TableRequest, cancel_token=None):
        self.calls.append(request)
        self.tokens.append(cancel_token)
        if request.page in self._failures:
            raise RecordStoreError("HTTP 503")
        return f"page-{request.page}"


def _controller(use_case) -> LiveTableController:
    return LiveTableController(
        use_case,
        debounce_seconds=0.01,
        logger=MagicMock(),
    )


def test_rapid_requests_collapse_into_one_fetch() -> None:
    """Requests inside the debounce window should collapse into one fetch."""
    use_case = _FakeUseCase()
    controller = _controller(use_case)

    async def _scenario():
        controller.request(TableRequest(page=1))
        controller.request(TableRequest(page=2))
        controller.request(TableRequest(page=3))
        return await controller.wait_idle()

    state = asyncio.run(_scenario())

    assert [request.page for request in use_case.calls] == [3]
    assert state.result == "page-3"
    assert not state.loading
    assert state.error is None


def test_pending_request_keeps_previous_result() -> None:
    """A pending request should keep showing the last result."""
    use_case = _FakeUseCase()
    controller = _controller(use_case)

    async def _scenario():
        controller.request(TableRequest(page=1))
        await controller.wait_idle()
        controller.request(TableRequest(page=2))
        pending = controller.state
        final = await controller.wait_idle()
        return pending, final

    pending, final = asyncio.run(_scenario())

    assert pending.loading
    assert pending.result == "page-1"
    assert final.result == "page-2"


def test_store_error_clears_result() -> None:
    """A store error should clear the table and set the error."""
    use_case = _FakeUseCase(failures={2})
    controller = _controller(use_case)

    async def _scenario():
        controller.request(TableRequest(page=1))
        await controller.wait_idle()
        controller.request(TableRequest(page=2))
        return await controller.wait_idle()

    state = asyncio.run(_scenario())

    assert state.error == "HTTP 503"
    assert state.result is None
    assert not state.loading


def test_superseded_fetch_is_cancelled_and_discarded() -> None:
    """A superseded fetch should be cancelled and its result dropped."""
    started = threading.Event()
    release = threading.Event()
    use_case = _FakeUseCase()
    original_execute = use_case.execute

    def _blocking_execute(request, cancel_token=None):
        if request.page == 1:
            started.set()
            release.wait(2)
            cancel_token.raise_if_cancelled()
        return original_execute(request, cancel_token)

    use_case.execute = _blocking_execute
    controller = _controller(use_case)

    async def _scenario():
        controller.request(TableRequest(page=1))
        await asyncio.to_thread(started.wait, 2)
        controller.request(TableRequest(page=2))
        release.set()
        return await controller.wait_idle()

    state = asyncio.run(_scenario())

    assert state.result == "page-2"
    assert [request.page for request in use_case.calls] == [2]


def test_invalid_request_sets_error_state() -> None:
    """A rejected request should end loading and clear the table."""
    use_case = _FakeUseCase()
    controller = _controller(use_case)

    def _reject(request, cancel_token=None):
        raise ValueError("Page number must be >= 1, got 0")

    async def _scenario():
        controller.request(TableRequest(page=1))
        await controller.wait_idle()
        use_case.execute = _reject
        controller.request(TableRequest(page=0))
        return await controller.wait_idle()

    state = asyncio.run(_scenario())

    assert not state.loading
    assert state.result is None
    assert state.error == "Page number must be >= 1, got 0"
