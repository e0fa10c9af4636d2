"""Page through a record store until the matching set is exhausted."""

from fleet_dashboard.application.cancellation import CancellationToken
from fleet_dashboard.application.ports.record_store import (
    RecordQuery,
    RecordStorePort,
)
from fleet_dashboard.domain.models import GroupNode, TransactionRecord


def collect_records(
    store: RecordStorePort,
    query: RecordQuery,
    cancel_token: CancellationToken | None = None,
    logger=None,
) -> list[GroupNode | TransactionRecord]:
    """Accumulate every page matching a query.

    Starts at page 1 and stops on an empty page, a page shorter than
    ``query.limit``, or once ``filter_count`` store entries were fetched.
    Counts use the raw page size, so entries dropped during mapping do not
    end paging early. The token is checked before each fetch.

    Args:
        store: Record store to read from.
        query: Template query; its page number is ignored.
        cancel_token: Optional token aborting the loop.
        logger: Optional logger for per-page debug output.

    Returns:
        list: Items from all pages, in store order.

    Raises:
        ValueError: If ``query.limit`` is below 1.
        OperationCancelledError: If the token is cancelled.
        RecordStoreError: If a page fetch fails.
    """
    if query.limit < 1:
        raise ValueError(f"Page size must be >= 1, got {query.limit}")
    items: list[GroupNode | TransactionRecord] = []
    fetched = 0
    page_number = 1
    while True:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        page = store.fetch_page(query.for_page(page_number))
        items.extend(page.items)
        fetched += page.size
        if logger is not None:
            logger.debug(
                f"Fetched page {page_number} with {page.size} entries"
            )
        if page.size < query.limit:
            break
        if page.filter_count is not None and fetched >= page.filter_count:
            break
        page_number += 1
    return items


__all__ = ["collect_records"]
