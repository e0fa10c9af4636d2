"""Port for the paginated external record store."""

from dataclasses import dataclass, replace
from typing import Protocol

from fleet_dashboard.domain.models import GroupNode, TransactionRecord


@dataclass(frozen=True)
class RecordQuery:
    """Parameters of one store page request.

    Attributes:
        page: 1-based page number.
        limit: Maximum top-level items per page.
        search: Free-text search forwarded to the store.
        date_filter: Composite ``<start>T00:00:00,<end>T23:59:59`` value,
            or empty for no date filter.
    """

    page: int = 1
    limit: int = 50
    search: str = ""
    date_filter: str = ""

    def for_page(self, page: int) -> "RecordQuery":
        return replace(self, page=page)


@dataclass(frozen=True)
class RecordPage:
    """One page of store items and the store's total match count.

    Attributes:
        items: Mapped items of the page.
        filter_count: Total matches reported by the store, if any.
        fetched_count: Raw entries the store returned before mapping;
            defaults to ``len(items)``. Paging stops are decided on this
            count since mappers skip entries without records.
    """

    items: tuple[GroupNode | TransactionRecord, ...]
    filter_count: int | None = None
    fetched_count: int | None = None

    @property
    def size(self) -> int:
        if self.fetched_count is None:
            return len(self.items)
        return self.fetched_count


class RecordStorePort(Protocol):
    """Port exposing read access to one view's records."""

    def fetch_page(self, query: RecordQuery) -> RecordPage:
        """Return one page of nested or flat records.

        Raises:
            RecordStoreError: If the store cannot serve the request.
        """


__all__ = ["RecordQuery", "RecordPage", "RecordStorePort"]
