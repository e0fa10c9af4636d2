"""Multi-predicate row filtering."""

from collections.abc import Iterable
from dataclasses import dataclass

from fleet_dashboard.domain.constants import ALL
from fleet_dashboard.domain.models.query import FilterCriteria
from fleet_dashboard.domain.models.records import FlatRow
from fleet_dashboard.domain.policies.status_categories import (
    StatusCategoryMap,
    normalize_status,
)


@dataclass(frozen=True)
class FilterPipeline:
    """Row filter configured for one view.

    A row passes only when every active predicate accepts it. Rows whose
    normalized status is excluded, or whose category is not visible, never
    reach the predicates.

    Attributes:
        search_fields: Fields searched by the free-text predicate.
        status_map: Mapping from raw status to category.
        excluded_statuses: Normalized raw statuses dropped outright.
        visible_categories: When set, only rows in these categories pass.
    """

    search_fields: tuple[str, ...] = ()
    status_map: StatusCategoryMap | None = None
    excluded_statuses: frozenset[str] = frozenset()
    visible_categories: tuple[str, ...] = ()

    def apply(
        self,
        rows: Iterable[FlatRow],
        criteria: FilterCriteria,
    ) -> list[FlatRow]:
        """Return the rows accepted by the criteria, order preserved."""
        dimensions = criteria.active_dimensions()
        search = criteria.search.strip().casefold()
        return [
            row
            for row in rows
            if self._is_listed(row)
            and self._match_status(row, criteria)
            and self._match_date(row, criteria)
            and _match_dimensions(row, dimensions)
            and self._match_search(row, search)
        ]

    def categorize(self, row: FlatRow) -> str:
        if self.status_map is None:
            return row.status
        return self.status_map.categorize(row.status)

    def _is_listed(self, row: FlatRow) -> bool:
        if normalize_status(row.status) in self.excluded_statuses:
            return False
        if self.visible_categories:
            return self.categorize(row) in self.visible_categories
        return True

    def _match_status(self, row: FlatRow, criteria: FilterCriteria) -> bool:
        category = criteria.status_category
        if category and category != ALL:
            if self.categorize(row) != category:
                return False
        raw = criteria.raw_status
        if raw and raw != ALL:
            if normalize_status(row.status) != normalize_status(raw):
                return False
        return True

    @staticmethod
    def _match_date(row: FlatRow, criteria: FilterCriteria) -> bool:
        if criteria.date_interval is None:
            return True
        return criteria.date_interval.contains(row.timestamp)

    def _match_search(self, row: FlatRow, search: str) -> bool:
        if not search:
            return True
        for name in self.search_fields:
            value = row.value(name)
            if value is not None and search in str(value).casefold():
                return True
        return False


def _match_dimensions(row: FlatRow, dimensions: dict[str, str]) -> bool:
    for name, expected in dimensions.items():
        if row.value(name) != expected:
            return False
    return True


__all__ = ["FilterPipeline"]
