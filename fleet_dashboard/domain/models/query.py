"""Immutable query values: date interval, filter criteria and sort spec."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from enum import Enum

from fleet_dashboard.domain.constants import ALL

_DAY_START = time(0, 0, 0)
_DAY_END = time(23, 59, 59)


@dataclass(frozen=True)
class DateInterval:
    """Closed interval of whole calendar days.

    Attributes:
        start_date: First day included.
        end_date: Last day included.
        tz: Timezone of the records; aware timestamps are converted to
            it before comparison.
    """

    start_date: date
    end_date: date
    tz: tzinfo | None = None

    @property
    def start(self) -> datetime:
        return datetime.combine(self.start_date, _DAY_START, tzinfo=self.tz)

    @property
    def end(self) -> datetime:
        return datetime.combine(self.end_date, _DAY_END, tzinfo=self.tz)

    def contains(self, timestamp: datetime | date | None) -> bool:
        """Return True when the timestamp falls on a day in the interval."""
        if timestamp is None:
            return False
        if isinstance(timestamp, datetime):
            if timestamp.tzinfo is not None and self.tz is not None:
                timestamp = timestamp.astimezone(self.tz)
            day = timestamp.date()
        else:
            day = timestamp
        return self.start_date <= day <= self.end_date

    def to_filter_param(self) -> str:
        """Return the composite store parameter ``<start>,<end>``."""
        return (
            f"{self.start_date.isoformat()}T00:00:00,"
            f"{self.end_date.isoformat()}T23:59:59"
        )

    @property
    def label(self) -> str:
        if self.start_date == self.end_date:
            return self.start_date.strftime("%b %d, %Y")
        return (
            f"{self.start_date.strftime('%b %d, %Y')} - "
            f"{self.end_date.strftime('%b %d, %Y')}"
        )


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    """User-selected sort key and direction."""

    key: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class FilterCriteria:
    """AND-combined filter predicates for one query.

    Attributes:
        date_interval: Resolved interval, or None for no date filter.
        dimensions: Required value per level or attribute name; the
            ``"All"`` sentinel and empty values disable a constraint.
        search: Case-insensitive substring searched across text fields.
        status_category: Required mapped status category, if any.
        raw_status: Required raw status (normalized exact match), if any.
    """

    date_interval: DateInterval | None = None
    dimensions: Mapping[str, str] = field(default_factory=dict)
    search: str = ""
    status_category: str | None = None
    raw_status: str | None = None

    def active_dimensions(self) -> dict[str, str]:
        """Return only the dimension constraints that filter rows."""
        return {
            name: value
            for name, value in self.dimensions.items()
            if value and value != ALL
        }

    def describe(self) -> str:
        """Return a human-readable summary of the active filters."""
        parts = [
            f"{name.replace('_', ' ').title()}: {value}"
            for name, value in self.active_dimensions().items()
        ]
        if self.status_category and self.status_category != ALL:
            parts.append(f"Status: {self.status_category}")
        if self.raw_status and self.raw_status != ALL:
            parts.append(f"Status: {self.raw_status}")
        if self.search.strip():
            parts.append(f"Search: {self.search.strip()}")
        return " | ".join(parts) if parts else "No filters"


__all__ = ["DateInterval", "SortDirection", "SortSpec", "FilterCriteria"]
