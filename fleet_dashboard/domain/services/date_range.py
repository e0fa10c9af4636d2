"""Resolve named date ranges into concrete day intervals."""

from calendar import monthrange
from datetime import date, datetime, timedelta, tzinfo

from fleet_dashboard.domain.models.query import DateInterval


def _to_date(value: date | str | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def resolve_date_range(
    range_id: str | None,
    reference: datetime | date,
    custom_start: date | str | None = None,
    custom_end: date | str | None = None,
    tz: tzinfo | None = None,
) -> DateInterval | None:
    """Turn a named range into a closed interval of whole days.

    The reference instant is injected so results never depend on the
    wall clock. ``this-week`` runs Monday to Sunday of the reference's ISO
    week. ``custom`` needs both bounds; a missing or unparseable bound,
    like an unknown range id, means no date filter.

    Args:
        range_id: One of yesterday, today, tomorrow, this-week,
            this-month, this-year or custom.
        reference: The "now" used to anchor relative ranges.
        custom_start: First day for the custom range.
        custom_end: Last day for the custom range.
        tz: Records' timezone; defaults to the reference's tzinfo.

    Returns:
        DateInterval | None: The interval, or None for no date filter.
    """
    if isinstance(reference, datetime):
        zone = tz or reference.tzinfo
        if zone is not None and reference.tzinfo is not None:
            reference = reference.astimezone(zone)
        today = reference.date()
    else:
        zone = tz
        today = reference

    normalized = (range_id or "").strip().lower()
    if normalized == "today":
        return DateInterval(today, today, zone)
    if normalized == "yesterday":
        day = today - timedelta(days=1)
        return DateInterval(day, day, zone)
    if normalized == "tomorrow":
        day = today + timedelta(days=1)
        return DateInterval(day, day, zone)
    if normalized == "this-week":
        monday = today - timedelta(days=today.weekday())
        return DateInterval(monday, monday + timedelta(days=6), zone)
    if normalized == "this-month":
        last_day = monthrange(today.year, today.month)[1]
        return DateInterval(
            date(today.year, today.month, 1),
            date(today.year, today.month, last_day),
            zone,
        )
    if normalized == "this-year":
        return DateInterval(
            date(today.year, 1, 1),
            date(today.year, 12, 31),
            zone,
        )
    if normalized == "custom":
        start = _to_date(custom_start)
        end = _to_date(custom_end)
        if start is None or end is None:
            return None
        return DateInterval(start, end, zone)
    return None


def describe_period(
    range_id: str | None,
    interval: DateInterval | None,
) -> str:
    """Return the period label printed on reports."""
    if interval is None:
        return "All dates"
    name = (range_id or "custom").replace("-", " ").title()
    return f"{name} ({interval.label})"


__all__ = ["resolve_date_range", "describe_period"]
