"""Roll rows sharing a key chain and an attribute into one row."""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from fleet_dashboard.domain.models.records import FlatRow

MIXED_STATUS = "Mixed"


def rollup_rows(rows: Iterable[FlatRow], attribute: str) -> list[FlatRow]:
    """Merge rows with identical keys and ``attribute`` value.

    Bucket amounts are summed, the earliest timestamp is kept and a status
    that differs between merged rows becomes ``"Mixed"``. Output keeps the
    order in which each combination first appears.

    Args:
        rows: Filtered rows.
        attribute: Attribute completing the merge key (e.g. order day).

    Returns:
        list[FlatRow]: One row per distinct (keys, attribute) pair.
    """
    merged: dict[tuple, FlatRow] = {}
    for row in rows:
        extra = row.attributes.get(attribute, "")
        merge_key = (row.keys, extra)
        current = merged.get(merge_key)
        if current is None:
            merged[merge_key] = replace(
                row,
                record_id="||".join(row.keys + (extra,)),
                amounts=dict(row.amounts),
                attributes=dict(row.attributes),
            )
            continue
        amounts = dict(current.amounts)
        for bucket, amount in row.amounts.items():
            amounts[bucket] = amounts.get(bucket, Decimal("0")) + amount
        timestamp = current.timestamp
        if row.timestamp is not None and (
            timestamp is None or row.timestamp < timestamp
        ):
            timestamp = row.timestamp
        merged[merge_key] = replace(
            current,
            status=(
                current.status
                if current.status == row.status
                else MIXED_STATUS
            ),
            timestamp=timestamp,
            amounts=amounts,
            total=current.total + row.total,
        )
    return list(merged.values())


__all__ = ["rollup_rows", "MIXED_STATUS"]
