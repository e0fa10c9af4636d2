"""Flatten nested group trees into rows carrying their key chain."""

from collections.abc import Iterable
from decimal import Decimal

from fleet_dashboard.domain.models.records import (
    FlatRow,
    GroupNode,
    TransactionRecord,
)


def flatten_records(
    items: Iterable[GroupNode | TransactionRecord],
) -> list[FlatRow]:
    """Flatten group nodes into rows, depth-first and in source order.

    Traversal is iterative: each stack entry carries the ancestor
    (level, value) pairs accumulated on the way down, so no row holds a
    reference to its parents.

    Args:
        items: Top-level group nodes or bare transactions.

    Returns:
        list[FlatRow]: One row per transaction with its ancestor chain.
    """
    rows: list[FlatRow] = []
    stack: list[tuple[GroupNode | TransactionRecord, tuple]] = [
        (item, ()) for item in reversed(list(items))
    ]
    while stack:
        item, ancestors = stack.pop()
        if isinstance(item, TransactionRecord):
            rows.append(_to_row(item, ancestors))
            continue
        path = ancestors + ((item.level, item.value),)
        for child in reversed(item.children):
            stack.append((child, path))
    return rows


def _to_row(record: TransactionRecord, ancestors: tuple) -> FlatRow:
    amounts = dict(record.amounts)
    return FlatRow(
        record_id=record.record_id,
        levels=tuple(level for level, _ in ancestors),
        keys=tuple(value for _, value in ancestors),
        status=record.status,
        timestamp=record.timestamp,
        amounts=amounts,
        attributes=dict(record.attributes),
        total=sum(amounts.values(), Decimal("0")),
    )


def nest_flat_record(
    levels: Iterable[tuple[str, str]],
    record: TransactionRecord,
) -> GroupNode | TransactionRecord:
    """Wrap a flat record in single-child nodes for the given chain."""
    node: GroupNode | TransactionRecord = record
    for level, value in reversed(list(levels)):
        node = GroupNode(level=level, value=value, children=(node,))
    return node


__all__ = ["flatten_records", "nest_flat_record"]
