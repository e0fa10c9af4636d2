"""Domain models for transactional records and their flattened rows."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class TransactionRecord:
    """Leaf transaction as delivered by a record store.

    Attributes:
        record_id: Stable identity of the transaction.
        status: Raw status string from the source system.
        timestamp: Instant used for date filtering.
        amounts: Amount per status bucket; single-amount views use
            the ``"amount"`` bucket.
        attributes: Extra display and search text (address, document
            number, order day).
    """

    record_id: str
    status: str = ""
    timestamp: datetime | None = None
    amounts: Mapping[str, Decimal] = field(default_factory=dict)
    attributes: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class GroupNode:
    """Nested container of groups or transactions, as received."""

    level: str
    value: str
    children: tuple["GroupNode | TransactionRecord", ...] = ()


@dataclass(frozen=True)
class FlatRow:
    """One transaction with its ancestor key chain.

    Attributes:
        record_id: Identity of the source transaction.
        levels: Grouping level names, outermost first.
        keys: Grouping values aligned with ``levels``.
        status: Raw status string.
        timestamp: Instant used for date filtering.
        amounts: Amount per status bucket.
        attributes: Extra display and search text.
        total: Sum of all bucket amounts.
        spans: Merged-cell span per span level; empty until computed.
    """

    record_id: str
    levels: tuple[str, ...]
    keys: tuple[str, ...]
    status: str = ""
    timestamp: datetime | None = None
    amounts: Mapping[str, Decimal] = field(default_factory=dict)
    attributes: Mapping[str, str] = field(default_factory=dict)
    total: Decimal = Decimal("0")
    spans: tuple[int, ...] = ()

    def key_for(self, level: str) -> str | None:
        """Return the grouping value for a level name, if present."""
        try:
            return self.keys[self.levels.index(level)]
        except ValueError:
            return None

    def value(self, name: str):
        """Resolve a field name to the row's value.

        Lookup order: grouping levels, ``status``, ``timestamp``,
        ``total``, bucket amounts, attributes.

        Args:
            name: Field name to resolve.

        Returns:
            The field value, or None when the row has no such field.
        """
        if name in self.levels:
            return self.key_for(name)
        if name == "status":
            return self.status
        if name == "timestamp":
            return self.timestamp
        if name == "total":
            return self.total
        if name in self.amounts:
            return self.amounts[name]
        return self.attributes.get(name)

    def with_spans(self, spans: tuple[int, ...]) -> "FlatRow":
        return replace(self, spans=spans)


__all__ = ["TransactionRecord", "GroupNode", "FlatRow"]
