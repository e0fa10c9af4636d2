"""Status category mapping policy."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from fleet_dashboard.domain.constants import OTHER_CATEGORY


def normalize_status(raw_status: str | None) -> str:
    """Case-fold a raw status, map underscores to spaces, squash blanks."""
    if not raw_status:
        return ""
    return " ".join(raw_status.replace("_", " ").casefold().split())


@dataclass(frozen=True)
class StatusCategoryMap:
    """Collapse raw statuses into a small closed set of categories.

    Attributes:
        table: Normalized raw status to category.
        keywords: Ordered (substring, category) fallbacks tried when the
            exact lookup misses.
        other: Category for unmapped statuses.
    """

    table: Mapping[str, str] = field(default_factory=dict)
    keywords: tuple[tuple[str, str], ...] = ()
    other: str = OTHER_CATEGORY

    def categorize(self, raw_status: str | None) -> str:
        normalized = normalize_status(raw_status)
        if not normalized:
            return self.other
        category = self.table.get(normalized)
        if category is not None:
            return category
        for keyword, keyword_category in self.keywords:
            if keyword in normalized:
                return keyword_category
        return self.other

    @property
    def categories(self) -> tuple[str, ...]:
        """Return every category this map can produce, ``other`` last."""
        seen: list[str] = []
        for category in list(self.table.values()) + [
            category for _, category in self.keywords
        ]:
            if category not in seen:
                seen.append(category)
        seen.append(self.other)
        return tuple(seen)


__all__ = ["normalize_status", "StatusCategoryMap"]
