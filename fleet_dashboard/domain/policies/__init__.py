"""Domain policies package."""

from .status_categories import StatusCategoryMap, normalize_status

__all__ = ["StatusCategoryMap", "normalize_status"]
