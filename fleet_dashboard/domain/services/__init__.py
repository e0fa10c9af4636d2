"""Domain services package."""

from .aggregation import (
    bucket_totals,
    count_by_category,
    count_groups,
    row_amount,
    summarize_by_group,
)
from .columns import build_columns, resolve_bucket
from .date_range import describe_period, resolve_date_range
from .delivery_buckets import classify_delivery
from .filtering import FilterPipeline
from .flattening import flatten_records, nest_flat_record
from .grouping import compute_group_spans, iter_runs
from .pagination import paginate
from .rollup import rollup_rows
from .sorting import (
    compare_text,
    compare_values,
    keeps_groups_contiguous,
    sort_rows,
    toggle_sort,
)

__all__ = [
    "bucket_totals",
    "count_by_category",
    "count_groups",
    "row_amount",
    "summarize_by_group",
    "build_columns",
    "resolve_bucket",
    "describe_period",
    "resolve_date_range",
    "classify_delivery",
    "FilterPipeline",
    "flatten_records",
    "nest_flat_record",
    "compute_group_spans",
    "iter_runs",
    "paginate",
    "rollup_rows",
    "compare_text",
    "compare_values",
    "keeps_groups_contiguous",
    "sort_rows",
    "toggle_sort",
]
