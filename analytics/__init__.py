"""Aggregation helpers behind the VendorSpend dashboard."""

from analytics.amounts import coerce_amounts, finite_sum, finite_totals
from analytics.bucketing import (
    MONTHS,
    UNKNOWN_MONTH,
    build_monthly_spend,
    month_bucket,
    month_buckets,
    month_labels,
    parse_dates,
)
from analytics.categorisation import (
    CATEGORY_PALETTE,
    TOP_CATEGORY_COUNT,
    compute_category_totals,
    palette_color,
    palette_index,
    rank_categories,
)
from analytics.grouping import (
    group_by_category,
    group_by_vendor,
    prepare_transactions,
    select_vendor,
    vendor_names,
)
from analytics.kpis import NO_CATEGORY_LABEL, summarise_kpis
from analytics.trends import (
    CREEP_THRESHOLD_PERCENT,
    build_vendor_summaries,
    build_vendor_trends,
    classify_vendor,
    compute_trend,
)

__all__ = [
    "MONTHS",
    "UNKNOWN_MONTH",
    "build_monthly_spend",
    "month_bucket",
    "month_buckets",
    "month_labels",
    "parse_dates",
    "CATEGORY_PALETTE",
    "TOP_CATEGORY_COUNT",
    "compute_category_totals",
    "palette_color",
    "palette_index",
    "rank_categories",
    "coerce_amounts",
    "finite_sum",
    "finite_totals",
    "group_by_category",
    "group_by_vendor",
    "prepare_transactions",
    "select_vendor",
    "vendor_names",
    "NO_CATEGORY_LABEL",
    "summarise_kpis",
    "CREEP_THRESHOLD_PERCENT",
    "build_vendor_summaries",
    "build_vendor_trends",
    "classify_vendor",
    "compute_trend",
]
