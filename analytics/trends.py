"""Per-vendor spend trend and risk classification."""

from __future__ import annotations

import math
from typing import AbstractSet, Final

import pandas as pd

from analytics.amounts import finite_sum
from analytics.grouping import group_by_vendor
from core.models import TrendDirection, VendorFlag, VendorSummary, VendorTrend

__all__ = [
    "CREEP_THRESHOLD_PERCENT",
    "compute_trend",
    "classify_vendor",
    "build_vendor_trends",
    "build_vendor_summaries",
]

CREEP_THRESHOLD_PERCENT: Final[float] = 15.0


def compute_trend(transactions: pd.DataFrame) -> tuple[float, TrendDirection]:
    """Percent change from the earliest to the latest transaction amount.

    Rows are ordered by parsed date (stable, unparsable dates last). A zero
    starting amount yields a flat trend instead of a division by zero. Only a
    strictly positive change counts as ``up``.
    """

    if transactions.empty:
        return 0.0, "down"

    ordered = transactions.sort_values("parsed_date", kind="stable", na_position="last")
    first = float(ordered["amount"].iloc[0])
    last = float(ordered["amount"].iloc[-1])

    if first == 0:
        trend = 0.0
    else:
        trend = (last - first) / first * 100
    if not math.isfinite(trend):
        trend = 0.0

    return trend, "up" if trend > 0 else "down"


def classify_vendor(name: str, trend_percent: float, reviewed: AbstractSet[str]) -> VendorFlag:
    if name in reviewed:
        return "reviewed"
    if trend_percent > CREEP_THRESHOLD_PERCENT:
        return "creep"
    return "none"


def build_vendor_trends(frame: pd.DataFrame) -> tuple[VendorTrend, ...]:
    """Roll each vendor partition up into totals, first-seen labels and trend."""

    trends: list[VendorTrend] = []
    for name, group in group_by_vendor(frame).items():
        first_row = group.iloc[0]
        trend_percent, direction = compute_trend(group)
        trends.append(
            VendorTrend(
                name=name,
                annual_total=finite_sum(group["amount"]),
                category=first_row["category"],
                department=first_row["department"],
                trend_percent=trend_percent,
                trend_direction=direction,
                transactions=tuple(group["transaction"]),
            )
        )
    return tuple(trends)


def build_vendor_summaries(
    trends: tuple[VendorTrend, ...],
    reviewed: AbstractSet[str],
) -> tuple[VendorSummary, ...]:
    """Attach review flags and order vendors by annual spend, largest first."""

    summaries = [
        VendorSummary(
            name=trend.name,
            annual_total=trend.annual_total,
            category=trend.category,
            department=trend.department,
            trend_percent=trend.trend_percent,
            trend_direction=trend.trend_direction,
            flag=classify_vendor(trend.name, trend.trend_percent, reviewed),
            transactions=trend.transactions,
        )
        for trend in trends
    ]
    summaries.sort(key=lambda summary: summary.annual_total, reverse=True)
    return tuple(summaries)
