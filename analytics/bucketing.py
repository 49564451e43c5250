"""Calendar-month bucketing of transaction dates."""

from __future__ import annotations

from typing import Any, Final

import pandas as pd

from analytics.amounts import finite_totals
from core.models import MonthlyBucket

__all__ = [
    "MONTHS",
    "UNKNOWN_MONTH",
    "parse_dates",
    "month_labels",
    "month_buckets",
    "month_bucket",
    "build_monthly_spend",
]

MONTHS: Final[tuple[str, ...]] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
UNKNOWN_MONTH: Final[str] = "Unknown"


def parse_dates(values: pd.Series) -> pd.Series:
    """Parse ISO-8601 date strings as UTC timestamps, ``NaT`` where invalid.

    Offsets are normalised to UTC and naive values are read as UTC, so the
    result never depends on the host locale or timezone.
    """

    is_text = values.map(lambda value: isinstance(value, str)).astype(bool)
    text = values.astype(object).where(is_text, None)
    return pd.to_datetime(text, format="ISO8601", utc=True, errors="coerce")


def month_labels(parsed: pd.Series) -> pd.Series:
    """Map parsed timestamps to month-of-year labels, ``Unknown`` for ``NaT``."""

    months = parsed.dt.month
    return months.map(lambda month: UNKNOWN_MONTH if pd.isna(month) else MONTHS[int(month) - 1]).astype(
        object
    )


def month_buckets(dates: pd.Series) -> pd.Series:
    """Return the month-of-year label for each date string, year discarded."""

    return month_labels(parse_dates(dates))


def month_bucket(value: Any) -> str:
    """Return ``Jan``..``Dec`` for a parseable date string, else ``Unknown``."""

    return str(month_buckets(pd.Series([value], dtype=object)).iat[0])


def build_monthly_spend(frame: pd.DataFrame) -> tuple[MonthlyBucket, ...]:
    """Sum ``amount`` per calendar month and emit the fixed 12-bucket series.

    Rows in the ``Unknown`` bucket are grouped like any other month but are
    not part of the returned sequence.
    """

    totals = finite_totals(frame.groupby("month", sort=False)["amount"].sum())
    return tuple(MonthlyBucket(month=month, spend=float(totals.get(month, 0.0))) for month in MONTHS)
