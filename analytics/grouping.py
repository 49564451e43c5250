"""Vendor and category partitioning of a transaction snapshot."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from analytics.amounts import coerce_amounts
from analytics.bucketing import month_labels, parse_dates
from core.models import TRANSACTION_FIELDS, Transaction

__all__ = [
    "prepare_transactions",
    "group_by_vendor",
    "group_by_category",
    "select_vendor",
    "vendor_names",
]


def prepare_transactions(records: Iterable[Transaction]) -> pd.DataFrame:
    """Build the analysis frame used by every aggregation stage.

    The frame keeps input order and carries the source ``Transaction`` objects
    so partitions can hand back the original records.
    """

    items = list(records)
    frame = pd.DataFrame.from_records(
        [tuple(getattr(item, name) for name in TRANSACTION_FIELDS) for item in items],
        columns=list(TRANSACTION_FIELDS),
    )
    frame = frame.astype(object)
    frame["amount"] = coerce_amounts(frame["amount"])
    frame["parsed_date"] = parse_dates(frame["date"])
    frame["month"] = month_labels(frame["parsed_date"])
    frame["transaction"] = pd.Series(items, index=frame.index, dtype=object)
    return frame


def group_by_vendor(frame: pd.DataFrame) -> dict[str, pd.DataFrame]:
    """Partition by exact ``vendor_name``, in first-appearance order."""

    return {name: group for name, group in frame.groupby("vendor_name", sort=False, dropna=False)}


def group_by_category(frame: pd.DataFrame) -> dict[str, pd.DataFrame]:
    """Partition by exact ``category``, in first-appearance order."""

    return {name: group for name, group in frame.groupby("category", sort=False, dropna=False)}


def select_vendor(frame: pd.DataFrame, vendor_name: str | None) -> pd.DataFrame:
    if vendor_name is None:
        return frame.iloc[0:0]
    return frame[frame["vendor_name"] == vendor_name]


def vendor_names(frame: pd.DataFrame) -> tuple[str, ...]:
    return tuple(sorted(str(name) for name in frame["vendor_name"].unique()))
