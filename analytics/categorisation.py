"""Category ranking and palette assignment."""

from __future__ import annotations

from typing import Final

import pandas as pd

from analytics.amounts import finite_totals
from core.models import CategorySlice

__all__ = [
    "CATEGORY_PALETTE",
    "TOP_CATEGORY_COUNT",
    "palette_index",
    "palette_color",
    "compute_category_totals",
    "rank_categories",
]

CATEGORY_PALETTE: Final[tuple[str, ...]] = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#EC4899",
)
TOP_CATEGORY_COUNT: Final[int] = 5


def palette_index(rank: int) -> int:
    return rank % len(CATEGORY_PALETTE)


def palette_color(rank: int) -> str:
    """Return the display colour for a zero-based category rank."""

    return CATEGORY_PALETTE[palette_index(rank)]


def compute_category_totals(frame: pd.DataFrame) -> pd.Series:
    """Total ``amount`` per category, in first-appearance order."""

    return finite_totals(frame.groupby("category", sort=False, dropna=False)["amount"].sum())


def rank_categories(frame: pd.DataFrame, limit: int = TOP_CATEGORY_COUNT) -> tuple[CategorySlice, ...]:
    """Return the top ``limit`` categories by total spend, largest first.

    Ties keep first-appearance order.
    """

    totals = compute_category_totals(frame)
    ranked = totals.sort_values(ascending=False, kind="stable").head(limit)
    return tuple(
        CategorySlice(
            name=str(name),
            total_value=float(value),
            color_index=palette_index(rank),
            color=palette_color(rank),
        )
        for rank, (name, value) in enumerate(ranked.items())
    )
