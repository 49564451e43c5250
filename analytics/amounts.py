"""Amount coercion and overflow-safe summation."""

from __future__ import annotations

import numpy as np
import pandas as pd

__all__ = ["coerce_amounts", "finite_sum", "finite_totals"]


def coerce_amounts(values: pd.Series) -> pd.Series:
    """Return amounts as floats; missing, non-numeric and infinite values become zero."""

    numeric = pd.to_numeric(values, errors="coerce")
    numeric = numeric.replace([np.inf, -np.inf], np.nan)
    return numeric.fillna(0.0).astype(float)


def finite_sum(values: pd.Series) -> float:
    """Sum ``values``; a total that overflows to a non-finite value becomes zero."""

    with np.errstate(over="ignore", invalid="ignore"):
        total = float(values.sum())
    return total if np.isfinite(total) else 0.0


def finite_totals(totals: pd.Series) -> pd.Series:
    """Replace non-finite grouped totals with zero, keeping index order."""

    totals = totals.astype(float)
    return totals.where(np.isfinite(totals), 0.0)
