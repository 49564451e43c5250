"""Headline KPI derivation."""

from __future__ import annotations

from typing import Final, Sequence

from core.models import CategorySlice, KpiStats, VendorSummary

__all__ = ["NO_CATEGORY_LABEL", "MONTHS_PER_YEAR", "summarise_kpis"]

NO_CATEGORY_LABEL: Final[str] = "N/A"
MONTHS_PER_YEAR: Final[int] = 12


def summarise_kpis(
    vendor_summaries: Sequence[VendorSummary],
    categories: Sequence[CategorySlice],
    total_spend: float,
) -> KpiStats:
    alert_count = sum(1 for summary in vendor_summaries if summary.flag == "creep")
    top_category = categories[0].name if categories else NO_CATEGORY_LABEL
    # Annualised: always twelve months, however many carry spend.
    return KpiStats(
        alert_count=alert_count,
        top_category_name=top_category,
        average_monthly_spend=total_spend / MONTHS_PER_YEAR,
    )
