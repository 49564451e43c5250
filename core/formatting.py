"""Formatting helpers for VendorSpend summaries."""

from __future__ import annotations

from core.models import VendorSummary

__all__ = ["format_amount", "format_compact_currency", "format_trend"]


def format_amount(value: float) -> str:
    """Plain amount text: integral values without decimals, others to cents."""

    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_compact_currency(value: float) -> str:
    """Render ``1234`` as ``$1.2K``; smaller values keep their raw form."""

    if value >= 1000:
        return f"${value / 1000:.1f}K"
    return f"${format_amount(value)}"


def format_trend(vendor: VendorSummary) -> str:
    return f"{vendor.trend_direction} {vendor.trend_label}"
