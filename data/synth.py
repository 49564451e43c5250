"""Synthetic SaaS vendor spend generator.

Produces a flat ledger of vendor invoices for development and testing. Each
vendor in the catalogue bills on a fixed cadence with a steady monthly price
drift, so the generated data contains vendors whose cost creeps up, vendors
that get cheaper and vendors that stay flat.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from config.logging_config import setup_logging
from config.settings import get_settings

FIELDS: Tuple[str, ...] = (
    "vendor_name",
    "category",
    "department",
    "date",
    "amount",
)


@dataclass(frozen=True)
class VendorProfile:
    """Metadata describing a vendor used in synthetic ledgers."""

    vendor_name: str
    category: str
    department: str
    base_amount: float
    monthly_drift: float = 0.0
    billing_months: int = 1
    billing_day: int = 1


VENDOR_CATALOGUE: Sequence[VendorProfile] = (
    VendorProfile("Salesforce", "CRM", "Sales", 4200.0, 0.025, billing_day=3),
    VendorProfile("HubSpot", "Marketing", "Marketing", 1800.0, -0.01, billing_day=5),
    VendorProfile("Slack", "Collaboration", "Operations", 950.0, 0.018, billing_day=1),
    VendorProfile("Zoom", "Collaboration", "Operations", 620.0, -0.02, billing_day=12),
    VendorProfile("AWS", "Infrastructure", "Engineering", 12500.0, 0.03, billing_day=2),
    VendorProfile("Datadog", "Infrastructure", "Engineering", 3100.0, 0.022, billing_day=8),
    VendorProfile("GitHub", "Engineering Tools", "Engineering", 1400.0, 0.0, billing_day=10),
    VendorProfile("Atlassian", "Engineering Tools", "Engineering", 2100.0, 0.005, billing_day=15),
    VendorProfile("Figma", "Design", "Product", 780.0, 0.0, billing_day=20),
    VendorProfile("Workday", "HR", "People", 26000.0, 0.0, billing_months=12, billing_day=1),
    VendorProfile("DocuSign", "Legal", "Legal", 450.0, -0.015, billing_day=18),
    VendorProfile("Snowflake", "Data", "Engineering", 5400.0, 0.04, billing_day=25),
)


def generate_vendor_transactions(
    start_date: date | datetime | str = "2024-01-01",
    months: int = 12,
    *,
    vendors: Sequence[VendorProfile] = VENDOR_CATALOGUE,
    noise: float = 0.01,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Generate ``months`` months of invoices starting at ``start_date``.

    ``noise`` is the relative standard deviation applied to every invoice on
    top of the vendor's deterministic drift. The output is sorted by date and
    is identical for identical arguments when ``seed`` is set.
    """

    if months <= 0:
        raise ValueError("months must be a positive integer")
    if noise < 0:
        raise ValueError("noise must be non-negative")

    rng = np.random.default_rng(seed)
    start = _normalize_date(start_date)

    records: List[dict] = []
    for vendor in vendors:
        for offset in range(0, months, vendor.billing_months):
            anchor = _add_months(start, offset)
            invoice_date = _clamp_day(anchor.year, anchor.month, vendor.billing_day)
            drift = (1 + vendor.monthly_drift) ** offset
            jitter = 1 + rng.normal(0, noise) if noise else 1.0
            amount = max(vendor.base_amount * drift * jitter, 0.0)
            records.append(
                {
                    "vendor_name": vendor.vendor_name,
                    "category": vendor.category,
                    "department": vendor.department,
                    "date": invoice_date.isoformat(),
                    "amount": round(amount, 2),
                }
            )

    df = pd.DataFrame.from_records(records, columns=FIELDS)
    df.sort_values("date", inplace=True, kind="stable")
    df.reset_index(drop=True, inplace=True)
    return df


def write_transactions_csv(
    path: str,
    *,
    seed: Optional[int] = None,
    **kwargs,
) -> pd.DataFrame:
    """Generate synthetic data and persist it to ``path``.

    Additional keyword arguments are forwarded to
    :func:`generate_vendor_transactions`.
    """

    df = generate_vendor_transactions(seed=seed, **kwargs)
    df.to_csv(path, index=False)
    return df


def _normalize_date(value: date | datetime | str) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value)
        return parsed.date()
    raise TypeError(f"Unsupported date value: {value!r}")


def _add_months(anchor: date, months: int) -> date:
    month = anchor.month - 1 + months
    year = anchor.year + month // 12
    month = month % 12 + 1
    day = min(anchor.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _clamp_day(year: int, month: int, day: int) -> date:
    _, max_day = calendar.monthrange(year, month)
    return date(year, month, max(1, min(day, max_day)))


def main(seed: Optional[int] = 7) -> pd.DataFrame:
    """Write a sample ledger to the configured ``data_path``."""

    settings = get_settings()
    logger = setup_logging(settings.log_level)
    settings.data_path.parent.mkdir(parents=True, exist_ok=True)
    df = write_transactions_csv(str(settings.data_path), seed=seed)
    logger.info("Wrote %d synthetic transactions to %s", len(df), settings.data_path)
    return df


if __name__ == "__main__":
    main()
