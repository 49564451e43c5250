"""Shared data model definitions for the VendorSpend aggregation engine."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any, Iterable, Literal, Mapping

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    import pandas as pd

TrendDirection = Literal["up", "down"]
VendorFlag = Literal["none", "creep", "reviewed"]

TRANSACTION_FIELDS: tuple[str, ...] = (
    "vendor_name",
    "category",
    "department",
    "date",
    "amount",
)


@dataclass(frozen=True)
class Transaction:
    """A single immutable spend record as supplied by the loader."""

    vendor_name: str
    category: str
    department: str
    date: str
    amount: Any

    def __post_init__(self) -> None:
        # Missing or non-finite numbers are stored as None so equal records compare equal.
        for name in TRANSACTION_FIELDS:
            value = getattr(self, name)
            if isinstance(value, numbers.Real) and not math.isfinite(value):
                object.__setattr__(self, name, None)

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "Transaction":
        return cls(
            vendor_name=record.get("vendor_name"),
            category=record.get("category"),
            department=record.get("department"),
            date=record.get("date"),
            amount=record.get("amount"),
        )


@dataclass(frozen=True)
class TransactionSet:
    """Ordered, value-comparable snapshot of the transactions under analysis.

    Two sets holding equal records compare (and hash) equal, which is what the
    aggregation service keys its caches on. The pandas view is built lazily
    and reused for the lifetime of the snapshot.
    """

    records: tuple[Transaction, ...] = ()

    @classmethod
    def from_records(cls, records: Iterable[Transaction | Mapping[str, Any]]) -> "TransactionSet":
        if isinstance(records, TransactionSet):
            return records
        items = tuple(
            record if isinstance(record, Transaction) else Transaction.from_mapping(record)
            for record in records
        )
        return cls(items)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)

    @cached_property
    def frame(self) -> "pd.DataFrame":
        from analytics.grouping import prepare_transactions

        return prepare_transactions(self.records)


@dataclass(frozen=True)
class MonthlyBucket:
    month: str
    spend: float


@dataclass(frozen=True)
class CategorySlice:
    name: str
    total_value: float
    color_index: int
    color: str


@dataclass(frozen=True)
class VendorTrend:
    """Review-independent per-vendor roll-up shared across classifications."""

    name: str
    annual_total: float
    category: str
    department: str
    trend_percent: float
    trend_direction: TrendDirection
    transactions: tuple[Transaction, ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class VendorSummary:
    """Per-vendor spend roll-up with trend and review classification."""

    name: str
    annual_total: float
    category: str
    department: str
    trend_percent: float
    trend_direction: TrendDirection
    flag: VendorFlag
    transactions: tuple[Transaction, ...] = field(default=(), repr=False)

    @property
    def trend_label(self) -> str:
        return f"{abs(self.trend_percent):.1f}%"

    @property
    def is_at_risk(self) -> bool:
        return self.flag == "creep"


@dataclass(frozen=True)
class KpiStats:
    alert_count: int
    top_category_name: str
    average_monthly_spend: float


@dataclass(frozen=True)
class AggregationResult:
    """Everything the spend dashboard renders, derived in one pass."""

    monthly_spend: tuple[MonthlyBucket, ...]
    categories: tuple[CategorySlice, ...]
    vendor_summaries: tuple[VendorSummary, ...]
    total_spend: float
    vendor_names: tuple[str, ...]
    selected_vendor_monthly: tuple[MonthlyBucket, ...]
    kpis: KpiStats


@dataclass(frozen=True)
class ActionReportEntry:
    """A human decision logged against a vendor after review."""

    vendor: str
    summary: str
    date: str


__all__ = [
    "TRANSACTION_FIELDS",
    "TrendDirection",
    "VendorFlag",
    "Transaction",
    "TransactionSet",
    "MonthlyBucket",
    "CategorySlice",
    "VendorTrend",
    "VendorSummary",
    "KpiStats",
    "AggregationResult",
    "ActionReportEntry",
]
