"""Core domain package for the VendorSpend aggregation engine."""

from .models import (
    ActionReportEntry,
    AggregationResult,
    CategorySlice,
    KpiStats,
    MonthlyBucket,
    Transaction,
    TransactionSet,
    VendorSummary,
    VendorTrend,
)

__all__ = [
    "ActionReportEntry",
    "AggregationResult",
    "CategorySlice",
    "KpiStats",
    "MonthlyBucket",
    "Transaction",
    "TransactionSet",
    "VendorSummary",
    "VendorTrend",
]
