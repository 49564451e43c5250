"""Memoized assembly of the VendorSpend aggregation result.

The result is a pure function of three inputs: the transaction snapshot, the
vendor under analysis and the set of vendors already logged as reviewed. Each
stage is cached on only the inputs it reads, so identical inputs return the
identical result object and sub-results that do not depend on a changed
input keep their identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Final, Iterable, Mapping

from analytics.amounts import finite_sum
from analytics.bucketing import build_monthly_spend
from analytics.categorisation import rank_categories
from analytics.grouping import select_vendor, vendor_names
from analytics.kpis import summarise_kpis
from analytics.trends import build_vendor_summaries, build_vendor_trends
from config.logging_config import get_logger
from core.models import (
    AggregationResult,
    CategorySlice,
    KpiStats,
    MonthlyBucket,
    Transaction,
    TransactionSet,
    VendorSummary,
    VendorTrend,
)

__all__ = ["build_aggregation", "clear_aggregation_cache", "default_selected_vendor"]

logger = get_logger(__name__)

_CACHE_SIZE: Final[int] = 8


@dataclass(frozen=True)
class _TransactionStage:
    monthly_spend: tuple[MonthlyBucket, ...]
    categories: tuple[CategorySlice, ...]
    total_spend: float
    vendor_names: tuple[str, ...]
    vendor_trends: tuple[VendorTrend, ...]


@dataclass(frozen=True)
class _ReviewStage:
    vendor_summaries: tuple[VendorSummary, ...]
    kpis: KpiStats


@lru_cache(maxsize=_CACHE_SIZE)
def _transaction_stage(transactions: TransactionSet) -> _TransactionStage:
    logger.debug("Aggregating %d transactions", len(transactions))
    frame = transactions.frame
    return _TransactionStage(
        monthly_spend=build_monthly_spend(frame),
        categories=rank_categories(frame),
        total_spend=finite_sum(frame["amount"]),
        vendor_names=vendor_names(frame),
        vendor_trends=build_vendor_trends(frame),
    )


@lru_cache(maxsize=_CACHE_SIZE)
def _selected_vendor_stage(transactions: TransactionSet, selected_vendor: str | None) -> tuple[MonthlyBucket, ...]:
    logger.debug("Bucketing monthly spend for vendor %r", selected_vendor)
    return build_monthly_spend(select_vendor(transactions.frame, selected_vendor))


@lru_cache(maxsize=_CACHE_SIZE)
def _review_stage(transactions: TransactionSet, reviewed: frozenset[str]) -> _ReviewStage:
    logger.debug("Classifying vendors against %d reviewed names", len(reviewed))
    base = _transaction_stage(transactions)
    summaries = build_vendor_summaries(base.vendor_trends, reviewed)
    return _ReviewStage(
        vendor_summaries=summaries,
        kpis=summarise_kpis(summaries, base.categories, base.total_spend),
    )


@lru_cache(maxsize=_CACHE_SIZE)
def _aggregate(
    transactions: TransactionSet,
    selected_vendor: str | None,
    reviewed: frozenset[str],
) -> AggregationResult:
    base = _transaction_stage(transactions)
    review = _review_stage(transactions, reviewed)
    return AggregationResult(
        monthly_spend=base.monthly_spend,
        categories=base.categories,
        vendor_summaries=review.vendor_summaries,
        total_spend=base.total_spend,
        vendor_names=base.vendor_names,
        selected_vendor_monthly=_selected_vendor_stage(transactions, selected_vendor),
        kpis=review.kpis,
    )


def build_aggregation(
    transactions: TransactionSet | Iterable[Transaction | Mapping[str, Any]],
    selected_vendor: str | None = None,
    reviewed: Iterable[str] = frozenset(),
) -> AggregationResult:
    """Derive every dashboard structure from the current input snapshot.

    ``transactions`` may be a :class:`TransactionSet` or any iterable of
    transactions or mappings. ``selected_vendor`` picks the vendor whose
    monthly series is reported; ``None`` or an unknown name yields twelve
    empty buckets. ``reviewed`` holds vendor names from the action report.
    """

    snapshot = TransactionSet.from_records(transactions)
    if isinstance(reviewed, str):
        reviewed = (reviewed,)
    return _aggregate(snapshot, selected_vendor, frozenset(reviewed))


def default_selected_vendor(transactions: TransactionSet | Iterable[Transaction | Mapping[str, Any]]) -> str | None:
    """Return the vendor of the first transaction, the initial analysis target."""

    snapshot = TransactionSet.from_records(transactions)
    if not snapshot:
        return None
    return snapshot.records[0].vendor_name


def clear_aggregation_cache() -> None:
    for stage in (_aggregate, _review_stage, _selected_vendor_stage, _transaction_stage):
        stage.cache_clear()
