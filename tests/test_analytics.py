"""Unit tests for the bucketing, grouping, trend and ranking helpers."""

from __future__ import annotations

import pandas as pd
import pytest

from analytics.bucketing import MONTHS, UNKNOWN_MONTH, build_monthly_spend, month_bucket
from analytics.categorisation import CATEGORY_PALETTE, palette_color, rank_categories
from analytics.grouping import group_by_category, group_by_vendor, prepare_transactions, select_vendor
from analytics.kpis import summarise_kpis
from analytics.trends import build_vendor_summaries, build_vendor_trends, classify_vendor, compute_trend
from core.models import CategorySlice, TransactionSet, VendorSummary


def frame_for(records: list[dict]) -> pd.DataFrame:
    return prepare_transactions(TransactionSet.from_records(records).records)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-15", "Jan"),
        ("2023-12-31", "Dec"),
        ("2024-06-01T10:30:00Z", "Jun"),
        ("2024-01-31T23:30:00-02:00", "Feb"),
        ("", UNKNOWN_MONTH),
        ("not a date", UNKNOWN_MONTH),
        (None, UNKNOWN_MONTH),
    ],
)
def test_month_bucket(value, expected):
    assert month_bucket(value) == expected


def test_monthly_spend_collapses_years_and_drops_unknown(make_txn):
    frame = frame_for(
        [
            make_txn("A", "2023-03-01", 10.0),
            make_txn("A", "2024-03-15", 5.0),
            make_txn("B", "2024-11-02", 7.5),
            make_txn("B", "garbage", 99.0),
        ]
    )

    buckets = build_monthly_spend(frame)

    assert [bucket.month for bucket in buckets] == list(MONTHS)
    spend = {bucket.month: bucket.spend for bucket in buckets}
    assert spend["Mar"] == pytest.approx(15.0)
    assert spend["Nov"] == pytest.approx(7.5)
    assert sum(spend.values()) == pytest.approx(22.5)
    assert spend["Jan"] == 0.0


def test_prepare_transactions_coerces_bad_amounts_to_zero(make_txn):
    frame = frame_for(
        [
            make_txn("A", "2024-01-01", "abc"),
            make_txn("A", "2024-01-02", None),
            make_txn("A", "2024-01-03", float("inf")),
            make_txn("A", "2024-01-04", 12.5),
        ]
    )

    assert frame["amount"].tolist() == [0.0, 0.0, 0.0, 12.5]


def test_grouping_is_exact_and_keeps_first_appearance_order(make_txn):
    frame = frame_for(
        [
            make_txn("slack", "2024-01-01", 1.0, "Chat"),
            make_txn("Slack", "2024-01-02", 2.0, "Chat"),
            make_txn("AWS", "2024-01-03", 3.0, "Cloud"),
            make_txn("Slack", "2024-01-04", 4.0, "Chat"),
        ]
    )

    vendors = group_by_vendor(frame)
    categories = group_by_category(frame)

    assert list(vendors) == ["slack", "Slack", "AWS"]
    assert vendors["Slack"]["amount"].tolist() == [2.0, 4.0]
    assert list(categories) == ["Chat", "Cloud"]
    assert len(categories["Chat"]) == 3


def test_select_vendor_handles_missing_and_none(make_txn):
    frame = frame_for([make_txn("A", "2024-01-01", 1.0)])

    assert select_vendor(frame, "Nope").empty
    assert select_vendor(frame, None).empty
    assert len(select_vendor(frame, "A")) == 1


def test_compute_trend_uses_first_and_last_by_date(make_txn):
    frame = frame_for(
        [
            make_txn("A", "2024-06-01", 150.0),
            make_txn("A", "2024-03-01", 999.0),
            make_txn("A", "2024-01-01", 100.0),
        ]
    )

    trend, direction = compute_trend(frame)

    assert trend == pytest.approx(50.0)
    assert direction == "up"


def test_compute_trend_parses_dates_rather_than_comparing_text(make_txn):
    frame = frame_for(
        [
            make_txn("A", "2024-01-01T23:00:00-05:00", 200.0),
            make_txn("A", "2024-01-02T01:00:00Z", 100.0),
        ]
    )

    trend, _ = compute_trend(frame)

    assert trend == pytest.approx(100.0)


def test_compute_trend_zero_first_amount_is_flat(make_txn):
    frame = frame_for([make_txn("A", "2024-01-01", 0), make_txn("A", "2024-02-01", 200.0)])

    trend, direction = compute_trend(frame)

    assert trend == 0.0
    assert direction == "down"


def test_compute_trend_single_and_empty_partitions(make_txn):
    single = frame_for([make_txn("A", "2024-01-01", 80.0)])

    assert compute_trend(single) == (0.0, "down")
    assert compute_trend(single.iloc[0:0]) == (0.0, "down")


def test_compute_trend_decline_is_negative(make_txn):
    frame = frame_for([make_txn("A", "2024-01-01", 100.0), make_txn("A", "2024-02-01", 60.0)])

    trend, direction = compute_trend(frame)

    assert trend == pytest.approx(-40.0)
    assert direction == "down"


@pytest.mark.parametrize(
    ("trend", "reviewed", "expected"),
    [
        (20.0, frozenset(), "creep"),
        (20.0, frozenset({"Acme"}), "reviewed"),
        (15.0, frozenset(), "none"),
        (-40.0, frozenset(), "none"),
        (-40.0, frozenset({"Acme"}), "reviewed"),
    ],
)
def test_classify_vendor(trend, reviewed, expected):
    assert classify_vendor("Acme", trend, reviewed) == expected


def test_vendor_summaries_first_wins_labels_and_order(make_txn):
    frame = frame_for(
        [
            make_txn("Small", "2024-01-01", 10.0, "Tools", "Ops"),
            make_txn("Big", "2024-01-01", 100.0, "Cloud", "Eng"),
            make_txn("Big", "2024-02-01", 130.0, "Other", "Finance"),
        ]
    )

    summaries = build_vendor_summaries(build_vendor_trends(frame), frozenset())

    assert [summary.name for summary in summaries] == ["Big", "Small"]
    big = summaries[0]
    assert big.annual_total == pytest.approx(230.0)
    assert (big.category, big.department) == ("Cloud", "Eng")
    assert big.trend_percent == pytest.approx(30.0)
    assert big.trend_label == "30.0%"
    assert big.flag == "creep"
    assert [t.amount for t in big.transactions] == [100.0, 130.0]


def test_rank_categories_top_five_with_palette(make_txn):
    totals = {"A": 500, "B": 900, "C": 100, "D": 700, "E": 300, "F": 50}
    frame = frame_for([make_txn(f"v{name}", "2024-01-01", value, name) for name, value in totals.items()])

    ranked = rank_categories(frame)

    assert [item.name for item in ranked] == ["B", "D", "A", "E", "C"]
    assert [item.total_value for item in ranked] == [900.0, 700.0, 500.0, 300.0, 100.0]
    assert [item.color_index for item in ranked] == [0, 1, 2, 3, 4]
    assert [item.color for item in ranked] == list(CATEGORY_PALETTE[:5])


def test_rank_categories_ties_keep_input_order(make_txn):
    frame = frame_for(
        [
            make_txn("a", "2024-01-01", 50.0, "Zeta"),
            make_txn("b", "2024-01-01", 50.0, "Alpha"),
            make_txn("c", "2024-01-01", 80.0, "Mid"),
        ]
    )

    assert [item.name for item in rank_categories(frame)] == ["Mid", "Zeta", "Alpha"]


def test_palette_wraps_by_rank():
    assert palette_color(0) == CATEGORY_PALETTE[0]
    assert palette_color(5) == CATEGORY_PALETTE[5]
    assert palette_color(6) == CATEGORY_PALETTE[0]
    assert palette_color(13) == CATEGORY_PALETTE[1]


def test_summarise_kpis():
    summaries = [
        VendorSummary("A", 10.0, "x", "y", 20.0, "up", "creep"),
        VendorSummary("B", 10.0, "x", "y", 30.0, "up", "reviewed"),
        VendorSummary("C", 10.0, "x", "y", -5.0, "down", "none"),
    ]
    categories = [CategorySlice("Cloud", 30.0, 0, CATEGORY_PALETTE[0])]

    kpis = summarise_kpis(summaries, categories, 30.0)

    assert kpis.alert_count == 1
    assert kpis.top_category_name == "Cloud"
    assert kpis.average_monthly_spend == 30.0 / 12


def test_summarise_kpis_without_categories():
    kpis = summarise_kpis([], [], 0.0)

    assert kpis.top_category_name == "N/A"
    assert kpis.alert_count == 0
    assert kpis.average_monthly_spend == 0.0
