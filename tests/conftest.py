from __future__ import annotations

import sys
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import get_settings  # noqa: E402
from core.summary_service import clear_aggregation_cache  # noqa: E402


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def fresh_aggregation_cache():
    clear_aggregation_cache()
    yield
    clear_aggregation_cache()


def txn(vendor: str, date: str, amount, category: str = "Software", department: str = "Engineering") -> dict:
    return {
        "vendor_name": vendor,
        "category": category,
        "department": department,
        "date": date,
        "amount": amount,
    }


@pytest.fixture()
def sample_records() -> list[dict]:
    return [
        txn("Slack", "2024-01-05", 100.0, "Collaboration", "Operations"),
        txn("AWS", "2024-01-10", 1000.0, "Infrastructure"),
        txn("Slack", "2024-06-05", 150.0, "Collaboration", "Operations"),
        txn("Zoom", "2024-02-01", 200.0, "Collaboration", "Operations"),
        txn("AWS", "2024-03-10", 900.0, "Infrastructure"),
        txn("Zoom", "2024-08-01", 120.0, "Collaboration", "Operations"),
        txn("Figma", "not-a-date", 50.0, "Design", "Product"),
    ]


@pytest.fixture()
def make_txn():
    return txn
