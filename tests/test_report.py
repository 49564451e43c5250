from __future__ import annotations

from datetime import date, datetime

import pytest

from core.models import ActionReportEntry
from core.report import (
    EmptyReportError,
    append_entry,
    export_word_report,
    new_entry,
    reviewed_vendors,
    write_word_report,
)


@pytest.fixture()
def entries() -> tuple[ActionReportEntry, ...]:
    return (
        ActionReportEntry("Slack", "Pain Points: seats\nFinal Decision: renegotiate", "2024-07-01 09:30"),
        ActionReportEntry("AWS <prod>", "Reserve instances", "2024-07-02 10:00"),
    )


def test_new_entry_stamps_minutes():
    entry = new_entry("Slack", "Cut seats", now=datetime(2024, 7, 1, 9, 30, 45))

    assert entry == ActionReportEntry("Slack", "Cut seats", "2024-07-01 09:30")


def test_append_entry_returns_new_report(entries):
    extra = ActionReportEntry("Zoom", "Cancel", "2024-07-03 11:00")

    updated = append_entry(entries, extra)

    assert updated[-1] is extra
    assert len(entries) == 2
    assert len(updated) == 3


def test_reviewed_vendors(entries):
    assert reviewed_vendors(entries) == frozenset({"Slack", "AWS <prod>"})
    assert reviewed_vendors([]) == frozenset()


def test_export_word_report(entries):
    filename, document = export_word_report(entries, today=date(2024, 7, 4))

    assert filename == "Vendor_Decisions_Report_2024-07-04.doc"
    assert document.startswith("<html xmlns:o='urn:schemas-microsoft-com:office:office'")
    assert "Vendor Analysis Report" in document
    assert "Vendor: Slack" in document
    assert "Pain Points: seats<br/>Final Decision: renegotiate" in document
    assert "AWS &lt;prod&gt;" in document
    assert document.endswith("</body></html>")


def test_export_empty_report_raises():
    with pytest.raises(EmptyReportError, match="No actions taken yet."):
        export_word_report([])


def test_write_word_report(entries, tmp_path):
    path = write_word_report(entries, tmp_path, today=date(2024, 7, 4))

    assert path.name == "Vendor_Decisions_Report_2024-07-04.doc"
    assert "Vendor: Slack" in path.read_text(encoding="utf-8")
