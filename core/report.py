"""Action report handling: reviewed-vendor derivation and Word export."""

from __future__ import annotations

from datetime import date, datetime
from html import escape
from pathlib import Path
from typing import Iterable, Optional, Sequence

from config.logging_config import get_logger
from core.models import ActionReportEntry

__all__ = [
    "EmptyReportError",
    "ENTRY_DATE_FORMAT",
    "new_entry",
    "append_entry",
    "reviewed_vendors",
    "report_filename",
    "export_word_report",
    "write_word_report",
]

logger = get_logger(__name__)

ENTRY_DATE_FORMAT = "%Y-%m-%d %H:%M"

_DOCUMENT_HEADER = (
    "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
    "xmlns:w='urn:schemas-microsoft-com:office:word' "
    "xmlns='http://www.w3.org/TR/REC-html40'>"
    "<head><meta charset='utf-8'><title>Vendor Report</title></head><body>"
)
_DOCUMENT_TITLE = "<h1 style='font-size:24px; color:#0F172A;'>Vendor Analysis Report</h1><br/>"
_DOCUMENT_FOOTER = "</body></html>"
_ENTRY_TEMPLATE = (
    '<div style="border:1px solid #E2E8F0; padding:20px; background-color:#F8FAFC;">'
    '<h2 style="color:#2563EB; margin-top:0;">Vendor: {vendor}</h2>'
    '<p style="color:#64748B; font-size:12px;"><strong>Date:</strong> {date}</p>'
    '<hr style="border:0; border-top:1px solid #CBD5E1; margin: 15px 0;" />'
    '<div style="font-family: Arial, sans-serif; line-height: 1.6;">{summary}</div>'
    "</div><br/><br/>"
    '<div style="width:100%; border-bottom: 3px double #000; margin: 20px 0;"></div><br/><br/>'
)


class EmptyReportError(ValueError):
    """Raised when exporting an action report with no entries."""


def new_entry(vendor: str, summary: str, now: Optional[datetime] = None) -> ActionReportEntry:
    stamp = (now or datetime.now()).strftime(ENTRY_DATE_FORMAT)
    return ActionReportEntry(vendor=vendor, summary=summary, date=stamp)


def append_entry(
    entries: Sequence[ActionReportEntry],
    entry: ActionReportEntry,
) -> tuple[ActionReportEntry, ...]:
    """Return a new report with ``entry`` appended; ``entries`` is untouched."""

    return (*entries, entry)


def reviewed_vendors(entries: Iterable[ActionReportEntry]) -> frozenset[str]:
    """Vendor names already carrying a logged decision."""

    return frozenset(entry.vendor for entry in entries)


def report_filename(today: Optional[date] = None) -> str:
    day = today or date.today()
    return f"Vendor_Decisions_Report_{day.strftime('%Y-%m-%d')}.doc"


def export_word_report(
    entries: Sequence[ActionReportEntry],
    today: Optional[date] = None,
) -> tuple[str, str]:
    """Render the action report as Word-compatible HTML.

    Returns the suggested file name and the document body.
    """

    if not entries:
        raise EmptyReportError("No actions taken yet.")

    blocks = [
        _ENTRY_TEMPLATE.format(
            vendor=escape(entry.vendor),
            date=escape(entry.date),
            summary=escape(entry.summary).replace("\n", "<br/>"),
        )
        for entry in entries
    ]
    document = _DOCUMENT_HEADER + _DOCUMENT_TITLE + "".join(blocks) + _DOCUMENT_FOOTER
    return report_filename(today), document


def write_word_report(
    entries: Sequence[ActionReportEntry],
    directory: str | Path,
    today: Optional[date] = None,
) -> Path:
    filename, document = export_word_report(entries, today=today)
    path = Path(directory) / filename
    path.write_text(document, encoding="utf-8")
    logger.info("Wrote action report with %d entries to %s", len(entries), path)
    return path
