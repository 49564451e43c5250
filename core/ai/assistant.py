"""Vendor assistant backed by an OpenAI-compatible chat endpoint.

By default the client targets a local Ollama server through its OpenAI
compatible API; any endpoint speaking the chat completions protocol works.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Callable, Literal, Optional, Sequence

from openai import APIError, OpenAI

from analytics.trends import CREEP_THRESHOLD_PERCENT
from config.logging_config import get_logger
from config.settings import Settings, get_settings
from core.formatting import format_amount, format_compact_currency, format_trend
from core.models import ActionReportEntry, AggregationResult, VendorSummary
from core.report import new_entry
from prompts import get_prompt_text, render_prompt

__all__ = [
    "AssistantError",
    "ChatMessage",
    "build_vendor_analysis_prompt",
    "build_price_creep_prompt",
    "build_decision_prompt",
    "chat",
    "analyze_vendor",
    "continue_vendor_chat",
    "explain_price_creep",
    "summarize_decision",
    "check_health",
    "build_dashboard_context",
    "ask_about_spend",
]

logger = get_logger(__name__)

PROMPT_CFO = "cfo_assistant"
PROMPT_VENDOR_ANALYSIS = "vendor_analysis"
PROMPT_PRICE_CREEP = "price_creep"
PROMPT_DECISION = "decision_summary"

ClientFactory = Callable[[], OpenAI]


class AssistantError(RuntimeError):
    """Raised when the assistant cannot produce a response."""


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Literal["user", "ai", "system"]
    text: str


def _default_client_factory() -> OpenAI:
    return OpenAI(**get_settings().assistant_client_kwargs)


def _complete(
    messages: list[dict[str, str]],
    *,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    client = (client_factory or _default_client_factory)()

    logger.debug("Requesting completion from %s", settings.assistant_model)
    try:
        response = client.chat.completions.create(
            model=settings.assistant_model,
            messages=messages,
            max_tokens=settings.assistant_max_tokens,
            temperature=settings.assistant_temperature,
        )
    except APIError as exc:
        logger.error("Assistant request failed: %s", exc)
        raise AssistantError(f"Assistant API error: {exc}") from exc

    try:
        text = response.choices[0].message.content or ""
    except (AttributeError, IndexError) as exc:  # pragma: no cover - unexpected SDK output
        raise AssistantError("Unexpected response format from assistant API") from exc

    text = text.strip()
    if not text:
        raise AssistantError("Assistant response was empty")
    return text


def build_vendor_analysis_prompt(vendor: VendorSummary) -> str:
    return render_prompt(
        PROMPT_VENDOR_ANALYSIS,
        vendor=vendor.name,
        annual_total=format_amount(vendor.annual_total),
        trend=format_trend(vendor),
    )


def build_price_creep_prompt(vendor: VendorSummary) -> str:
    return render_prompt(
        PROMPT_PRICE_CREEP,
        vendor=vendor.name,
        increase=f"{abs(vendor.trend_percent):.1f}",
        current_spend=format_amount(vendor.annual_total),
    )


def build_decision_prompt(vendor_name: str, messages: Sequence[ChatMessage]) -> str:
    history = "\n".join(f"{message.role}: {message.text}" for message in messages)
    return render_prompt(PROMPT_DECISION, vendor=vendor_name, history=history)


def chat(
    message: str,
    context: str,
    *,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Answer ``message`` as the CFO assistant, grounded in ``context``."""

    user_message = f"Context about the user's data: {context}\n\nUser Question: \"{message}\""
    return _complete(
        [
            {"role": "system", "content": get_prompt_text(PROMPT_CFO)},
            {"role": "user", "content": user_message},
        ],
        client_factory=client_factory,
        settings=settings,
    )


def analyze_vendor(
    vendor: VendorSummary,
    *,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Open a vendor conversation with an impact analysis ending in a question."""

    logger.info("Analyzing vendor %s", vendor.name)
    return chat(
        "Analyze this vendor",
        build_vendor_analysis_prompt(vendor),
        client_factory=client_factory,
        settings=settings,
    )


def continue_vendor_chat(
    vendor_name: str,
    message: str,
    history: Sequence[ChatMessage],
    *,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[Settings] = None,
) -> str:
    transcript = json.dumps([asdict(item) for item in history], ensure_ascii=False)
    context = f"User discussing vendor {vendor_name}. Context: {transcript}"
    return chat(message, context, client_factory=client_factory, settings=settings)


def explain_price_creep(
    vendor: VendorSummary,
    *,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[Settings] = None,
) -> str:
    return _complete(
        [{"role": "user", "content": build_price_creep_prompt(vendor)}],
        client_factory=client_factory,
        settings=settings,
    )


def summarize_decision(
    vendor_name: str,
    messages: Sequence[ChatMessage],
    *,
    now: Optional[datetime] = None,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[Settings] = None,
) -> ActionReportEntry:
    """Condense a vendor conversation into an action report entry."""

    summary = chat(
        "Generate Report",
        build_decision_prompt(vendor_name, messages),
        client_factory=client_factory,
        settings=settings,
    )
    logger.info("Logged decision for %s", vendor_name)
    return new_entry(vendor_name, summary, now=now)


def check_health(client_factory: Optional[ClientFactory] = None) -> bool:
    """Return ``True`` when the assistant endpoint answers a model listing."""

    client = (client_factory or _default_client_factory)()
    try:
        client.models.list()
    except APIError as exc:
        logger.warning("Assistant backend offline: %s", exc)
        return False
    return True


def build_dashboard_context(result: AggregationResult) -> str:
    """Summarise headline figures so general questions can be answered."""

    kpis = result.kpis
    at_risk = [summary.name for summary in result.vendor_summaries if summary.is_at_risk]
    parts = [
        f"Total spend {format_compact_currency(result.total_spend)}",
        f"average monthly spend {format_compact_currency(kpis.average_monthly_spend)}",
        f"top category {kpis.top_category_name}",
        f"{kpis.alert_count} vendors with price creep above {CREEP_THRESHOLD_PERCENT:g}%",
    ]
    if at_risk:
        parts.append(f"at-risk vendors: {', '.join(at_risk)}")
    return "; ".join(parts) + "."


def ask_about_spend(
    question: str,
    result: AggregationResult,
    *,
    client_factory: Optional[ClientFactory] = None,
    settings: Optional[Settings] = None,
) -> str:
    return chat(question, build_dashboard_context(result), client_factory=client_factory, settings=settings)
