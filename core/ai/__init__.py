"""Assistant helpers for VendorSpend."""

from .assistant import (
    AssistantError,
    ChatMessage,
    analyze_vendor,
    ask_about_spend,
    chat,
    check_health,
    continue_vendor_chat,
    explain_price_creep,
    summarize_decision,
)

__all__ = [
    "AssistantError",
    "ChatMessage",
    "analyze_vendor",
    "ask_about_spend",
    "chat",
    "check_health",
    "continue_vendor_chat",
    "explain_price_creep",
    "summarize_decision",
]
