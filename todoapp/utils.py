"""
Small parsing helpers shared by the Telegram handlers.
"""
from __future__ import annotations

from typing import Optional


def command_args(text: Optional[str]) -> str:
    """'/add buy milk' -> 'buy milk'; '' when the command has no arguments."""
    text = (text or "").strip()
    if not text:
        return ""
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def parse_int_safe(value: str, default: Optional[int] = None) -> Optional[int]:
    """Safely parse integer, returns default on error."""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default
