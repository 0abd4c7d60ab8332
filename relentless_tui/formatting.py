"""Shared text, number and time formatting helpers for human-facing panels."""

from __future__ import annotations

from datetime import datetime, timezone

ELLIPSIS = "…"
TOKEN_THOUSAND = 1_000
TOKEN_MILLION = 1_000_000


def format_elapsed(seconds: float | int | None) -> str:
    total = max(0, int(seconds or 0))
    minutes = total // 60
    secs = total % 60
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_session_time(seconds: float | int | None) -> str:
    """Status-bar clock: ``4m 05s`` under an hour, ``1h 02m`` above."""
    total = max(0, int(seconds or 0))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    if hours > 0:
        return f"{hours}h {minutes:02d}m"
    return f"{minutes}m {secs:02d}s"


def format_tokens(tokens: float | int | None) -> str:
    count = max(0, int(tokens or 0))
    if count >= TOKEN_MILLION:
        return f"{count / TOKEN_MILLION:.1f}M"
    if count >= TOKEN_THOUSAND:
        return f"{count / TOKEN_THOUSAND:.1f}K"
    return str(count)


def format_cost(cost: float | None) -> str:
    value = float(cost or 0.0)
    if value >= 0.01:
        return f"${value:.2f}"
    if value > 0:
        return f"${value:.3f}"
    return "$0.00"


def format_countdown(remaining_seconds: float | int | None) -> str | None:
    if remaining_seconds is None:
        return None
    total = int(remaining_seconds)
    if total <= 0:
        return None
    if total >= 60:
        return f"{total // 60}m"
    return f"{total}s"


def format_timestamp(value: datetime, full: bool = False) -> str:
    if full:
        return value.strftime("%H:%M:%S")
    return value.strftime("%H:%M")


def format_reset_time(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%H:%M")


def truncate(text: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(text) > width:
        return text[: width - 1] + ELLIPSIS
    return text


def pad_column(text: str, width: int) -> str:
    return truncate(text, width).ljust(max(0, width))


def parse_iso_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
