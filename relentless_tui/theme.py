"""Colour names and glyphs shared by every panel."""

from __future__ import annotations

COLORS = {
    "primary": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "dim": "bright_black",
    "accent": "magenta",
    "blocked": "red",
    "rate_limited": "yellow",
}

SYMBOLS = {
    "complete": "✓",
    "pending": "○",
    "in_progress": "◉",
    "pulse_off": "◎",
    "blocked": "⊘",
    "research": "🔬",
    "active": "●",
    "idle": "○",
    "arrow": "→",
    "bullet": "•",
    "lightning": "⚡",
    "clock": "⏳",
    "prompt": "❯",
    "cursor": "█",
    "more_above": "▲",
    "more_below": "▼",
    "ellipsis": "…",
}

BORDERS = {
    "horizontal": "─",
    "vertical": "│",
}

BAR_FILLED = "█"
BAR_EMPTY = "░"

MESSAGE_STYLES = {
    "command": ("yellow", ">"),
    "prompt": ("cyan", "»"),
    "system": ("bright_black", "•"),
    "info": ("blue", "i"),
    "success": ("green", "✓"),
    "error": ("red", "×"),
}

MODE_BADGES = {
    "free": ("FREE", "green"),
    "cheap": ("CHEAP", "cyan"),
    "good": ("GOOD", "yellow"),
    "genius": ("GENIUS", "magenta"),
}

COMPLEXITY_BADGES = {
    "simple": ("S", "green"),
    "medium": ("M", "yellow"),
    "complex": ("C", "red"),
    "expert": ("E", "magenta"),
}


def priority_style(priority: int) -> str:
    if priority <= 2:
        return COLORS["error"]
    if priority <= 4:
        return COLORS["warning"]
    return COLORS["dim"]


def cost_style(cost: float) -> str:
    if cost <= 0:
        return "green"
    if cost < 0.10:
        return "cyan"
    if cost < 1.00:
        return "yellow"
    return "red"
