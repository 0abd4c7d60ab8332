"""Panel rendering helpers."""

from __future__ import annotations

from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from relentless_tui.theme import BORDERS, COLORS

PANEL_BORDER = {
    "tasks": "cyan",
    "output": "white",
    "messages": "magenta",
    "header": "cyan",
}


def border_for(key: str) -> str:
    return PANEL_BORDER.get(key, "cyan")


def placeholder(message: str) -> Text:
    return Text(message, style=f"dim {COLORS['dim']}", no_wrap=True, overflow="ellipsis")


def section_title(title: str, style: str = COLORS["dim"]) -> Text:
    rule = BORDERS["horizontal"] * 2
    return Text(f"{rule} {title} {rule}", style=f"bold {style}", no_wrap=True)


def line(text: str = "", style: str = "") -> Text:
    return Text(text, style=style, no_wrap=True, overflow="ellipsis")


def titled_panel(title: str, key: str, body, height: int | None = None) -> Panel:
    return Panel(
        body,
        title=f"[bold]{title}[/bold]",
        title_align="left",
        border_style=border_for(key),
        padding=(0, 1),
        height=height,
    )


def rule(style: str) -> Rule:
    return Rule(characters=BORDERS["horizontal"], style=style)
