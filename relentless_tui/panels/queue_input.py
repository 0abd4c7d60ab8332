"""Queue input line: editable buffer in input mode, keyboard hint otherwise."""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.panels import rule
from relentless_tui.theme import COLORS, SYMBOLS

KEY_HINT = "Press 'q' to add to queue, 'd' to delete, 'D' to clear"


def input_line(value: str, cursor_visible: bool) -> Text:
    text = Text(f"{SYMBOLS['prompt']} ", style=f"bold {COLORS['accent']}", no_wrap=True, overflow="ellipsis")
    text.append(value)
    text.append(SYMBOLS["cursor"] if cursor_visible else " ", style=COLORS["accent"])
    return text


def render(ctx: RenderContext) -> Group:
    state = ctx.state
    if not state.queue_input_active:
        hint = Text(f" {KEY_HINT}", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
        if state.status_message:
            hint.append(f"  {state.status_message}", style=COLORS["warning"])
        return Group(rule(COLORS["dim"]), hint, rule(COLORS["dim"]))

    field = Text(" ", no_wrap=True, overflow="ellipsis")
    field.append_text(input_line(state.queue_input_value, ctx.phase.cursor_visible))
    return Group(rule(COLORS["accent"]), field, rule(COLORS["accent"]))
