"""Header renderer."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.panels import border_for
from relentless_tui.theme import COLORS, SYMBOLS

AGENT_STATUS_STYLE = {
    "active": COLORS["success"],
    "limited": COLORS["warning"],
    "idle": COLORS["dim"],
}


def _agent_text(ctx: RenderContext) -> Text:
    text = Text("Agent: ", style=COLORS["dim"])
    agent = ctx.state.current_agent
    if agent is None:
        text.append("none", style=COLORS["dim"])
        return text
    status = agent.display_status
    text.append(agent.label, style=f"bold {AGENT_STATUS_STYLE[status]}")
    text.append(f" ({status})", style=COLORS["dim"])
    return text


def render_line(ctx: RenderContext) -> Table:
    title = Text(f"{SYMBOLS['lightning']} RELENTLESS", style=f"bold {COLORS['primary']}")
    title.append(" Universal AI Agent Orchestrator", style=COLORS["dim"])
    if ctx.state.project:
        title.append(f"  {ctx.state.project}", style="bold")
    if ctx.state.branch_name:
        title.append(f" ({ctx.state.branch_name})", style=COLORS["dim"])

    table = Table.grid(expand=True)
    table.add_column(no_wrap=True, overflow="ellipsis")
    table.add_column(justify="right", no_wrap=True)
    table.add_row(title, _agent_text(ctx))
    return table


def render(ctx: RenderContext) -> Panel:
    return Panel(render_line(ctx), border_style=border_for("header"), padding=(0, 1))
