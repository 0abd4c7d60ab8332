"""Agent availability footer with iteration counter and next reset."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.formatting import format_reset_time
from relentless_tui.models import AgentState
from relentless_tui.status import next_reset_agent
from relentless_tui.theme import COLORS, SYMBOLS


def agent_glyph(agent: AgentState) -> tuple[str, str]:
    if agent.active:
        return SYMBOLS["active"], COLORS["success"]
    if agent.rate_limited:
        return SYMBOLS["idle"], COLORS["rate_limited"]
    return SYMBOLS["idle"], COLORS["dim"]


def render(ctx: RenderContext) -> Table:
    state = ctx.state
    agents = Text("Agents: ", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
    if not state.agents:
        agents.append("none", style=COLORS["dim"])
    for index, agent in enumerate(state.agents):
        glyph, style = agent_glyph(agent)
        if index:
            agents.append(" ")
        agents.append(f"{agent.name} ", style=COLORS["dim"])
        agents.append(glyph, style=style)

    summary = Text(f"Iteration: {state.iteration}/{state.max_iterations}", style=COLORS["dim"], no_wrap=True)
    upcoming = next_reset_agent(state.agents)
    if upcoming is not None:
        summary.append(f"  Next reset: {upcoming.name} @ {format_reset_time(upcoming.reset_time)}", style=COLORS["dim"])

    table = Table.grid(expand=True)
    table.add_column(no_wrap=True, overflow="ellipsis")
    table.add_column(justify="right", no_wrap=True)
    table.add_row(agents, summary)
    return table
