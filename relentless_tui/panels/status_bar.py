"""Single-line status bar: cost, tokens, iteration, routing, limits, time."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.formatting import format_cost, format_countdown, format_session_time, format_tokens
from relentless_tui.status import completed_count, rate_limited_agents
from relentless_tui.theme import BORDERS, COLORS, COMPLEXITY_BADGES, MODE_BADGES, SYMBOLS, cost_style

SEPARATOR = f" {BORDERS['vertical']} "
COST_KEY = "cost.actual"
TOKENS_KEY = "tokens.total"


def _separator(text: Text) -> None:
    text.append(SEPARATOR, style=COLORS["dim"])


def _left(ctx: RenderContext) -> Text:
    state = ctx.state
    text = Text(no_wrap=True, overflow="ellipsis")
    if state.cost is not None:
        actual = ctx.phase.number(COST_KEY, state.cost.actual)
        text.append(format_cost(actual), style=f"bold {cost_style(state.cost.actual)}")
        if state.cost.estimated > 0:
            text.append(f" (~{format_cost(state.cost.estimated)} est)", style=COLORS["dim"])
        if state.cost.per_story > 0:
            text.append(f" {format_cost(state.cost.per_story)}/story", style=COLORS["dim"])
        _separator(text)
    if state.tokens is not None:
        total = ctx.phase.number(TOKENS_KEY, state.tokens.total_tokens)
        text.append(format_tokens(total), style=COLORS["primary"])
        tokens = state.tokens
        if tokens.input_tokens or tokens.output_tokens:
            text.append(
                f" ({format_tokens(tokens.input_tokens)} in / {format_tokens(tokens.output_tokens)} out)",
                style=COLORS["dim"],
            )
        _separator(text)
    text.append(f"{state.iteration}/{state.max_iterations}", style=COLORS["dim"])
    if state.stories:
        done = completed_count(state.stories)
        total_stories = len(state.stories)
        _separator(text)
        text.append(
            f"{done}/{total_stories}",
            style=COLORS["success"] if done == total_stories else COLORS["warning"],
        )
    return text


def _center(ctx: RenderContext) -> Text:
    routing = ctx.state.routing
    text = Text(no_wrap=True, overflow="ellipsis")
    if routing is None:
        return text
    mode_label, mode_style = MODE_BADGES.get(routing.mode, (routing.mode.upper(), COLORS["dim"]))
    text.append(mode_label, style=f"bold {mode_style}")
    if routing.complexity:
        label, style = COMPLEXITY_BADGES.get(routing.complexity, (routing.complexity[:1].upper(), COLORS["dim"]))
        text.append("/", style=COLORS["dim"])
        text.append(label, style=style)
    if routing.harness and routing.model:
        text.append(f" {SYMBOLS['arrow']} ", style=COLORS["dim"])
        text.append(routing.harness, style=COLORS["primary"])
        text.append(f"/{routing.model}", style=COLORS["dim"])
    return text


def rate_limit_badge(ctx: RenderContext, max_agents: int = 1) -> Text | None:
    limited = rate_limited_agents(ctx.state.agents)
    if not limited:
        return None
    text = Text(no_wrap=True)
    shown = 0
    for agent in limited[:max_agents]:
        remaining = format_countdown(ctx.phase.seconds_until(agent.reset_time))
        if remaining is None:
            continue
        if shown:
            text.append(" ")
        text.append(f"{agent.name[:3]}: {remaining}", style=COLORS["rate_limited"])
        shown += 1
    if len(limited) > max_agents:
        text.append(f" +{len(limited) - max_agents}", style=COLORS["dim"])
    return text if text.plain else None


def _right(ctx: RenderContext) -> Text:
    state = ctx.state
    text = Text(no_wrap=True, overflow="ellipsis")
    badge = rate_limit_badge(ctx)
    if badge is not None:
        text.append_text(badge)
        _separator(text)
    text.append(format_session_time(state.total_elapsed_seconds or state.elapsed_seconds), style=COLORS["dim"])
    if state.savings_percent is not None and state.savings_percent > 0:
        _separator(text)
        text.append(f"{state.savings_percent:g}% saved", style=COLORS["success"])
    return text


def render(ctx: RenderContext) -> Table:
    table = Table.grid(expand=True, padding=(0, 1))
    table.add_column(no_wrap=True, overflow="ellipsis")
    table.add_column(justify="center", no_wrap=True, overflow="ellipsis")
    table.add_column(justify="right", no_wrap=True)
    table.add_row(_left(ctx), _center(ctx), _right(ctx))
    return table
