"""Composes the full-screen renderable from a snapshot, geometry and phase."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.text import Text

from relentless_tui.animation import AnimationPhase
from relentless_tui.context import RenderContext, RenderOptions
from relentless_tui.layout import compute_layout, fit_story_rows
from relentless_tui.models import DisplayState
from relentless_tui.panels import line, titled_panel
from relentless_tui.panels import agents as agents_panel
from relentless_tui.panels import current_story as current_story_panel
from relentless_tui.panels import header as header_panel
from relentless_tui.panels import output as output_panel
from relentless_tui.panels import progress as progress_panel
from relentless_tui.panels import queue as queue_panel
from relentless_tui.panels import queue_input as queue_input_panel
from relentless_tui.panels import stories as stories_panel
from relentless_tui.panels import status_bar as status_bar_panel
from relentless_tui.theme import COLORS, SYMBOLS

COMPLETE_BANNER = "All stories complete!"


def build_context(
    state: DisplayState,
    rows: int,
    columns: int,
    phase: AnimationPhase | None = None,
    options: RenderOptions | None = None,
) -> RenderContext:
    state = state if state is not None else DisplayState()
    return RenderContext(
        state=state,
        plan=compute_layout(rows, columns, len(state.stories)),
        phase=phase if phase is not None else AnimationPhase(),
        rows=rows,
        columns=columns,
        options=options if options is not None else RenderOptions(),
    )


def _notices(ctx: RenderContext) -> list[Text]:
    notices = []
    if ctx.state.error:
        notices.append(Text(f"Error: {ctx.state.error}", style=f"bold {COLORS['error']}"))
    if ctx.state.is_complete:
        notices.append(Text(f"{SYMBOLS['complete']} {COMPLETE_BANNER}", style=f"bold {COLORS['success']}"))
    return notices


# header, gaps, progress, stories title, agent footer, status bar, queue input
VERTICAL_FIXED_ROWS = 12


def _vertical_chrome_rows(ctx: RenderContext, notices: list[Text]) -> int:
    return (
        VERTICAL_FIXED_ROWS
        + ctx.plan.output_rows
        + 2
        + current_story_panel.height(ctx)
        + queue_panel.queue_height(ctx)
        + len(notices)
    )


def _vertical(ctx: RenderContext) -> Group:
    notices = _notices(ctx)
    story_rows = fit_story_rows(ctx.plan.grid_rows, ctx.rows, _vertical_chrome_rows(ctx, notices))
    return Group(
        header_panel.render_line(ctx),
        line(),
        progress_panel.render(ctx),
        line(),
        current_story_panel.render(ctx),
        output_panel.render_vertical(ctx),
        queue_panel.render_queue(ctx),
        stories_panel.render_grid(ctx, story_rows),
        line(),
        agents_panel.render(ctx),
        *notices,
        status_bar_panel.render(ctx),
        queue_input_panel.render(ctx),
    )


def _columns(ctx: RenderContext) -> Layout:
    left_ratio, center_ratio, right_ratio = ctx.plan.column_ratios
    notices = _notices(ctx)

    layout = Layout(name="root")
    layout.split_column(
        Layout(header_panel.render(ctx), name="header", size=3),
        Layout(name="body"),
        Layout(Group(*notices), name="notices", size=len(notices), visible=bool(notices)),
        Layout(status_bar_panel.render(ctx), name="status", size=1),
        Layout(queue_input_panel.render(ctx), name="input", size=3),
    )
    center = output_panel.render_column(ctx)
    layout["body"].split_row(
        Layout(titled_panel("Tasks", "tasks", stories_panel.render_tasks(ctx)), name="tasks", ratio=left_ratio),
        Layout(titled_panel("Agent", "output", center), name="output", ratio=center_ratio),
        Layout(titled_panel("Messages", "messages", queue_panel.render_messages(ctx)), name="messages", ratio=right_ratio),
    )
    return layout


def build_screen(
    state: DisplayState,
    rows: int,
    columns: int,
    phase: AnimationPhase | None = None,
    options: RenderOptions | None = None,
) -> RenderableType:
    ctx = build_context(state, rows, columns, phase, options)
    if ctx.plan.use_vertical_fallback:
        return _vertical(ctx)
    return _columns(ctx)
