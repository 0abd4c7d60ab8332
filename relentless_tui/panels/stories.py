"""Story rows, the two-column story grid and the scrolling task panel."""

from __future__ import annotations

from rich.console import Group
from rich.table import Table
from rich.text import Text

from relentless_tui.animation import AnimationPhase
from relentless_tui.context import RenderContext
from relentless_tui.formatting import pad_column, truncate
from relentless_tui.layout import GRID_COLUMNS
from relentless_tui.models import Story, story_index
from relentless_tui.panels import line, placeholder, section_title
from relentless_tui.status import summarize_progress
from relentless_tui.theme import COLORS, SYMBOLS, priority_style
from relentless_tui.windowing import scroll_window

GLYPH_WIDTH = 2
ID_WIDTH = 9
GRID_TITLE_WIDTH = 25
TASK_TITLE_WIDTH = 25
DEFAULT_PHASE = "Tasks"


def story_status(story: Story, is_current: bool) -> str:
    if is_current:
        return "current"
    if story.blocked:
        return "blocked"
    if story.passes:
        return "complete"
    return "pending"


def status_glyph(status: str, phase: AnimationPhase) -> tuple[str, str]:
    if status == "current":
        if phase.pulse_on:
            return SYMBOLS["in_progress"], f"bold {COLORS['warning']}"
        return SYMBOLS["pulse_off"], COLORS["warning"]
    if status == "blocked":
        return SYMBOLS["blocked"], COLORS["blocked"]
    if status == "complete":
        return SYMBOLS["complete"], COLORS["success"]
    return SYMBOLS["pending"], COLORS["dim"]


def story_row(story: Story, is_current: bool, phase: AnimationPhase, title_width: int) -> Text:
    status = story_status(story, is_current)
    glyph, glyph_style = status_glyph(status, phase)

    text = Text(no_wrap=True, overflow="ellipsis")
    text.append(pad_column(glyph, GLYPH_WIDTH), style=glyph_style)

    if story.passes:
        id_style = f"dim {COLORS['success']}"
    elif is_current:
        id_style = f"bold {COLORS['warning']}"
    else:
        id_style = ""
    text.append(pad_column(story.id, ID_WIDTH), style=id_style)

    badge_style = priority_style(story.priority)
    if story.priority <= 3:
        badge_style = f"bold {badge_style}"
    text.append(f"P{story.priority} ", style=badge_style)

    if story.passes:
        title_style = f"dim strike {COLORS['dim']}"
    elif is_current:
        title_style = COLORS["warning"]
    else:
        title_style = ""
    text.append(truncate(story.title, title_width), style=title_style)

    if story.research:
        text.append(f" {SYMBOLS['research']}", style=COLORS["dim"])
    if story.blocked and not is_current:
        text.append(f" {SYMBOLS['blocked']}", style=COLORS["blocked"])
    if story.phase:
        text.append(f" [{story.phase}]", style=f"dim {COLORS['dim']}")
    return text


def grid_rows(stories: tuple[Story, ...], max_rows: int) -> list[list[Story]]:
    """Column-major split into two columns, cut to ``max_rows`` rows."""
    per_column = -(-len(stories) // GRID_COLUMNS)
    rows = []
    for index in range(per_column):
        row = []
        for column in range(GRID_COLUMNS):
            position = column * per_column + index
            if position < len(stories):
                row.append(stories[position])
        rows.append(row)
    return rows[: max(0, max_rows)]


def render_grid(ctx: RenderContext, max_rows: int | None = None) -> Group:
    stories = ctx.state.stories
    current = ctx.current_story_id
    title = section_title(f"Stories ({len(stories)})")
    if not stories:
        return Group(title, placeholder("No stories"))

    table = Table.grid(expand=True)
    for _ in range(GRID_COLUMNS):
        table.add_column(ratio=1, no_wrap=True, overflow="ellipsis")
    limit = ctx.plan.grid_rows if max_rows is None else max_rows
    for row in grid_rows(stories, limit):
        cells = [story_row(story, story.id == current, ctx.phase, GRID_TITLE_WIDTH) for story in row]
        cells.extend(Text("") for _ in range(GRID_COLUMNS - len(cells)))
        table.add_row(*cells)
    return Group(title, table)


def group_by_phase(stories: list[Story]) -> list[tuple[str, list[Story]]]:
    groups: dict[str, list[Story]] = {}
    for story in stories:
        groups.setdefault(story.phase or DEFAULT_PHASE, []).append(story)
    return list(groups.items())


def render_tasks(ctx: RenderContext) -> Group:
    stories = ctx.state.stories
    current = ctx.current_story_id
    summary = summarize_progress(stories, ctx.options.bar_width)

    header = Text("Tasks", style=f"bold {COLORS['primary']}", no_wrap=True)
    header.append(f" ({summary.completed}/{summary.total})", style=COLORS["dim"])
    header.append(
        f" {summary.percentage}%",
        style=COLORS["success"] if summary.total and summary.percentage == 100 else COLORS["dim"],
    )
    parts: list = [header, line()]
    if not stories:
        parts.append(placeholder("No stories"))
        return Group(*parts)

    # one row per phase header on top of the stories themselves
    phase_names = {story.phase or DEFAULT_PHASE for story in stories}
    budget = max(1, ctx.plan.task_rows - 2 - len(phase_names))
    start, end = scroll_window(len(stories), story_index(stories, current), budget)
    visible = list(stories[start:end])

    if start > 0:
        parts.append(line(f"{SYMBOLS['more_above']} {start} more above", COLORS["dim"]))
    all_groups = dict(group_by_phase(list(stories)))
    for phase_name, members in group_by_phase(visible):
        done = sum(1 for story in all_groups[phase_name] if story.passes)
        phase_line = Text(f"[{phase_name}]", style=f"bold {COLORS['accent']}", no_wrap=True)
        phase_line.append(f" ({done}/{len(all_groups[phase_name])})", style=COLORS["dim"])
        parts.append(phase_line)
        parts.extend(story_row(story, story.id == current, ctx.phase, TASK_TITLE_WIDTH) for story in members)
    if end < len(stories):
        parts.append(line(f"{SYMBOLS['more_below']} {len(stories) - end} more below", COLORS["dim"]))
    return Group(*parts)
