"""Current story block: id, title, working indicator and timers."""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.formatting import format_elapsed
from relentless_tui.panels import placeholder
from relentless_tui.theme import COLORS, MODE_BADGES, SYMBOLS

NO_STORY = "No story in progress"


def status_line(ctx: RenderContext) -> Text:
    state = ctx.state
    text = Text(no_wrap=True, overflow="ellipsis")
    if state.is_running:
        text.append(ctx.phase.spinner(True), style=COLORS["success"])
        text.append(" Working...", style=COLORS["success"])
    else:
        text.append(f"{ctx.phase.spinner(False)} Waiting", style=COLORS["dim"])
    text.append(
        f" [elapsed: {format_elapsed(state.elapsed_seconds)}, idle: {format_elapsed(state.idle_seconds)}]",
        style=COLORS["dim"],
    )
    return text


def height(ctx: RenderContext) -> int:
    if ctx.state.current_story is None:
        return 1
    return 3 if ctx.state.routing is not None else 2


def render(ctx: RenderContext) -> Text | Group:
    story = ctx.state.current_story
    if story is None:
        return placeholder(NO_STORY)

    heading = Text("Current Story: ", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
    heading.append(story.id, style=f"bold {COLORS['warning']}")
    heading.append(" - ", style=COLORS["dim"])
    heading.append(story.title)
    if story.criteria_count:
        heading.append(f"  {story.criteria_count} criteria", style=COLORS["dim"])
    if story.dependencies:
        heading.append(f"  after {', '.join(story.dependencies)}", style=COLORS["dim"])

    parts = [heading, status_line(ctx)]
    routing = ctx.state.routing
    if routing is not None:
        label, _ = MODE_BADGES.get(routing.mode, (routing.mode.upper(), COLORS["dim"]))
        route = Text("Routing: ", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
        route.append(f"{label.lower()}/{routing.complexity}", style=COLORS["warning"])
        route.append(f" {SYMBOLS['arrow']} ", style=COLORS["dim"])
        route.append(f"{routing.harness}/{routing.model}")
        parts.append(route)
    return Group(*parts)
