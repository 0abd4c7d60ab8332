"""Agent output panel: classified, tail-windowed output lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.panels import line, placeholder, section_title
from relentless_tui.panels.current_story import status_line
from relentless_tui.theme import BORDERS, COLORS, COMPLEXITY_BADGES, MODE_BADGES
from relentless_tui.windowing import hidden_count, tail_window

WAITING = "Waiting for agent output..."

LINE_STYLES = {
    "code": COLORS["accent"],
    "code-start": COLORS["accent"],
    "code-end": COLORS["accent"],
    "header": COLORS["primary"],
    "success": COLORS["success"],
    "error": COLORS["error"],
    "warning": COLORS["warning"],
    "normal": f"dim {COLORS['dim']}",
}

SUCCESS_MARKERS = ("success", "complete", "✓", "🎉")
ERROR_MARKERS = ("error", "Error", "failed", "❌")
WARNING_MARKERS = ("warning", "Warning", "⚠")


@dataclass(frozen=True)
class OutputLine:
    text: str
    kind: str


def classify_lines(lines: Sequence[str]) -> list[OutputLine]:
    """Tag each line; fenced blocks are tracked across the whole sequence."""
    parsed: list[OutputLine] = []
    in_code = False
    for text in lines:
        if text.startswith("```"):
            parsed.append(OutputLine(text, "code-end" if in_code else "code-start"))
            in_code = not in_code
        elif in_code:
            parsed.append(OutputLine(text, "code"))
        elif text.startswith("---") or text.startswith("==="):
            parsed.append(OutputLine(text, "header"))
        elif any(marker in text for marker in SUCCESS_MARKERS):
            parsed.append(OutputLine(text, "success"))
        elif any(marker in text for marker in ERROR_MARKERS):
            parsed.append(OutputLine(text, "error"))
        elif any(marker in text for marker in WARNING_MARKERS):
            parsed.append(OutputLine(text, "warning"))
        else:
            parsed.append(OutputLine(text, "normal"))
    return parsed


def _body_lines(ctx: RenderContext, max_lines: int) -> list[Text]:
    visible = tail_window(classify_lines(ctx.state.output_lines), max_lines)
    if not visible:
        return [placeholder(WAITING)]
    return [line(item.text, LINE_STYLES[item.kind]) for item in visible]


def _context_line(ctx: RenderContext) -> Text | None:
    state = ctx.state
    story, agent, routing = state.current_story, state.current_agent, state.routing
    if story is None and agent is None and routing is None:
        return None

    separator = f" {BORDERS['vertical']} "
    text = Text(no_wrap=True, overflow="ellipsis")
    if story is not None:
        text.append(story.id, style=f"bold {COLORS['warning']}")
        text.append(separator, style=COLORS["dim"])
    if agent is not None:
        model = f"/{routing.model}" if routing is not None and routing.model else ""
        text.append(f"{agent.name}{model}", style=COLORS["primary"])
    if routing is not None:
        mode_label, mode_style = MODE_BADGES.get(routing.mode, (routing.mode.upper(), COLORS["dim"]))
        fallback = (routing.complexity[:1].upper() or "?", COLORS["dim"])
        complexity_label, complexity_style = COMPLEXITY_BADGES.get(routing.complexity, fallback)
        text.append(separator, style=COLORS["dim"])
        text.append(mode_label, style=mode_style)
        text.append("/", style=COLORS["dim"])
        text.append(complexity_label, style=complexity_style)
    return text


def render_vertical(ctx: RenderContext) -> Panel:
    rows = ctx.plan.output_rows
    body = _body_lines(ctx, rows)
    body.extend(line() for _ in range(rows - len(body)))
    return Panel(
        Group(*body),
        title=f"[bold {COLORS['dim']}]Agent Output[/]",
        title_align="left",
        border_style=COLORS["dim"],
        padding=(0, 1),
        height=rows + 2,
    )


def render_column(ctx: RenderContext) -> Group:
    rows = ctx.plan.output_rows
    parts: list = []
    context = _context_line(ctx)
    if context is not None:
        # spinner and timers ride under the context line when a story is active
        detail = status_line(ctx) if ctx.state.current_story is not None else line()
        parts.extend([context, detail])
    parts.append(section_title("Output"))
    parts.extend(_body_lines(ctx, rows))
    above = hidden_count(ctx.state.output_lines, rows)
    if above:
        bar = BORDERS["vertical"]
        parts.append(line(f"{bar} {above} lines above {bar}", COLORS["dim"]))
    return Group(*parts)
