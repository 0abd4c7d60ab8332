"""Feature name and progress bar."""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.status import ProgressSummary, summarize_progress
from relentless_tui.theme import BAR_EMPTY, BAR_FILLED, COLORS


def progress_bar(summary: ProgressSummary) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    text.append(BAR_FILLED * summary.filled_width, style=COLORS["success"])
    text.append(BAR_EMPTY * summary.empty_width, style=COLORS["dim"])
    text.append(f" {summary.completed}/{summary.total} ({summary.percentage}%)", style=COLORS["dim"])
    return text


def render(ctx: RenderContext) -> Group:
    summary = summarize_progress(ctx.state.stories, ctx.options.bar_width)
    feature = Text("Feature: ", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
    feature.append(ctx.state.feature or "-", style="bold")
    progress = Text("Progress: ", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
    progress.append_text(progress_bar(summary))
    return Group(feature, progress)
