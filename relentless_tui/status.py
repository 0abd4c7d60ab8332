"""Aggregates derived from a snapshot: progress, bar widths, next reset."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from relentless_tui.models import AgentState, Story

DEFAULT_BAR_WIDTH = 40


@dataclass(frozen=True)
class ProgressSummary:
    completed: int
    total: int
    percentage: int
    filled_width: int
    empty_width: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_completed(completed: int, total: int) -> int:
    return min(max(0, completed), max(0, total))


def progress_percentage(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return _round_half_up(_clamp_completed(completed, total) / total * 100)


def bar_widths(completed: int, total: int, bar_width: int = DEFAULT_BAR_WIDTH) -> tuple[int, int]:
    """Split ``bar_width`` into ``(filled, empty)``; the two always sum to the width."""
    width = max(0, bar_width)
    if total <= 0:
        return (0, width)
    filled = min(width, _round_half_up(_clamp_completed(completed, total) / total * width))
    return (filled, width - filled)


def completed_count(stories: Iterable[Story] | None) -> int:
    return sum(1 for story in stories or () if story.passes)


def summarize_progress(stories: Sequence[Story] | None, bar_width: int = DEFAULT_BAR_WIDTH) -> ProgressSummary:
    stories = stories or ()
    completed = completed_count(stories)
    total = len(stories)
    filled, empty = bar_widths(completed, total, bar_width)
    return ProgressSummary(
        completed=completed,
        total=total,
        percentage=progress_percentage(completed, total),
        filled_width=filled,
        empty_width=empty,
    )


def next_reset_agent(agents: Iterable[AgentState] | None) -> AgentState | None:
    """Rate-limited agent with the earliest reset time; ties go to the first name."""
    candidates = [a for a in agents or () if a.rate_limited and a.reset_time is not None]
    if not candidates:
        return None
    return min(candidates, key=lambda a: (a.reset_time.timestamp(), a.name))


def rate_limited_agents(agents: Iterable[AgentState] | None) -> list[AgentState]:
    return [a for a in agents or () if a.rate_limited]
