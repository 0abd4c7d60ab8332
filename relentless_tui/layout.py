"""Responsive layout mode selection and row budgets by terminal geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass

VERTICAL_THRESHOLD = 100
FULL_THREE_COLUMN = 120

CHROME_ROWS = 11
OUTPUT_PANEL_ROWS = 6
MIN_STORY_ROWS = 8
GRID_COLUMNS = 2

# header panel 3 + status bar 1 + queue input 3
COLUMN_CHROME_ROWS = 7
MIN_BODY_ROWS = 10

COLUMN_RATIOS = {
    "three-column": (1, 2, 1),
    "compressed": (1, 3, 1),
}


@dataclass(frozen=True)
class LayoutPlan:
    mode: str
    available_story_rows: int
    use_vertical_fallback: bool
    grid_rows_needed: int
    grid_rows: int
    body_rows: int
    task_rows: int
    output_rows: int
    column_ratios: tuple[int, int, int] | None


def select_layout_mode(width: int) -> str:
    if width < VERTICAL_THRESHOLD:
        return "vertical"
    if width < FULL_THREE_COLUMN:
        return "compressed"
    return "three-column"


def available_story_rows(terminal_rows: int) -> int:
    return max(MIN_STORY_ROWS, terminal_rows - CHROME_ROWS - OUTPUT_PANEL_ROWS)


def grid_rows_needed(story_count: int) -> int:
    return math.ceil(max(0, story_count) / GRID_COLUMNS)


def compute_layout(terminal_rows: int, terminal_columns: int, story_count: int) -> LayoutPlan:
    mode = select_layout_mode(terminal_columns)
    vertical = mode == "vertical"
    story_rows = available_story_rows(terminal_rows)
    needed = grid_rows_needed(story_count)

    body_rows = max(MIN_BODY_ROWS, terminal_rows - COLUMN_CHROME_ROWS)
    if vertical:
        output_rows = OUTPUT_PANEL_ROWS
    else:
        # borders 2, context line + gap 2, title 1, scroll hint 1
        output_rows = max(1, body_rows - 6)

    return LayoutPlan(
        mode=mode,
        available_story_rows=story_rows,
        use_vertical_fallback=vertical,
        grid_rows_needed=needed,
        grid_rows=min(needed, story_rows),
        body_rows=body_rows,
        # borders 2, title + gap 2
        task_rows=max(1, body_rows - 4),
        output_rows=output_rows,
        column_ratios=None if vertical else COLUMN_RATIOS[mode],
    )


def fit_story_rows(planned_rows: int, terminal_rows: int, chrome_rows: int) -> int:
    """Cap grid rows to what the measured chrome leaves, never below the minimum."""
    return min(planned_rows, max(MIN_STORY_ROWS, terminal_rows - chrome_rows))
