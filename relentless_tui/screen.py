"""Compiles renderables into a fixed-size line buffer and flushes line diffs.

Every render produces the full buffer; only the terminal writer decides
which lines actually reach the terminal.
"""

from __future__ import annotations

import io
import logging
from typing import Sequence

from rich.color import ColorSystem
from rich.console import Console, RenderableType
from rich.control import Control
from rich.segment import Segment

logger = logging.getLogger(__name__)

COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


def _line_to_string(segments: Sequence[Segment], color_system: ColorSystem | None) -> str:
    parts = []
    for segment in segments:
        if segment.control:
            continue
        if segment.style is None or color_system is None:
            parts.append(segment.text)
        else:
            parts.append(segment.style.render(segment.text, color_system=color_system))
    return "".join(parts)


def compile_lines(
    renderable: RenderableType,
    rows: int,
    columns: int,
    color_system: str | None = None,
) -> list[str]:
    """Render to exactly ``rows`` strings, each padded to ``columns`` cells."""
    rows = max(1, rows)
    columns = max(1, columns)
    console = Console(
        file=io.StringIO(),
        width=columns,
        height=rows,
        color_system=color_system,
        force_terminal=color_system is not None,
        legacy_windows=False,
    )
    options = console.options.update_dimensions(columns, rows)
    lines = console.render_lines(renderable, options, pad=True)
    system = COLOR_SYSTEMS.get(color_system) if color_system else None
    return [_line_to_string(line, system) for line in lines[:rows]]


def changed_rows(previous: Sequence[str] | None, current: Sequence[str]) -> list[int]:
    if previous is None or len(previous) != len(current):
        return list(range(len(current)))
    return [index for index, (old, new) in enumerate(zip(previous, current)) if old != new]


class TerminalScreen:
    """Sole writer of the terminal; draws full buffers but flushes only diffs."""

    def __init__(self, console: Console, alt_screen: bool = True) -> None:
        self.console = console
        self.alt_screen = alt_screen
        self._previous: list[str] | None = None
        self._geometry: tuple[int, int] | None = None

    @property
    def size(self) -> tuple[int, int]:
        """``(rows, columns)`` polled from the console."""
        size = self.console.size
        return (size.height, size.width)

    @property
    def color_system(self) -> str | None:
        return self.console.color_system

    def draw(self, lines: Sequence[str], geometry: tuple[int, int] | None = None) -> int:
        if geometry is not None and geometry != self._geometry:
            self._geometry = geometry
            self._previous = None
        rows = changed_rows(self._previous, lines)
        if rows:
            out = [f"{Control.move_to(0, index)}{lines[index]}" for index in rows]
            self.console.file.write("".join(out))
            self.console.file.flush()
        self._previous = list(lines)
        return len(rows)

    def invalidate(self) -> None:
        self._previous = None

    def __enter__(self) -> "TerminalScreen":
        if self.alt_screen:
            self.console.set_alt_screen(True)
        self.console.show_cursor(False)
        logger.debug("screen acquired (alt_screen=%s)", self.alt_screen)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.console.show_cursor(True)
        if self.alt_screen:
            self.console.set_alt_screen(False)
        self._previous = None
        logger.debug("screen released")
