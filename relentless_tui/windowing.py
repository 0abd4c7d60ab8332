"""Bounded views over ordered sequences (output lines, queue, messages, tasks)."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")

OUTPUT_WINDOW = 6
QUEUE_WINDOW = 3
MESSAGE_WINDOW = 10


def tail_window(items: Sequence[T] | None, max_count: int) -> list[T]:
    """Return the last ``max_count`` items, oldest first."""
    if not items or max_count <= 0:
        return []
    return list(items[-max_count:])


def hidden_count(items: Sequence[T] | None, max_count: int) -> int:
    size = len(items or ())
    return max(0, size - max(0, max_count))


def scroll_window(total: int, current_index: int | None, max_visible: int) -> tuple[int, int]:
    """Half-open ``(start, end)`` window of ``max_visible`` rows.

    The current item is kept centred where possible; near the end the window
    slides back so it stays full.
    """
    total = max(0, total)
    max_visible = max(0, max_visible)
    if total <= max_visible:
        return (0, total)

    if current_index is None or current_index < 0:
        return (0, max_visible)

    start = max(0, current_index - max_visible // 2)
    if start + max_visible > total:
        start = max(0, total - max_visible)
    return (start, min(total, start + max_visible))
