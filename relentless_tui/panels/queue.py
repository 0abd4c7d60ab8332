"""Message history and pending queue panel."""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from relentless_tui.context import RenderContext
from relentless_tui.formatting import format_timestamp, truncate
from relentless_tui.models import MessageItem, QueueItem
from relentless_tui.panels import line, placeholder, section_title
from relentless_tui.theme import COLORS, MESSAGE_STYLES, SYMBOLS
from relentless_tui.windowing import hidden_count, tail_window

MESSAGE_WIDTH = 25
QUEUE_ITEM_WIDTH = 40
QUEUE_EMPTY = "Queue empty"
NO_MESSAGES = "No messages yet"


def message_row(message: MessageItem, max_width: int = MESSAGE_WIDTH, full_timestamp: bool = False) -> Text:
    style, prefix = MESSAGE_STYLES.get(message.type, (COLORS["dim"], " "))
    text = Text(f"{format_timestamp(message.timestamp.astimezone(), full_timestamp)} ", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
    text.append(f"{prefix} ", style=f"bold {style}")
    text.append(truncate(message.content, max_width), style=style)
    return text


def queue_row(item: QueueItem, number: int, max_width: int = QUEUE_ITEM_WIDTH) -> Text:
    text = Text(f"{number}. ", style=COLORS["dim"], no_wrap=True, overflow="ellipsis")
    text.append(truncate(item.content, max_width), style=COLORS["warning"] if item.is_command else "")
    if item.added_at is not None:
        text.append(f" {format_timestamp(item.added_at.astimezone())}", style=COLORS["dim"])
    return text


def queue_height(ctx: RenderContext) -> int:
    items = ctx.state.queue_items
    window = ctx.options.queue_window
    return 1 + max(1, len(tail_window(items, window))) + (1 if hidden_count(items, window) else 0)


def render_queue(ctx: RenderContext) -> Group:
    items = ctx.state.queue_items
    window = ctx.options.queue_window
    header = Text(f"{SYMBOLS['bullet']} Queue", style=f"bold {COLORS['accent']}", no_wrap=True)
    if items:
        header.append(f" ({len(items)} items)", style=COLORS["dim"])
    parts: list = [header]

    visible = tail_window(items, window)
    if not visible:
        parts.append(placeholder(f"  {QUEUE_EMPTY}"))
        return Group(*parts)

    skipped = hidden_count(items, window)
    for offset, item in enumerate(visible):
        row = Text("  ", no_wrap=True)
        row.append_text(queue_row(item, skipped + offset + 1))
        parts.append(row)
    if skipped:
        parts.append(line(f"  +{skipped} more", COLORS["dim"]))
    return Group(*parts)


def render_messages(ctx: RenderContext) -> Group:
    messages = ctx.state.messages
    window = ctx.options.message_window
    header = Text("Messages", style=f"bold {COLORS['accent']}", no_wrap=True)
    if messages:
        header.append(f" ({len(messages)})", style=COLORS["dim"])
    parts: list = [header]

    older = hidden_count(messages, window)
    if older:
        parts.append(line(f"{SYMBOLS['more_above']} {older} more", COLORS["dim"]))
    visible = tail_window(messages, window)
    if visible:
        parts.extend(message_row(message) for message in visible)
    else:
        parts.append(placeholder(NO_MESSAGES))

    parts.append(line())
    queue_header = section_title("Queue")
    if ctx.state.queue_items:
        queue_header.append(f" ({len(ctx.state.queue_items)})", style=COLORS["warning"])
    parts.append(queue_header)

    items = ctx.state.queue_items
    skipped = hidden_count(items, ctx.options.queue_window)
    queued = tail_window(items, ctx.options.queue_window)
    if queued:
        parts.extend(queue_row(item, skipped + offset + 1) for offset, item in enumerate(queued))
    else:
        parts.append(placeholder("Empty"))
    if skipped:
        parts.append(line(f"+{skipped} more", COLORS["dim"]))
    parts.extend([line(), placeholder("Items sent to agent each iteration")])
    return Group(*parts)
