"""The single immutable object passed down the panel composition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from relentless_tui.animation import AnimationPhase
from relentless_tui.layout import LayoutPlan
from relentless_tui.models import DisplayState
from relentless_tui.status import DEFAULT_BAR_WIDTH
from relentless_tui.windowing import MESSAGE_WINDOW, QUEUE_WINDOW


@dataclass(frozen=True)
class RenderOptions:
    bar_width: int = DEFAULT_BAR_WIDTH
    queue_window: int = QUEUE_WINDOW
    message_window: int = MESSAGE_WINDOW

    @classmethod
    def from_profile(cls, profile: Mapping[str, Any]) -> "RenderOptions":
        return cls(
            bar_width=int(profile.get("bar_width", DEFAULT_BAR_WIDTH)),
            message_window=int(profile.get("message_window", MESSAGE_WINDOW)),
        )


@dataclass(frozen=True)
class RenderContext:
    state: DisplayState
    plan: LayoutPlan
    phase: AnimationPhase
    rows: int
    columns: int
    options: RenderOptions = RenderOptions()

    @property
    def current_story_id(self) -> str | None:
        story = self.state.current_story
        return story.id if story is not None else None
