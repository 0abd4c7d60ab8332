"""Animation clock independent of snapshot updates.

The scheduler owns the only mutable state of the render core: a spinner
frame counter, the pulse and cursor flags and a set of animated numbers.
Each timer runs as an asyncio task on the rendering loop; after every step
the scheduler hands a fresh :class:`AnimationPhase` to the render callback,
synchronously, so a tick never overlaps a render.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Mapping

from relentless_tui.theme import SYMBOLS

logger = logging.getLogger(__name__)

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

SPINNER_INTERVAL = 0.08
PULSE_INTERVAL = 0.3
CURSOR_INTERVAL = 0.5
NUMBER_INTERVAL = 0.05
NUMBER_DURATION = 0.5


@dataclass(frozen=True)
class AnimationPhase:
    spinner_frame: int = 0
    pulse_on: bool = True
    cursor_visible: bool = True
    now: float = 0.0
    numbers: Mapping[str, float] = field(default_factory=dict)

    def spinner(self, running: bool) -> str:
        if not running:
            return SYMBOLS["pending"]
        return SPINNER_FRAMES[self.spinner_frame % len(SPINNER_FRAMES)]

    def number(self, key: str, fallback: float) -> float:
        return self.numbers.get(key, fallback)

    def seconds_until(self, moment: datetime | None) -> float | None:
        if moment is None:
            return None
        return max(0.0, moment.timestamp() - self.now)


@dataclass(frozen=True)
class AnimatedNumber:
    start: float
    target: float
    started_at: float
    duration: float = NUMBER_DURATION

    def value_at(self, now: float) -> float:
        if self.duration <= 0 or now >= self.started_at + self.duration:
            return self.target
        progress = max(0.0, (now - self.started_at) / self.duration)
        return round(self.start + (self.target - self.start) * progress, 2)

    def settled(self, now: float) -> bool:
        return self.duration <= 0 or now >= self.started_at + self.duration

    def retarget(self, target: float, now: float) -> "AnimatedNumber":
        return AnimatedNumber(self.value_at(now), target, now, self.duration)


class AnimationScheduler:
    def __init__(
        self,
        on_tick: Callable[[AnimationPhase], None] | None = None,
        *,
        spinner_interval: float = SPINNER_INTERVAL,
        pulse_interval: float = PULSE_INTERVAL,
        cursor_interval: float = CURSOR_INTERVAL,
        number_duration: float = NUMBER_DURATION,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._on_tick = on_tick
        self._intervals = {
            "spinner": spinner_interval,
            "pulse": pulse_interval,
            "cursor": cursor_interval,
            "numbers": NUMBER_INTERVAL,
        }
        self._number_duration = number_duration
        self._clock = clock
        self._spinner_frame = 0
        self._pulse_on = True
        self._cursor_visible = True
        self._numbers: dict[str, AnimatedNumber] = {}
        self._numbers_moving = False
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def phase(self) -> AnimationPhase:
        now = self._clock()
        return AnimationPhase(
            spinner_frame=self._spinner_frame,
            pulse_on=self._pulse_on,
            cursor_visible=self._cursor_visible,
            now=now,
            numbers={key: number.value_at(now) for key, number in self._numbers.items()},
        )

    def advance_spinner(self) -> bool:
        self._spinner_frame = (self._spinner_frame + 1) % len(SPINNER_FRAMES)
        return True

    def toggle_pulse(self) -> bool:
        self._pulse_on = not self._pulse_on
        return True

    def toggle_cursor(self) -> bool:
        self._cursor_visible = not self._cursor_visible
        return True

    def numbers_in_flight(self) -> bool:
        now = self._clock()
        return any(not number.settled(now) for number in self._numbers.values())

    def step_numbers(self) -> bool:
        # one extra tick after settling so the final value gets drawn
        moving = self.numbers_in_flight()
        changed = moving or self._numbers_moving
        self._numbers_moving = moving
        return changed

    def animate_number(self, key: str, target: float) -> None:
        now = self._clock()
        current = self._numbers.get(key)
        if current is None:
            # first sighting renders at the target, there is nothing to move from
            self._numbers[key] = AnimatedNumber(target, target, now, self._number_duration)
            return
        if current.target == target:
            return
        self._numbers[key] = current.retarget(target, now)

    def start(self) -> None:
        if self._tasks:
            return
        steps = {
            "spinner": self.advance_spinner,
            "pulse": self.toggle_pulse,
            "cursor": self.toggle_cursor,
            "numbers": self.step_numbers,
        }
        loop = asyncio.get_running_loop()
        for name, step in steps.items():
            self._tasks.append(loop.create_task(self._repeat(self._intervals[name], step), name=f"animation-{name}"))
        logger.debug("animation timers started: %s", ", ".join(steps))

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for task, result in zip(tasks, results):
            if isinstance(result, Exception):
                logger.error("animation timer %s failed: %r", task.get_name(), result)
        if tasks:
            logger.debug("animation timers stopped")

    async def __aenter__(self) -> "AnimationScheduler":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def _repeat(self, interval: float, step: Callable[[], bool]) -> None:
        while True:
            await asyncio.sleep(interval)
            if step() and self._on_tick is not None:
                self._on_tick(self.phase())
