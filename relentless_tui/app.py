"""Dashboard owner object and the render-only entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
from pathlib import Path

from rich.console import Console

from relentless_tui.animation import AnimationPhase, AnimationScheduler
from relentless_tui.context import RenderOptions
from relentless_tui.debuglog import configure_debug_logging
from relentless_tui.models import DisplayState
from relentless_tui.panels.status_bar import COST_KEY, TOKENS_KEY
from relentless_tui.profiles import BUILTIN_PROFILES, default_profile_name, resolve_profile
from relentless_tui.render import build_screen
from relentless_tui.screen import TerminalScreen, compile_lines

logger = logging.getLogger(__name__)


class SnapshotFile:
    """JSON snapshot written by the orchestrator, reloaded when its mtime moves."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._mtime: float | None = None

    def _read(self) -> dict | None:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("could not read snapshot %s: %s", self.path, exc)
            return None

    def load(self) -> DisplayState:
        return DisplayState.from_dict(self._read())

    def poll(self) -> DisplayState | None:
        try:
            mtime = self.path.stat().st_mtime
        except OSError:
            return None
        if mtime == self._mtime:
            return None
        payload = self._read()
        if payload is None:
            return None
        self._mtime = mtime
        return DisplayState.from_dict(payload)


class Dashboard:
    def __init__(self, screen: TerminalScreen, profile: dict, state: DisplayState | None = None) -> None:
        self.screen = screen
        self.profile = profile
        self.options = RenderOptions.from_profile(profile)
        self.scheduler = AnimationScheduler(
            self._on_tick,
            spinner_interval=profile["spinner_interval"],
            pulse_interval=profile["pulse_interval"],
            cursor_interval=profile["cursor_interval"],
            number_duration=profile["number_duration"] if profile.get("animations", True) else 0.0,
        )
        self._state = state if state is not None else DisplayState()
        self._phase: AnimationPhase = self.scheduler.phase()
        self.renders = 0

    @property
    def state(self) -> DisplayState:
        return self._state

    def update_state(self, state: DisplayState) -> int:
        """Replace the snapshot wholesale and redraw."""
        self._state = state
        if state.tokens is not None:
            self.scheduler.animate_number(TOKENS_KEY, state.tokens.total_tokens)
        if state.cost is not None:
            self.scheduler.animate_number(COST_KEY, state.cost.actual)
        self._phase = self.scheduler.phase()
        return self.render()

    def _on_tick(self, phase: AnimationPhase) -> None:
        self._phase = phase
        self.render()

    def render(self) -> int:
        if not self.scheduler.running:
            # no timers to push phases, so sample the clock and numbers here
            self._phase = self.scheduler.phase()
        rows, columns = self.screen.size
        renderable = build_screen(self._state, rows, columns, self._phase, self.options)
        lines = compile_lines(renderable, rows, columns, self.screen.color_system)
        self.renders += 1
        return self.screen.draw(lines, (rows, columns))

    def _animation(self):
        if self.profile.get("animations", True):
            return self.scheduler
        return contextlib.nullcontext()

    async def run(self, source: SnapshotFile, refresh_seconds: float, stop: asyncio.Event | None = None) -> None:
        stop = stop if stop is not None else asyncio.Event()
        with self.screen:
            async with self._animation():
                initial = source.poll()
                if initial is not None:
                    self._state = initial
                self.update_state(self._state)
                while not stop.is_set():
                    with contextlib.suppress(asyncio.TimeoutError):
                        await asyncio.wait_for(stop.wait(), timeout=refresh_seconds)
                    snapshot = source.poll()
                    if snapshot is not None:
                        self.update_state(snapshot)
                    else:
                        # geometry may have changed under us
                        self.render()
        logger.debug("dashboard stopped after %d renders", self.renders)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Relentless orchestration dashboard")
    parser.add_argument("--state", required=True, help="JSON snapshot written by the orchestrator")
    parser.add_argument("-l", "--live", action="store_true", help="Run live dashboard loop")
    parser.add_argument(
        "--profile",
        default=default_profile_name(),
        help=f"Profile name: {'|'.join(BUILTIN_PROFILES)}",
    )
    parser.add_argument("--config", help="Optional JSON config file for profile overrides")
    parser.add_argument("--refresh", type=float, help="Snapshot poll interval seconds override")
    args = parser.parse_args(argv)

    configure_debug_logging()
    try:
        profile = resolve_profile(args.profile, args.config)
    except ValueError as exc:
        parser.error(str(exc))

    refresh_seconds = args.refresh if args.refresh and args.refresh > 0 else profile["refresh_seconds"]
    source = SnapshotFile(Path(args.state))
    console = Console()

    if not args.live:
        size = console.size
        state = source.load()
        console.print(build_screen(state, size.height, size.width, None, RenderOptions.from_profile(profile)))
        return 0

    dashboard = Dashboard(TerminalScreen(console), profile)
    try:
        asyncio.run(dashboard.run(source, refresh_seconds))
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
