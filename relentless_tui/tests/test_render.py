from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from relentless_tui.animation import AnimationPhase  # noqa: E402
from relentless_tui.models import AgentState, DisplayState, QueueItem, Story  # noqa: E402
from relentless_tui.panels import queue as queue_panel  # noqa: E402
from relentless_tui.panels.output import classify_lines  # noqa: E402
from relentless_tui.panels.queue_input import KEY_HINT, input_line  # noqa: E402
from relentless_tui.panels.status_bar import TOKENS_KEY, rate_limit_badge  # noqa: E402
from relentless_tui.panels.stories import grid_rows, story_row, story_status  # noqa: E402
from relentless_tui.render import COMPLETE_BANNER, build_context, build_screen  # noqa: E402
from relentless_tui.screen import compile_lines  # noqa: E402
from relentless_tui.theme import SYMBOLS  # noqa: E402


def screen_text(state: DisplayState, rows: int, columns: int, phase: AnimationPhase | None = None) -> str:
    return "\n".join(compile_lines(build_screen(state, rows, columns, phase), rows, columns))


def sample_state(**overrides) -> DisplayState:
    payload = {
        "feature": "checkout",
        "project": "shop",
        "branchName": "feat/checkout",
        "isRunning": True,
        "elapsedSeconds": 125,
        "currentStory": {"id": "US-002", "title": "Cart totals"},
        "currentAgent": {"name": "claude", "active": True},
        "stories": [
            {"id": "US-001", "title": "Login", "passes": True, "priority": 1},
            {"id": "US-002", "title": "Cart totals", "priority": 2},
            {"id": "US-003", "title": "Payments", "blocked": True},
        ],
        "outputLines": ["starting", "Error: flaky test", "done"],
        "iteration": 3,
        "maxIterations": 20,
    }
    payload.update(overrides)
    return DisplayState.from_dict(payload)


class ScreenCompositionTests(unittest.TestCase):
    def test_empty_state_shows_placeholders(self):
        text = screen_text(DisplayState(), 30, 80)
        self.assertIn("RELENTLESS", text)
        self.assertIn("No story in progress", text)
        self.assertIn("Waiting for agent output...", text)
        self.assertIn("Queue empty", text)
        self.assertIn(KEY_HINT, text)

    def test_buffer_has_exact_row_count(self):
        for rows, columns in ((24, 80), (40, 140), (5, 20), (60, 110)):
            lines = compile_lines(build_screen(sample_state(), rows, columns), rows, columns)
            self.assertEqual(len(lines), rows)

    def test_vertical_layout_content(self):
        text = screen_text(sample_state(), 40, 90)
        self.assertIn("Current Story: US-002 - Cart totals", text)
        self.assertIn("Working...", text)
        self.assertIn("[elapsed: 2m 5s, idle: 0s]", text)
        self.assertIn("Stories (3)", text)
        self.assertIn("1/3 (33%)", text)
        self.assertIn("Error: flaky test", text)

    def test_three_column_layout_content(self):
        text = screen_text(sample_state(), 40, 140)
        self.assertIn("Tasks", text)
        self.assertIn("Messages", text)
        self.assertIn("US-003", text)
        self.assertIn("No messages yet", text)
        self.assertNotIn("Current Story:", text)

    def test_error_and_completion_notices(self):
        text = screen_text(DisplayState(error="boom", is_complete=True), 30, 80)
        self.assertIn("Error: boom", text)
        self.assertIn(COMPLETE_BANNER, text)
        wide = screen_text(DisplayState(error="boom"), 30, 140)
        self.assertIn("Error: boom", wide)

    def test_rendering_is_deterministic(self):
        state = sample_state()
        phase = AnimationPhase(spinner_frame=4, pulse_on=False)
        self.assertEqual(screen_text(state, 30, 140, phase), screen_text(state, 30, 140, phase))


class VerticalFitTests(unittest.TestCase):
    def test_footer_visible_with_many_stories(self):
        state = DisplayState(stories=tuple(Story(f"S{index}", "story") for index in range(40)))
        for rows in (40, 60):
            lines = compile_lines(build_screen(state, rows, 90), rows, 90)
            text = "\n".join(lines)
            self.assertIn("Agents:", text)
            self.assertIn(KEY_HINT, text)
            self.assertIn("S0", text)

    def test_busy_screen_keeps_footer(self):
        state = sample_state(
            stories=[{"id": f"S{index}", "title": "story"} for index in range(40)],
            queueItems=[f"item {index}" for index in range(6)],
            currentRouting={"mode": "good", "complexity": "medium", "harness": "claude", "model": "sonnet"},
            error="rate limited",
        )
        text = "\n".join(compile_lines(build_screen(state, 45, 90), 45, 90))
        self.assertIn("Agents:", text)
        self.assertIn("Error: rate limited", text)
        self.assertIn(KEY_HINT, text)

    def test_short_terminal_keeps_minimum_story_rows(self):
        state = DisplayState(stories=tuple(Story(f"S{index:02d}", "story") for index in range(40)))
        text = "\n".join(compile_lines(build_screen(state, 24, 90), 24, 90))
        self.assertIn("S00", text)


class StoryRowTests(unittest.TestCase):
    def test_status_precedence(self):
        story = Story("S1", "t", passes=True, blocked=True)
        self.assertEqual(story_status(story, True), "current")
        self.assertEqual(story_status(story, False), "blocked")
        self.assertEqual(story_status(Story("S2", "t", passes=True), False), "complete")
        self.assertEqual(story_status(Story("S3", "t"), False), "pending")

    def test_current_story_pulses(self):
        story = Story("S1", "title")
        on = story_row(story, True, AnimationPhase(pulse_on=True), 25).plain
        off = story_row(story, True, AnimationPhase(pulse_on=False), 25).plain
        self.assertTrue(on.startswith(SYMBOLS["in_progress"]))
        self.assertTrue(off.startswith(SYMBOLS["pulse_off"]))

    def test_row_columns(self):
        row = story_row(Story("US-1", "A very long story title indeed", priority=2), False, AnimationPhase(), 10).plain
        self.assertEqual(row, f"{SYMBOLS['pending']} US-1     P2 A very lo…")

    def test_badges(self):
        row = story_row(Story("S1", "t", research=True, phase="Core"), False, AnimationPhase(), 25).plain
        self.assertIn(SYMBOLS["research"], row)
        self.assertTrue(row.endswith("[Core]"))

    def test_grid_is_column_major(self):
        stories = tuple(Story(f"S{index}", "t") for index in range(5))
        rows = grid_rows(stories, 8)
        self.assertEqual([[story.id for story in row] for row in rows], [["S0", "S3"], ["S1", "S4"], ["S2"]])
        self.assertEqual(len(grid_rows(stories, 2)), 2)


class QueueAndOutputTests(unittest.TestCase):
    def test_queue_shows_newest_items_with_original_numbers(self):
        state = DisplayState.from_dict({"queueItems": [f"item {index}" for index in range(1, 6)]})
        ctx = build_context(state, 24, 80)
        text = "\n".join(compile_lines(queue_panel.render_queue(ctx), 8, 80))
        self.assertIn("Queue (5 items)", text)
        self.assertIn("3. item 3", text)
        self.assertIn("5. item 5", text)
        self.assertNotIn("1. item 1", text)
        self.assertIn("+2 more", text)

    def test_input_line_cursor(self):
        self.assertEqual(input_line("hello", True).plain, f"{SYMBOLS['prompt']} hello{SYMBOLS['cursor']}")
        self.assertEqual(input_line("hello", False).plain, f"{SYMBOLS['prompt']} hello ")

    def test_active_input_replaces_hint(self):
        state = DisplayState(queue_input_active=True, queue_input_value="retry US-2")
        text = screen_text(state, 30, 80)
        self.assertIn("retry US-2", text)
        self.assertNotIn(KEY_HINT, text)

    def test_code_fences_are_tracked(self):
        kinds = [line.kind for line in classify_lines(["```py", "x = 1", "```", "--- step", "all good"])]
        self.assertEqual(kinds, ["code-start", "code", "code-end", "header", "normal"])


class StatusBarTests(unittest.TestCase):
    def test_rate_limit_countdown(self):
        reset = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        state = DisplayState(agents=(AgentState("codex", rate_limited=True, reset_time=reset),))
        phase = AnimationPhase(now=(reset - timedelta(seconds=125)).timestamp())
        badge = rate_limit_badge(build_context(state, 40, 140, phase))
        self.assertEqual(badge.plain, "cod: 2m")

    def test_expired_limit_has_no_badge(self):
        reset = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        state = DisplayState(agents=(AgentState("codex", rate_limited=True, reset_time=reset),))
        phase = AnimationPhase(now=reset.timestamp() + 1)
        self.assertIsNone(rate_limit_badge(build_context(state, 40, 140, phase)))

    def test_animated_token_value_is_shown(self):
        state = DisplayState.from_dict({"tokens": {"totalTokens": 5000}})
        phase = AnimationPhase(numbers={TOKENS_KEY: 1500})
        text = screen_text(state, 24, 140, phase)
        self.assertIn("1.5K", text)
        self.assertNotIn("5.0K", text)

    def test_token_breakdown_and_per_story_cost(self):
        state = DisplayState.from_dict(
            {
                "tokens": {"inputTokens": 1200, "outputTokens": 4000, "totalTokens": 5200},
                "costData": {"actual": 0.5, "perStory": 0.05},
            }
        )
        text = screen_text(state, 24, 140)
        self.assertIn("(1.2K in / 4.0K out)", text)
        self.assertIn("$0.05/story", text)

    def test_current_story_details(self):
        state = sample_state(
            currentStory={"id": "US-002", "title": "Cart totals", "criteriaCount": 3, "dependencies": ["US-001"]}
        )
        text = screen_text(state, 40, 90)
        self.assertIn("Cart totals  3 criteria  after US-001", text)

    def test_queue_row_shows_time_added(self):
        added = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
        row = queue_panel.queue_row(QueueItem("retry", added_at=added), 1).plain
        self.assertEqual(row, f"1. retry {added.astimezone().strftime('%H:%M')}")


if __name__ == "__main__":
    unittest.main()
