from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from relentless_tui.models import AgentState, Story  # noqa: E402
from relentless_tui.status import (  # noqa: E402
    bar_widths,
    next_reset_agent,
    progress_percentage,
    summarize_progress,
)

T1 = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
T2 = T1 + timedelta(minutes=5)


class ProgressTests(unittest.TestCase):
    def test_scenario(self):
        self.assertEqual(bar_widths(3, 10, 40), (12, 28))
        self.assertEqual(progress_percentage(3, 10), 30)

    def test_zero_total(self):
        self.assertEqual(progress_percentage(0, 0), 0)
        self.assertEqual(bar_widths(0, 0, 40), (0, 40))

    def test_percentage_in_range(self):
        for total in range(0, 15):
            for completed in range(0, total + 1):
                self.assertTrue(0 <= progress_percentage(completed, total) <= 100)

    def test_widths_always_sum_to_bar(self):
        for width in range(0, 45):
            for total in range(0, 9):
                for completed in range(0, total + 3):
                    filled, empty = bar_widths(completed, total, width)
                    self.assertEqual(filled + empty, width)
                    self.assertGreaterEqual(empty, 0)

    def test_more_completed_than_total_is_clamped(self):
        self.assertEqual(progress_percentage(12, 10), 100)
        self.assertEqual(bar_widths(12, 10, 40), (40, 0))

    def test_rounding_is_half_up(self):
        self.assertEqual(progress_percentage(1, 8), 13)
        self.assertEqual(bar_widths(1, 16, 40), (3, 37))

    def test_negative_width_clamps(self):
        self.assertEqual(bar_widths(1, 2, -5), (0, 0))

    def test_summary_counts_passing_stories(self):
        stories = [Story("S1", "a", passes=True), Story("S2", "b"), Story("S3", "c", passes=True)]
        summary = summarize_progress(stories, 30)
        self.assertEqual((summary.completed, summary.total, summary.percentage), (2, 3, 67))
        self.assertEqual(summary.filled_width + summary.empty_width, 30)

    def test_summary_without_stories(self):
        summary = summarize_progress(None)
        self.assertEqual((summary.completed, summary.total, summary.percentage), (0, 0, 0))


class NextResetTests(unittest.TestCase):
    def test_earliest_reset_wins(self):
        agents = [
            AgentState("A", rate_limited=True, reset_time=T2),
            AgentState("B", rate_limited=True, reset_time=T1),
        ]
        self.assertEqual(next_reset_agent(agents).name, "B")

    def test_equal_reset_prefers_first_name(self):
        agents = [
            AgentState("codex", rate_limited=True, reset_time=T1),
            AgentState("amp", rate_limited=True, reset_time=T1),
        ]
        self.assertEqual(next_reset_agent(agents).name, "amp")

    def test_agents_without_reset_or_limit_are_ignored(self):
        agents = [
            AgentState("A", rate_limited=True),
            AgentState("B", rate_limited=False, reset_time=T1),
        ]
        self.assertIsNone(next_reset_agent(agents))
        self.assertIsNone(next_reset_agent([]))
        self.assertIsNone(next_reset_agent(None))


if __name__ == "__main__":
    unittest.main()
