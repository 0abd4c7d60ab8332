from __future__ import annotations

import unittest
from datetime import datetime, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from relentless_tui.formatting import (  # noqa: E402
    ELLIPSIS,
    format_cost,
    format_countdown,
    format_elapsed,
    format_session_time,
    format_timestamp,
    format_tokens,
    pad_column,
    parse_iso_timestamp,
    truncate,
)


class TimeFormattingTests(unittest.TestCase):
    def test_elapsed(self):
        self.assertEqual(format_elapsed(125), "2m 5s")
        self.assertEqual(format_elapsed(45), "45s")
        self.assertEqual(format_elapsed(0), "0s")

    def test_elapsed_has_no_hour_unit(self):
        self.assertEqual(format_elapsed(3725), "62m 5s")

    def test_elapsed_clamps_negative(self):
        self.assertEqual(format_elapsed(-5), "0s")
        self.assertEqual(format_elapsed(None), "0s")

    def test_session_time(self):
        self.assertEqual(format_session_time(245), "4m 05s")
        self.assertEqual(format_session_time(3720), "1h 02m")

    def test_countdown(self):
        self.assertEqual(format_countdown(125), "2m")
        self.assertEqual(format_countdown(42.7), "42s")
        self.assertIsNone(format_countdown(0))
        self.assertIsNone(format_countdown(None))

    def test_timestamp(self):
        moment = datetime(2024, 5, 1, 9, 7, 3)
        self.assertEqual(format_timestamp(moment), "09:07")
        self.assertEqual(format_timestamp(moment, full=True), "09:07:03")

    def test_parse_iso_timestamp(self):
        parsed = parse_iso_timestamp("2024-05-01T10:00:00Z")
        self.assertEqual(parsed, datetime(2024, 5, 1, 10, tzinfo=timezone.utc))
        self.assertEqual(parse_iso_timestamp("2024-05-01T10:00:00").tzinfo, timezone.utc)
        self.assertIsNone(parse_iso_timestamp("yesterday"))
        self.assertIsNone(parse_iso_timestamp("  "))


class NumberFormattingTests(unittest.TestCase):
    def test_tokens_below_threshold_are_literal(self):
        self.assertEqual(format_tokens(0), "0")
        self.assertEqual(format_tokens(999), "999")

    def test_tokens_are_abbreviated(self):
        self.assertEqual(format_tokens(1000), "1.0K")
        self.assertEqual(format_tokens(5234), "5.2K")
        self.assertEqual(format_tokens(2_500_000), "2.5M")

    def test_cost(self):
        self.assertEqual(format_cost(0), "$0.00")
        self.assertEqual(format_cost(0.004), "$0.004")
        self.assertEqual(format_cost(0.12), "$0.12")
        self.assertEqual(format_cost(3.5), "$3.50")


class TruncationTests(unittest.TestCase):
    def test_short_text_unchanged(self):
        self.assertEqual(truncate("hello", 10), "hello")
        self.assertEqual(truncate("hello", 5), "hello")

    def test_long_text_gets_ellipsis(self):
        self.assertEqual(truncate("hello world", 6), "hello" + ELLIPSIS)

    def test_length_bound_and_ellipsis_iff_longer(self):
        samples = ["", "a", "abc", "a much longer story title than fits"]
        for text in samples:
            for width in range(0, 40):
                result = truncate(text, width)
                self.assertLessEqual(len(result), max(0, width))
                if width > 0:
                    self.assertEqual(result.endswith(ELLIPSIS), len(text) > width)

    def test_pad_column_is_fixed_width(self):
        self.assertEqual(pad_column("US-1", 9), "US-1     ")
        self.assertEqual(len(pad_column("US-0123456789", 9)), 9)
        self.assertEqual(pad_column("x", 0), "")


if __name__ == "__main__":
    unittest.main()
