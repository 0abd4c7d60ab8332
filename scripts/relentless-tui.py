#!/usr/bin/env python3
"""Thin compatibility entrypoint for the relentless dashboard."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from relentless_tui.app import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
