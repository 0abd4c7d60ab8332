"""Profile resolution and user config merging for the dashboard."""

from __future__ import annotations

import json
import os
from pathlib import Path

PROFILE_ENV = "RELENTLESS_TUI_PROFILE"
DEFAULT_PROFILE = "default"

BUILTIN_PROFILES: dict[str, dict] = {
    "default": {
        "refresh_seconds": 1.0,
        "animations": True,
        "spinner_interval": 0.08,
        "pulse_interval": 0.3,
        "cursor_interval": 0.5,
        "number_duration": 0.5,
        "bar_width": 40,
        "message_window": 10,
    },
    "calm": {
        "refresh_seconds": 2.0,
        "animations": False,
        "spinner_interval": 0.08,
        "pulse_interval": 0.3,
        "cursor_interval": 0.5,
        "number_duration": 0.5,
        "bar_width": 40,
        "message_window": 10,
    },
}

INTERVAL_KEYS = ("refresh_seconds", "spinner_interval", "pulse_interval", "cursor_interval")
COUNT_KEYS = ("bar_width", "message_window")


def default_profile_name() -> str:
    return os.environ.get(PROFILE_ENV, DEFAULT_PROFILE)


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    return data


def _number(key: str, value, cast):
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be a number, got {value!r}") from exc


def resolve_profile(profile: str, config_path: str | None = None) -> dict:
    if profile not in BUILTIN_PROFILES:
        raise ValueError(f"unknown profile: {profile}")

    resolved = dict(BUILTIN_PROFILES[profile])
    user_config = load_user_config(config_path)

    selected_profile = user_config.get("profile")
    if selected_profile:
        if selected_profile not in BUILTIN_PROFILES:
            raise ValueError(f"unknown profile in config: {selected_profile}")
        resolved = dict(BUILTIN_PROFILES[selected_profile])
        profile = selected_profile

    for key in INTERVAL_KEYS:
        if key in user_config:
            value = _number(key, user_config[key], float)
            if value <= 0:
                raise ValueError(f"{key} must be positive, got {value}")
            resolved[key] = value

    if "number_duration" in user_config:
        resolved["number_duration"] = max(0.0, _number("number_duration", user_config["number_duration"], float))

    for key in COUNT_KEYS:
        if key in user_config:
            resolved[key] = max(1, _number(key, user_config[key], int))

    if "animations" in user_config:
        resolved["animations"] = bool(user_config["animations"])

    resolved["name"] = profile
    return resolved
