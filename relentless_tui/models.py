"""Snapshot contracts handed to the renderer by the orchestrator."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from relentless_tui.formatting import parse_iso_timestamp

MESSAGE_TYPES = ("command", "prompt", "system", "info", "success", "error")
QUEUE_TYPES = ("prompt", "command")

# epoch numbers beyond this are milliseconds, as JavaScript writes them
EPOCH_MILLIS_THRESHOLD = 1e11


@dataclass(frozen=True)
class Story:
    id: str
    title: str
    priority: int = 5
    passes: bool = False
    blocked: bool = False
    research: bool = False
    phase: str | None = None
    criteria_count: int = 0
    dependencies: tuple[str, ...] = ()


@dataclass(frozen=True)
class AgentState:
    name: str
    display_name: str = ""
    active: bool = False
    rate_limited: bool = False
    reset_time: datetime | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name

    @property
    def display_status(self) -> str:
        if self.active:
            return "active"
        if self.rate_limited:
            return "limited"
        return "idle"


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class CostData:
    actual: float = 0.0
    estimated: float = 0.0
    per_story: float = 0.0


@dataclass(frozen=True)
class QueueItem:
    content: str
    type: str = "prompt"
    added_at: datetime | None = None

    @property
    def is_command(self) -> bool:
        return self.type == "command"


@dataclass(frozen=True)
class MessageItem:
    timestamp: datetime
    type: str
    content: str


@dataclass(frozen=True)
class Routing:
    mode: str
    complexity: str
    harness: str
    model: str


@dataclass(frozen=True)
class DisplayState:
    feature: str = ""
    project: str = ""
    branch_name: str = ""
    current_agent: AgentState | None = None
    current_story: Story | None = None
    elapsed_seconds: int = 0
    idle_seconds: int = 0
    is_running: bool = False
    output_lines: tuple[str, ...] = ()
    queue_items: tuple[QueueItem, ...] = ()
    queue_input_active: bool = False
    queue_input_value: str = ""
    stories: tuple[Story, ...] = ()
    agents: tuple[AgentState, ...] = ()
    iteration: int = 0
    max_iterations: int = 0
    error: str | None = None
    status_message: str | None = None
    is_complete: bool = False
    tokens: TokenUsage | None = None
    cost: CostData | None = None
    messages: tuple[MessageItem, ...] = ()
    routing: Routing | None = None
    savings_percent: float | None = None
    total_elapsed_seconds: int = 0

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "DisplayState":
        """Build a snapshot from decoded JSON, treating anything malformed as absent."""
        data = payload if isinstance(payload, Mapping) else {}
        return cls(
            feature=_text(data.get("feature")),
            project=_text(data.get("project")),
            branch_name=_text(_first(data, "branchName", "branch_name")),
            current_agent=_agent(_first(data, "currentAgent", "current_agent")),
            current_story=_story(_first(data, "currentStory", "current_story")),
            elapsed_seconds=_int(_first(data, "elapsedSeconds", "elapsed_seconds")),
            idle_seconds=_int(_first(data, "idleSeconds", "idle_seconds")),
            is_running=bool(_first(data, "isRunning", "is_running")),
            output_lines=tuple(str(line) for line in _list(_first(data, "outputLines", "output_lines"))),
            queue_items=_collect(_first(data, "queueItems", "queue_items"), _queue_item),
            queue_input_active=bool(_first(data, "queueInputActive", "queue_input_active")),
            queue_input_value=_text(_first(data, "queueInputValue", "queue_input_value")),
            stories=_unique_stories(_collect(data.get("stories"), _story)),
            agents=_collect(data.get("agents"), _agent),
            iteration=_int(data.get("iteration")),
            max_iterations=_int(_first(data, "maxIterations", "max_iterations")),
            error=_optional_text(data.get("error")),
            status_message=_optional_text(_first(data, "statusMessage", "status_message")),
            is_complete=bool(_first(data, "isComplete", "is_complete")),
            tokens=_tokens(_first(data, "costData", "cost"), data.get("tokens")),
            cost=_cost(_first(data, "costData", "cost")),
            messages=_collect(data.get("messages"), _message),
            routing=_routing(_first(data, "currentRouting", "routing")),
            savings_percent=_optional_float(_first(data, "savingsPercent", "savings_percent")),
            total_elapsed_seconds=_int(_first(data, "totalElapsedSeconds", "total_elapsed_seconds")),
        )


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _float(value: Any, default: float = 0.0) -> float:
    number = _optional_float(value)
    return default if number is None else number


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _collect(value: Any, build) -> tuple:
    items = (build(raw) for raw in _list(value))
    return tuple(item for item in items if item is not None)


def _unique_stories(stories: tuple[Story, ...]) -> tuple[Story, ...]:
    seen: set[str] = set()
    unique = []
    for story in stories:
        if story.id in seen:
            continue
        seen.add(story.id)
        unique.append(story)
    return tuple(unique)


def _timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if abs(value) > EPOCH_MILLIS_THRESHOLD:
            value = value / 1000
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        return parse_iso_timestamp(value)
    return None


def _story(raw: Any) -> Story | None:
    if not isinstance(raw, Mapping) or raw.get("id") is None:
        return None
    return Story(
        id=str(raw["id"]),
        title=_text(raw.get("title")),
        priority=_int(raw.get("priority"), default=5),
        passes=bool(raw.get("passes")),
        blocked=bool(raw.get("blocked")),
        research=bool(raw.get("research")),
        phase=_optional_text(raw.get("phase")),
        criteria_count=_int(_first(raw, "criteriaCount", "criteria_count")),
        dependencies=tuple(str(dep) for dep in _list(raw.get("dependencies"))),
    )


def _agent(raw: Any) -> AgentState | None:
    if not isinstance(raw, Mapping) or not raw.get("name"):
        return None
    return AgentState(
        name=str(raw["name"]),
        display_name=_text(_first(raw, "displayName", "display_name")),
        active=bool(raw.get("active")),
        rate_limited=bool(_first(raw, "rateLimited", "rate_limited")),
        reset_time=_timestamp(_first(raw, "resetTime", "reset_time")),
    )


def _queue_item(raw: Any) -> QueueItem | None:
    if isinstance(raw, str):
        return QueueItem(content=raw)
    if not isinstance(raw, Mapping) or raw.get("content") is None:
        return None
    item_type = raw.get("type")
    return QueueItem(
        content=str(raw["content"]),
        type=item_type if item_type in QUEUE_TYPES else "prompt",
        added_at=_timestamp(_first(raw, "addedAt", "added_at")),
    )


def _message(raw: Any) -> MessageItem | None:
    if not isinstance(raw, Mapping) or raw.get("content") is None:
        return None
    message_type = raw.get("type")
    return MessageItem(
        timestamp=_timestamp(raw.get("timestamp")) or datetime.now(timezone.utc),
        type=message_type if message_type in MESSAGE_TYPES else "info",
        content=str(raw["content"]),
    )


def _tokens(cost_raw: Any, tokens_raw: Any) -> TokenUsage | None:
    raw = tokens_raw
    if raw is None and isinstance(cost_raw, Mapping):
        raw = cost_raw.get("tokens")
    if not isinstance(raw, Mapping):
        return None
    input_tokens = _int(_first(raw, "inputTokens", "input_tokens"))
    output_tokens = _int(_first(raw, "outputTokens", "output_tokens"))
    return TokenUsage(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=_int(_first(raw, "totalTokens", "total_tokens")),
    )


def _cost(raw: Any) -> CostData | None:
    if not isinstance(raw, Mapping):
        return None
    return CostData(
        actual=_float(raw.get("actual")),
        estimated=_float(raw.get("estimated")),
        per_story=_float(_first(raw, "perStory", "per_story")),
    )


def _routing(raw: Any) -> Routing | None:
    if not isinstance(raw, Mapping):
        return None
    return Routing(
        mode=_text(raw.get("mode")),
        complexity=_text(raw.get("complexity")),
        harness=_text(raw.get("harness")),
        model=_text(raw.get("model")),
    )


def story_index(stories: tuple[Story, ...], story_id: str | None) -> int | None:
    if story_id is None:
        return None
    for index, story in enumerate(stories):
        if story.id == story_id:
            return index
    return None
