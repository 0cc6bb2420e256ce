"""Typed event definitions (dataclasses)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    # Edit outcomes
    EDIT_APPLIED = auto()
    EDIT_REJECTED = auto()
    # Config
    CONFIG_CHANGED = auto()


class EditKey(Enum):
    DELETE = auto()
    BACKSPACE = auto()
    SPACE = auto()


@dataclass
class Event:
    type: EventType
    data: Any
    timestamp: float


@dataclass
class EditResult:
    """What the host applies after an event."""
    text: str
    cursor: int
    consumed: bool
    completed: bool = True


@dataclass
class EditEventData:
    action: str         # "text" | "delete" | "backspace" | "set"
    before: str
    after: str
    cursor: int
    reason: str = ""    # why an edit was rejected: "read_only" | "mask" | "filter" | "range"


@dataclass
class ConfigEventData:
    mask: str
    placeholder: str
    filter_category: str
    filter_pattern: str | None = None
