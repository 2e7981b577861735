"""Event bus and deferred notifications shared by the engine and its front-ends."""

from .bus import (
    EventBus,
    EVENT_TICK,
    EVENT_SNAP,
    EVENT_PLACEMENT_REJECTED,
    EVENT_COLUMN_COMPLETE,
    EVENT_VICTORY,
    EVENT_GAME_RESET,
)
from .scheduler import NotificationScheduler

__all__ = [
    "EventBus",
    "NotificationScheduler",
    "EVENT_TICK",
    "EVENT_SNAP",
    "EVENT_PLACEMENT_REJECTED",
    "EVENT_COLUMN_COMPLETE",
    "EVENT_VICTORY",
    "EVENT_GAME_RESET",
]
