from __future__ import annotations

from stair_blocks.events.bus import (EVENT_COLUMN_COMPLETE, EVENT_PLACEMENT_REJECTED,
                                     EVENT_SNAP, EVENT_VICTORY)
from stair_blocks.game import GameConfig, GameSession, PlacementPolicy


class Recorder:
    """Collects bus notifications as (event, payload) pairs."""
    def __init__(self, bus):
        self.events = []
        for name in (EVENT_SNAP, EVENT_COLUMN_COMPLETE, EVENT_VICTORY, EVENT_PLACEMENT_REJECTED):
            bus.subscribe(name, self._handler(name))

    def _handler(self, name):
        def handler(sender, **kwargs):
            self.events.append((name, kwargs))
        return handler

    def names(self):
        return [name for name, _ in self.events]

    def of(self, name):
        return [payload for n, payload in self.events if n == name]


def make_session(columns=3, policy=PlacementPolicy.CONNECTED, **kwargs) -> GameSession:
    """Session whose completion notifications fire without delay."""
    kwargs.setdefault('column_complete_delay', 0.0)
    kwargs.setdefault('victory_delay', 0.0)
    return GameSession(GameConfig(columns=columns, policy=policy, **kwargs))
