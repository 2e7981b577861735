from blinker import Signal
from typing import Dict

class EventBus:
    """Named blinker signals; handlers are called as ``fn(sender, **payload)``."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so lambdas and throwaway listeners keep receiving events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                              # payload: dt=float (seconds)


# ============================================================================
# PLACEMENT
# ============================================================================
EVENT_SNAP = "snap"                              # payload: column, rows=tuple, size, block_id
EVENT_PLACEMENT_REJECTED = "placement_rejected"  # payload: column, size, reason=RejectReason


# ============================================================================
# COMPLETION
# ============================================================================
EVENT_COLUMN_COMPLETE = "column_complete"        # payload: column
EVENT_VICTORY = "victory"                        # payload: columns


# ============================================================================
# SESSION
# ============================================================================
EVENT_GAME_RESET = "game_reset"                  # payload: columns, policy
