"""Game module for Stair Blocks.

Exports the placement engine and its supporting classes:
- Board: triangular column/slot occupancy
- ExactSlotResolver / GravityResolver: placement policies
- CompletionTracker: per-column and board-wide completion
- Tray: source blocks offered to the player
- GameSession: owns one game and publishes its notifications
"""

from .board import Block, Board, Slot, SlotState, create_board
from .completion import CompletionTracker
from .core import MAX_COLUMNS, MIN_COLUMNS, GameConfig, GameSession, GameState, PlacementResult
from .errors import InvalidArgument, RejectReason, SlotOccupiedError, StairBlocksError
from .placement import (
    ExactSlotResolver,
    GravityResolver,
    PlacementPolicy,
    Resolution,
    landing_row,
    resolver_for,
)
from .tray import Tray

__all__ = [
    "Block",
    "Board",
    "Slot",
    "SlotState",
    "create_board",
    "CompletionTracker",
    "GameConfig",
    "GameSession",
    "GameState",
    "PlacementResult",
    "MIN_COLUMNS",
    "MAX_COLUMNS",
    "InvalidArgument",
    "RejectReason",
    "SlotOccupiedError",
    "StairBlocksError",
    "ExactSlotResolver",
    "GravityResolver",
    "PlacementPolicy",
    "Resolution",
    "landing_row",
    "resolver_for",
    "Tray",
]
