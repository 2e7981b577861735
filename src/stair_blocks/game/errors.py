from __future__ import annotations

from enum import Enum


class StairBlocksError(Exception):
    """Base class for errors raised by the game engine."""


class InvalidArgument(StairBlocksError, ValueError):
    """A caller passed a column, row, size or board size outside its range."""


class SlotOccupiedError(StairBlocksError, RuntimeError):
    """A write hit a slot that is already occupied.

    The resolvers never hand out occupied rows, so this signals that the
    board and the resolver disagree. It is not a player-facing rejection.
    """

    def __init__(self, column: int, row: int, block_id: int) -> None:
        super().__init__(f"slot ({column}, {row}) already holds block {block_id}")
        self.column = column
        self.row = row
        self.block_id = block_id


class RejectReason(str, Enum):
    COLUMN_FULL = "column_full"
    INSUFFICIENT_SPACE = "insufficient_space"
    ROWS_OCCUPIED = "rows_occupied"
    GAME_ALREADY_COMPLETE = "game_already_complete"
