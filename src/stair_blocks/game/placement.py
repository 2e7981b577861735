from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .board import Board
from .errors import InvalidArgument, RejectReason


class PlacementPolicy(str, Enum):
    SINGLE = "single"        # unit blocks dropped on an exact slot
    CONNECTED = "connected"  # blocks of size 1..N that fall to the lowest empty row


@dataclass(frozen=True)
class Resolution:
    rows: Tuple[int, ...] = ()
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @classmethod
    def rejected(cls, reason: RejectReason) -> "Resolution":
        return cls(rows=(), reason=reason)


def landing_row(board: Board, column: int) -> Optional[int]:
    """Lowest empty row of ``column``, or ``None`` when the column is full."""
    for row in range(board.capacity(column)):
        if board.is_empty(column, row):
            return row
    return None


class ExactSlotResolver:
    policy = PlacementPolicy.SINGLE

    def resolve(self, board: Board, column: int, size: int, target_row: Optional[int] = None) -> Resolution:
        if size != 1:
            raise InvalidArgument(f"single placement only takes unit blocks, got size {size}")
        if target_row is None:
            raise InvalidArgument("single placement needs a target row")
        if not board.is_inside(column, target_row):
            raise InvalidArgument(f"row {target_row} outside column {column}")
        if board.is_column_full(column):
            return Resolution.rejected(RejectReason.COLUMN_FULL)
        if not board.is_empty(column, target_row):
            return Resolution.rejected(RejectReason.ROWS_OCCUPIED)
        return Resolution(rows=(target_row,))


class GravityResolver:
    policy = PlacementPolicy.CONNECTED

    def resolve(self, board: Board, column: int, size: int, target_row: Optional[int] = None) -> Resolution:
        # target_row is where the drop happened; gravity decides the real rows
        if size < 1:
            raise InvalidArgument(f"block size must be positive, got {size}")
        start = landing_row(board, column)
        if start is None:
            return Resolution.rejected(RejectReason.COLUMN_FULL)
        if start + size - 1 >= board.capacity(column):
            return Resolution.rejected(RejectReason.INSUFFICIENT_SPACE)
        rows = []
        for row in range(start, start + size):
            if not board.is_empty(column, row):
                return Resolution.rejected(RejectReason.ROWS_OCCUPIED)
            rows.append(row)
        return Resolution(rows=tuple(rows))


_RESOLVERS = {
    PlacementPolicy.SINGLE: ExactSlotResolver(),
    PlacementPolicy.CONNECTED: GravityResolver(),
}


def resolver_for(policy: PlacementPolicy | str):
    try:
        return _RESOLVERS[PlacementPolicy(policy)]
    except ValueError:
        raise InvalidArgument(f"unknown placement policy {policy!r}") from None
