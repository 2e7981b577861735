from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidArgument, SlotOccupiedError


EMPTY = 0


class SlotState(Enum):
    EMPTY = "empty"
    OCCUPIED = "occupied"


@dataclass(frozen=True)
class Slot:
    column: int
    row: int  # 0 is the bottom of the column
    block_id: Optional[int] = None

    @property
    def state(self) -> SlotState:
        return SlotState.EMPTY if self.block_id is None else SlotState.OCCUPIED


@dataclass(frozen=True)
class Block:
    block_id: int
    column: int
    origin: int
    size: int

    @property
    def rows(self) -> Tuple[int, ...]:
        return tuple(range(self.origin, self.origin + self.size))


class Board:
    """Triangular board of columns; column ``i`` (1-based) holds ``i`` slots.

    Occupancy lives in an ``n x n`` integer array indexed ``[column - 1, row]``.
    ``0`` marks an empty slot and a positive value is the id of the block
    sitting there. Cells at ``row >= column`` are outside the board.
    """

    def __init__(self, n: int) -> None:
        if int(n) < 1:
            raise InvalidArgument(f"board needs at least one column, got {n}")
        self.n = int(n)
        self.cells = np.zeros((self.n, self.n), dtype=np.int32)

    def reset(self) -> None:
        self.cells.fill(EMPTY)

    @property
    def columns(self) -> range:
        return range(1, self.n + 1)

    def capacity(self, column: int) -> int:
        self._check_column(column)
        return column

    def is_inside(self, column: int, row: int) -> bool:
        return 1 <= column <= self.n and 0 <= row < column

    def is_empty(self, column: int, row: int) -> bool:
        self._check_slot(column, row)
        return self.cells[column - 1, row] == EMPTY

    def slot(self, column: int, row: int) -> Slot:
        self._check_slot(column, row)
        value = int(self.cells[column - 1, row])
        return Slot(column, row, None if value == EMPTY else value)

    def occupy(self, column: int, row: int, block_id: int) -> None:
        self._check_slot(column, row)
        current = int(self.cells[column - 1, row])
        if current != EMPTY:
            raise SlotOccupiedError(column, row, current)
        self.cells[column - 1, row] = block_id

    def place_block(self, block: Block) -> None:
        """Write every row of ``block``; nothing is written if any row is taken."""
        for row in block.rows:
            if not self.is_empty(block.column, row):
                raise SlotOccupiedError(block.column, row, int(self.cells[block.column - 1, row]))
        for row in block.rows:
            self.occupy(block.column, row, block.block_id)

    def column_cells(self, column: int) -> np.ndarray:
        self._check_column(column)
        return self.cells[column - 1, :column]

    def filled_count(self, column: int) -> int:
        return int(np.count_nonzero(self.column_cells(column)))

    def is_column_full(self, column: int) -> bool:
        return self.filled_count(column) == column

    def is_full(self) -> bool:
        return all(self.is_column_full(c) for c in self.columns)

    def total_slots(self) -> int:
        return self.n * (self.n + 1) // 2

    def filled_ratio(self) -> float:
        filled = sum(self.filled_count(c) for c in self.columns)
        return float(filled) / float(self.total_slots())

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()

    def _check_column(self, column: int) -> None:
        if not 1 <= column <= self.n:
            raise InvalidArgument(f"column {column} outside 1..{self.n}")

    def _check_slot(self, column: int, row: int) -> None:
        self._check_column(column)
        if not 0 <= row < column:
            raise InvalidArgument(f"row {row} outside column {column} (0..{column - 1})")


def create_board(n: int) -> Board:
    return Board(n)
