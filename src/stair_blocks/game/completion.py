from __future__ import annotations

import logging
from typing import Any, Dict, List, Set, Tuple

from ..events.bus import EVENT_COLUMN_COMPLETE, EVENT_VICTORY
from ..events.scheduler import NotificationScheduler
from .board import Board

logger = logging.getLogger(__name__)


class CompletionTracker:
    """Per-column fill state and the board-wide victory flag.

    Both transitions are one-way: a column goes Incomplete -> Complete once,
    and the board goes Playing -> Victory once. State flips immediately; the
    matching notifications are queued and only handed to the scheduler by
    ``dispatch``, so the caller can finish its own bookkeeping first.
    """

    def __init__(self, scheduler: NotificationScheduler, n: int,
                 column_complete_delay: float = 0.3, victory_delay: float = 0.8) -> None:
        self.scheduler = scheduler
        self.column_complete_delay = float(column_complete_delay)
        self.victory_delay = float(victory_delay)
        self.filled: Dict[int, int] = {}
        self.completed_columns: Set[int] = set()
        self.all_complete = False
        self._outbox: List[Tuple[float, str, Dict[str, Any]]] = []
        self.reset(n)

    def reset(self, n: int) -> None:
        self.filled = {column: 0 for column in range(1, n + 1)}
        self.completed_columns = set()
        self.all_complete = False
        self._outbox = []

    @property
    def queued(self) -> int:
        return len(self._outbox)

    def is_column_complete(self, column: int) -> bool:
        return column in self.completed_columns

    def on_placement(self, board: Board, column: int) -> bool:
        """Refresh ``column``; True only the first time it reaches capacity."""
        count = board.filled_count(column)
        self.filled[column] = count
        if count != board.capacity(column) or column in self.completed_columns:
            return False
        self.completed_columns.add(column)
        logger.debug("column %d complete", column)
        self._outbox.append((self.column_complete_delay, EVENT_COLUMN_COMPLETE, {"column": column}))
        return True

    def check_all_complete(self, board: Board) -> bool:
        for column in board.columns:
            if board.filled_count(column) < board.capacity(column):
                return False
        if not self.all_complete:
            self.all_complete = True
            logger.info("all %d columns complete", board.n)
            self._outbox.append((self.column_complete_delay + self.victory_delay,
                                 EVENT_VICTORY, {"columns": board.n}))
        return True

    def dispatch(self) -> None:
        """Hand queued notifications to the scheduler, oldest first."""
        outbox, self._outbox = self._outbox, []
        for delay, name, payload in outbox:
            self.scheduler.schedule(delay, name, **payload)
