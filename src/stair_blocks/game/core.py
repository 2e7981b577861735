from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

import numpy as np

from ..events.bus import (
    EVENT_GAME_RESET,
    EVENT_PLACEMENT_REJECTED,
    EVENT_SNAP,
    EVENT_TICK,
    EventBus,
)
from ..events.scheduler import NotificationScheduler
from .board import Block, Board
from .completion import CompletionTracker
from .errors import InvalidArgument, RejectReason
from .placement import PlacementPolicy, resolver_for
from .tray import Tray

logger = logging.getLogger(__name__)

MIN_COLUMNS = 1
MAX_COLUMNS = 10


@dataclass
class GameConfig:
    columns: int = 5
    policy: PlacementPolicy = PlacementPolicy.SINGLE
    tray_random: bool = False
    random_seed: Optional[int] = None
    column_complete_delay: float = 0.3
    victory_delay: float = 0.8


@dataclass(frozen=True)
class PlacementResult:
    accepted: bool
    column: int
    size: int
    rows: Tuple[int, ...] = ()
    reason: Optional[RejectReason] = None
    block: Optional[Block] = None
    column_completed: bool = False
    all_completed: bool = False


@dataclass
class GameState:
    board: Board
    policy: PlacementPolicy
    tray: Tray
    blocks: List[Block] = field(default_factory=list)
    complete: bool = False


def _check_columns(columns) -> int:
    try:
        n = int(columns)
    except (TypeError, ValueError):
        raise InvalidArgument(f"column count must be an integer, got {columns!r}") from None
    if not MIN_COLUMNS <= n <= MAX_COLUMNS:
        raise InvalidArgument(f"column count {columns} outside {MIN_COLUMNS}..{MAX_COLUMNS}")
    return n


def _check_policy(policy) -> PlacementPolicy:
    try:
        return PlacementPolicy(policy)
    except ValueError:
        raise InvalidArgument(f"unknown placement policy {policy!r}") from None


class GameSession:
    """Owns one game: board, resolver policy, completion tracking and tray.

    Front-ends talk to it through ``placement_request`` and ``reset`` and
    listen on ``bus`` for ``snap``, ``column_complete``, ``victory``,
    ``placement_rejected`` and ``game_reset``. Handlers run after the
    session has finished updating and must not call back into it.
    """

    def __init__(self, config: Optional[GameConfig] = None, bus: Optional[EventBus] = None) -> None:
        # own copy: reset() rewrites columns/policy on it
        self.config = replace(config) if config is not None else GameConfig()
        self.config.columns = _check_columns(self.config.columns)
        self.config.policy = _check_policy(self.config.policy)
        self.rng = random.Random(self.config.random_seed)
        self.bus = bus or EventBus()
        self.scheduler = NotificationScheduler(self.bus)
        self.tracker = CompletionTracker(
            self.scheduler,
            self.config.columns,
            column_complete_delay=self.config.column_complete_delay,
            victory_delay=self.config.victory_delay,
        )
        self.state = GameState(
            board=Board(self.config.columns),
            policy=self.config.policy,
            tray=Tray(self.config.policy, self.config.columns, self.config.tray_random, self.rng),
        )
        self._busy = False
        self.reset()

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def policy(self) -> PlacementPolicy:
        return self.state.policy

    @property
    def tray(self) -> Tray:
        return self.state.tray

    @property
    def complete(self) -> bool:
        return self.state.complete

    @property
    def blocks(self) -> List[Block]:
        return list(self.state.blocks)

    def reset(self, columns: Optional[int] = None, policy: Optional[PlacementPolicy | str] = None) -> None:
        self._guard_reentry("reset")
        n = _check_columns(self.config.columns if columns is None else columns)
        active = _check_policy(self.config.policy if policy is None else policy)
        self.config.columns = n
        self.config.policy = active
        self.scheduler.clear()
        self.state.board = Board(n)
        self.state.policy = active
        self.state.blocks = []
        self.state.complete = False
        self.state.tray.reset(active, n, self.config.tray_random)
        self.tracker.reset(n)
        logger.debug("new game: %d columns, %s policy", n, active.value)
        self._emit(EVENT_GAME_RESET, columns=n, policy=active)

    def set_tray_order(self, shuffle: bool) -> None:
        """Reorder the tray in place; the board and used sizes are kept."""
        self._guard_reentry("set_tray_order")
        self.config.tray_random = bool(shuffle)
        self.state.tray.reorder(self.config.tray_random)

    def placement_request(self, column: int, size: int, target_row: Optional[int] = None) -> PlacementResult:
        self._guard_reentry("placement_request")
        if self.state.complete:
            return PlacementResult(False, column, size, reason=RejectReason.GAME_ALREADY_COMPLETE)
        self._check_request(column, size)

        resolution = resolver_for(self.state.policy).resolve(self.board, column, size, target_row)
        if not resolution.accepted:
            logger.debug("rejected size %d in column %d: %s", size, column, resolution.reason.value)
            self._emit(EVENT_PLACEMENT_REJECTED, column=column, size=size, reason=resolution.reason)
            return PlacementResult(False, column, size, reason=resolution.reason)

        block = Block(
            block_id=len(self.state.blocks) + 1,
            column=column,
            origin=resolution.rows[0],
            size=size,
        )
        # all state first; listeners only ever see a settled session
        self.board.place_block(block)
        self.state.blocks.append(block)
        self.state.tray.mark_used(size)
        column_completed = self.tracker.on_placement(self.board, column)
        all_completed = False
        if column_completed and self.tracker.check_all_complete(self.board):
            self.state.complete = True
            all_completed = True
        logger.debug("placed block %d (size %d) in column %d rows %s",
                     block.block_id, size, column, resolution.rows)

        self._busy = True
        try:
            self.bus.emit(EVENT_SNAP, column=column, rows=resolution.rows, size=size, block_id=block.block_id)
        finally:
            try:
                self.tracker.dispatch()
            finally:
                self._busy = False
        return PlacementResult(
            True,
            column,
            size,
            rows=resolution.rows,
            block=block,
            column_completed=column_completed,
            all_completed=all_completed,
        )

    def preview(self, column: int, size: int, target_row: Optional[int] = None) -> Tuple[int, ...]:
        """Rows a request would fill right now, or ``()``; never mutates."""
        if self.state.complete or not self.board.is_inside(column, 0) or not 1 <= size <= self.board.n:
            return ()
        if target_row is not None and not self.board.is_inside(column, target_row):
            return ()
        if self.state.policy == PlacementPolicy.SINGLE and (size != 1 or target_row is None):
            return ()
        return resolver_for(self.state.policy).resolve(self.board, column, size, target_row).rows

    def tick(self, dt: float) -> None:
        self.bus.emit(EVENT_TICK, dt=dt)

    def get_state(self) -> dict:
        return {
            "cells": self.board.clone_state(),
            "columns": self.board.n,
            "policy": self.state.policy.value,
            "filled": dict(self.tracker.filled),
            "completed_columns": sorted(self.tracker.completed_columns),
            "tray": self.state.tray.available(),
            "blocks_placed": len(self.state.blocks),
            "complete": self.state.complete,
        }

    def get_game_stats(self) -> dict:
        sizes = [b.size for b in self.state.blocks]
        return {
            "columns": self.board.n,
            "policy": self.state.policy.value,
            "blocks_placed": len(sizes),
            "avg_block_size": float(np.mean(sizes)) if sizes else 0.0,
            "filled_ratio": self.board.filled_ratio(),
            "complete": self.state.complete,
        }

    def _check_request(self, column: int, size: int) -> None:
        n = self.board.n
        if not 1 <= column <= n:
            raise InvalidArgument(f"column {column} outside 1..{n}")
        if not 1 <= size <= n:
            raise InvalidArgument(f"block size {size} outside 1..{n}")

    def _emit(self, name: str, **payload) -> None:
        self._busy = True
        try:
            self.bus.emit(name, **payload)
        finally:
            self._busy = False

    def _guard_reentry(self, name: str) -> None:
        if self._busy:
            raise RuntimeError(f"{name} called from inside a placement notification")
