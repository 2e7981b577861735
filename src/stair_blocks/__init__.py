"""Stair Blocks: fill a staircase of columns with dragged blocks."""

from .game import GameConfig, GameSession, PlacementPolicy, RejectReason

__all__ = ["GameConfig", "GameSession", "PlacementPolicy", "RejectReason"]
