from __future__ import annotations

import random
from typing import List, Optional

from .placement import PlacementPolicy


class Tray:
    """Source blocks offered to the player.

    ``single`` offers an endless stack of unit blocks. ``connected`` offers one
    block of every size ``1..N``, in ascending or shuffled order; a used size
    is hidden from the tray but the session does not refuse a repeat.
    """

    def __init__(self, policy: PlacementPolicy, columns: int, shuffle: bool = False,
                 rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.policy = PlacementPolicy(policy)
        self.columns = int(columns)
        self.shuffle = shuffle
        self.sizes: List[int] = []
        self.used: set[int] = set()
        self.reset(self.policy, self.columns, shuffle)

    def reset(self, policy: PlacementPolicy, columns: int, shuffle: Optional[bool] = None) -> None:
        self.policy = PlacementPolicy(policy)
        self.columns = int(columns)
        if shuffle is not None:
            self.shuffle = shuffle
        self.used = set()
        if self.policy == PlacementPolicy.SINGLE:
            self.sizes = [1]
            return
        self.sizes = list(range(1, self.columns + 1))
        if self.shuffle:
            self.rng.shuffle(self.sizes)

    def reorder(self, shuffle: bool) -> None:
        """Switch between ascending and shuffled order, keeping used sizes hidden."""
        self.shuffle = shuffle
        if self.policy == PlacementPolicy.SINGLE:
            return
        self.sizes = list(range(1, self.columns + 1))
        if self.shuffle:
            self.rng.shuffle(self.sizes)

    def is_available(self, size: int) -> bool:
        if self.policy == PlacementPolicy.SINGLE:
            return size == 1
        return size in self.sizes and size not in self.used

    def available(self) -> List[int]:
        return [s for s in self.sizes if self.is_available(s)]

    @property
    def remaining(self) -> int:
        return len(self.available())

    def mark_used(self, size: int) -> None:
        if self.policy == PlacementPolicy.CONNECTED:
            self.used.add(size)
