import random

from stair_blocks.game.placement import PlacementPolicy
from stair_blocks.game.tray import Tray


def test_single_tray_is_endless():
    tray = Tray(PlacementPolicy.SINGLE, 5)
    assert tray.available() == [1]
    tray.mark_used(1)
    assert tray.available() == [1]
    assert not tray.is_available(2)


def test_connected_tray_offers_each_size_once():
    tray = Tray(PlacementPolicy.CONNECTED, 4)
    assert tray.available() == [1, 2, 3, 4]
    tray.mark_used(3)
    assert tray.available() == [1, 2, 4]
    assert tray.remaining == 3
    assert not tray.is_available(3)


def test_shuffled_tray_is_a_permutation():
    tray = Tray(PlacementPolicy.CONNECTED, 10, shuffle=True, rng=random.Random(3))
    assert sorted(tray.available()) == list(range(1, 11))
    again = Tray(PlacementPolicy.CONNECTED, 10, shuffle=True, rng=random.Random(3))
    assert tray.available() == again.available()


def test_reset_restores_sizes():
    tray = Tray(PlacementPolicy.CONNECTED, 3)
    tray.mark_used(1)
    tray.reset(PlacementPolicy.CONNECTED, 2)
    assert tray.available() == [1, 2]
    tray.reset(PlacementPolicy.SINGLE, 2)
    assert tray.available() == [1]


def test_reorder_keeps_used_sizes():
    tray = Tray(PlacementPolicy.CONNECTED, 6, rng=random.Random(5))
    tray.mark_used(2)
    tray.mark_used(5)
    tray.reorder(True)
    assert tray.shuffle
    assert sorted(tray.available()) == [1, 3, 4, 6]
    tray.reorder(False)
    assert tray.available() == [1, 3, 4, 6]


def test_reorder_single_tray_is_unchanged():
    tray = Tray(PlacementPolicy.SINGLE, 4)
    tray.reorder(True)
    assert tray.available() == [1]
