import pytest

from stair_blocks.game.board import Board
from stair_blocks.game.errors import InvalidArgument, RejectReason
from stair_blocks.game.placement import (ExactSlotResolver, GravityResolver, PlacementPolicy,
                                         landing_row, resolver_for)


def test_resolver_for_policy():
    assert isinstance(resolver_for(PlacementPolicy.SINGLE), ExactSlotResolver)
    assert isinstance(resolver_for('connected'), GravityResolver)
    with pytest.raises(InvalidArgument):
        resolver_for('diagonal')


def test_exact_accepts_empty_target():
    board = Board(4)
    res = ExactSlotResolver().resolve(board, 4, 1, target_row=2)
    assert res.accepted
    assert res.rows == (2,)


def test_exact_does_not_search():
    board = Board(4)
    board.occupy(4, 2, 1)
    res = ExactSlotResolver().resolve(board, 4, 1, target_row=2)
    assert not res.accepted
    assert res.reason is RejectReason.ROWS_OCCUPIED
    assert res.rows == ()


def test_exact_full_column():
    board = Board(2)
    board.occupy(1, 0, 1)
    res = ExactSlotResolver().resolve(board, 1, 1, target_row=0)
    assert res.reason is RejectReason.COLUMN_FULL


@pytest.mark.parametrize('size,row', [(2, 0), (1, None), (1, 5)])
def test_exact_contract_violations(size, row):
    with pytest.raises(InvalidArgument):
        ExactSlotResolver().resolve(Board(4), 4, size, target_row=row)


def test_landing_row():
    board = Board(3)
    assert landing_row(board, 3) == 0
    board.occupy(3, 0, 1)
    assert landing_row(board, 3) == 1
    board.occupy(3, 1, 2)
    board.occupy(3, 2, 3)
    assert landing_row(board, 3) is None


@pytest.mark.parametrize('filled,size,accepted', [
    (0, 4, True),
    (0, 5, False),
    (2, 2, True),
    (2, 3, False),
    (3, 1, True),
])
def test_gravity_headroom(filled, size, accepted):
    board = Board(5)
    for row in range(filled):
        board.occupy(4, row, row + 1)
    res = GravityResolver().resolve(board, 4, size)
    assert res.accepted is accepted
    if accepted:
        assert res.rows == tuple(range(filled, filled + size))
    else:
        assert res.reason is RejectReason.INSUFFICIENT_SPACE


def test_gravity_ignores_drop_row():
    board = Board(4)
    res = GravityResolver().resolve(board, 4, 2, target_row=3)
    assert res.rows == (0, 1)


def test_gravity_full_column():
    board = Board(2)
    board.occupy(2, 0, 1)
    board.occupy(2, 1, 2)
    res = GravityResolver().resolve(board, 2, 1)
    assert res.reason is RejectReason.COLUMN_FULL


def test_gravity_checks_each_row_above_landing():
    # A hole below an occupied slot cannot come from gravity play, but the
    # resolver still verifies every row instead of assuming contiguity.
    board = Board(4)
    board.occupy(4, 1, 9)
    res = GravityResolver().resolve(board, 4, 2)
    assert res.reason is RejectReason.ROWS_OCCUPIED
    assert GravityResolver().resolve(board, 4, 1).rows == (0,)
