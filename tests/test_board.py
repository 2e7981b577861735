import numpy as np
import pytest

from stair_blocks.game.board import Block, Board, SlotState, create_board
from stair_blocks.game.errors import InvalidArgument, SlotOccupiedError


@pytest.mark.parametrize('n', [1, 2, 5, 10])
def test_create_board_shape(n):
    board = create_board(n)
    assert list(board.columns) == list(range(1, n + 1))
    for column in board.columns:
        assert board.capacity(column) == column
        assert board.column_cells(column).size == column
        assert board.filled_count(column) == 0
        assert all(board.is_empty(column, row) for row in range(column))
    assert board.total_slots() == n * (n + 1) // 2


def test_create_board_rejects_empty():
    with pytest.raises(InvalidArgument):
        Board(0)


def test_occupy_marks_single_slot():
    board = Board(4)
    board.occupy(3, 1, 7)
    assert not board.is_empty(3, 1)
    assert board.filled_count(3) == 1
    slot = board.slot(3, 1)
    assert slot.state is SlotState.OCCUPIED
    assert slot.block_id == 7
    assert board.slot(3, 0).state is SlotState.EMPTY


def test_occupy_twice_raises_and_keeps_first_block():
    board = Board(3)
    board.occupy(2, 0, 1)
    with pytest.raises(SlotOccupiedError):
        board.occupy(2, 0, 2)
    assert board.slot(2, 0).block_id == 1


def test_slot_outside_column_is_invalid():
    board = Board(3)
    assert not board.is_inside(2, 2)
    with pytest.raises(InvalidArgument):
        board.is_empty(2, 2)
    with pytest.raises(InvalidArgument):
        board.filled_count(4)


def test_place_block_is_all_or_nothing():
    board = Board(4)
    board.occupy(4, 2, 9)
    before = board.clone_state()
    with pytest.raises(SlotOccupiedError):
        board.place_block(Block(block_id=10, column=4, origin=0, size=3))
    assert np.array_equal(board.cells, before)


def test_place_block_spans_rows():
    board = Board(4)
    board.place_block(Block(block_id=1, column=4, origin=0, size=3))
    assert list(board.column_cells(4)) == [1, 1, 1, 0]
    assert board.filled_count(4) == 3
    assert not board.is_column_full(4)


def test_full_board_and_ratio():
    board = Board(2)
    assert board.filled_ratio() == 0.0
    board.occupy(1, 0, 1)
    board.place_block(Block(block_id=2, column=2, origin=0, size=2))
    assert board.is_full()
    assert board.filled_ratio() == 1.0
