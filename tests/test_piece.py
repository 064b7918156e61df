import pytest

from gridfall.board import Block, Board
from gridfall.piece import COLORS, PATTERNS, Piece, pattern_cells


def board_blocks(board):
    return {id(block) for _row, _col, block in board.blocks()}


def drop_to_floor(piece):
    x, y = piece.coordinate
    while piece.move_to(x, y + 1):
        y += 1
    return y


@pytest.mark.parametrize("kind", sorted(PATTERNS))
def test_every_rotation_has_four_cells(kind):
    for pattern in PATTERNS[kind]:
        cells = pattern_cells(pattern)
        assert len(cells) == 4
        assert all(0 <= dx < 4 and 0 <= dy < 4 for dx, dy in cells)


def test_pattern_cells_of_flat_bar():
    assert pattern_cells(0x0F00) == [(0, 1), (1, 1), (2, 1), (3, 1)]


@pytest.mark.parametrize("kind", sorted(PATTERNS))
def test_new_piece_occupies_board(kind):
    board = Board()
    piece = Piece(board, kind, 3, 0)
    assert board_blocks(board) == {id(block) for block in piece.blocks}
    assert all(block.color == COLORS[kind] for block in piece.blocks)
    assert piece.coordinate == (3, 0)
    assert piece.rotation == 0


def test_block_pixel_position():
    board = Board()
    piece = Piece(board, "o", 3, 0)
    first = piece.blocks[0]
    assert (first.x, first.y) == (90.0, 15.0)
    assert board[(0, 3)] is first


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        Piece(Board(), "q", 3, 0)


def test_move_updates_board():
    board = Board()
    piece = Piece(board, "o", 3, 0)
    assert piece.move_to(4, 1)
    assert piece.coordinate == (4, 1)
    assert board[(0, 3)] is None
    assert board[(1, 4)] in piece.blocks
    assert len(list(board.blocks())) == 4


def test_move_out_of_bounds_is_rejected():
    board = Board()
    piece = Piece(board, "o", 0, 0)
    before = list(board.blocks())
    assert not piece.move_to(-1, 0)
    assert piece.coordinate == (0, 0)
    assert list(board.blocks()) == before


def test_move_onto_block_is_rejected():
    board = Board()
    obstacle = Block("z", COLORS["z"])
    board[(3, 3)] = obstacle
    piece = Piece(board, "o", 3, 0)
    assert piece.move_to(3, 1)
    assert not piece.move_to(3, 2)
    assert piece.coordinate == (3, 1)
    assert board[(3, 3)] is obstacle


def test_is_valid_move_checks_walls():
    board = Board()
    piece = Piece(board, "i", 3, 0)
    flat = PATTERNS["i"][0]
    assert not piece.is_valid_move(Board.COLS - 3, 5, flat)
    assert piece.is_valid_move(Board.COLS - 4, 5, flat)


def test_rotation_changes_cells():
    board = Board()
    piece = Piece(board, "i", 3, 2)
    assert piece.rotate_to(1)
    assert piece.rotation == 1
    columns = {col for _row, col, _block in board.blocks()}
    assert len(columns) == 1
    assert len(list(board.blocks())) == 4


def test_blocked_rotation_keeps_rotation():
    board = Board()
    piece = Piece(board, "i", 3, 0)
    x = drop_to_floor(piece)
    assert not piece.rotate_to(1)
    assert piece.rotation == 0
    assert piece.coordinate[1] == x
    assert len(list(board.blocks())) == 4


def test_rotation_out_of_range_raises():
    piece = Piece(Board(), "t", 3, 0)
    with pytest.raises(ValueError):
        piece.rotate_to(4)


def test_not_grounded_at_spawn():
    piece = Piece(Board(), "o", 3, 0)
    assert not piece.is_grounded()


def test_grounded_on_floor():
    board = Board()
    piece = Piece(board, "o", 3, 0)
    drop_to_floor(piece)
    assert piece.is_grounded()
    assert board[(Board.ROWS - 1, 3)] in piece.blocks
    assert board[(Board.ROWS - 1, 4)] in piece.blocks


def test_grounded_on_other_block():
    board = Board()
    board[(8, 4)] = Block("z", COLORS["z"])
    piece = Piece(board, "o", 3, 0)
    drop_to_floor(piece)
    assert piece.is_grounded()
    assert board[(7, 4)] in piece.blocks


def test_stacked_pieces_do_not_overlap():
    board = Board()
    first = Piece(board, "o", 3, 0)
    drop_to_floor(first)
    second = Piece(board, "o", 3, 0)
    drop_to_floor(second)
    assert second.is_grounded()
    assert len(list(board.blocks())) == 8
    assert second.coordinate[1] < first.coordinate[1]