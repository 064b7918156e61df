import pytest

from gridfall.board import Block, Board
from gridfall.client_state import ClientGameState
from gridfall.protocol import format_state
from gridfall.timeline import Timeline


def _block():
    return Block("x", (0, 0, 0))


def test_new_piece_spawns_at_top():
    state = ClientGameState()
    piece = state.new_piece("i")
    assert state.current_piece is piece
    assert piece.coordinate == (3, 0)
    assert state.pieces == [piece]
    assert sum(1 for _ in state.board.blocks()) == 4


def test_new_piece_uses_first_letter():
    state = ClientGameState()
    assert state.new_piece("tee").kind == "t"


def test_new_piece_rejects_empty_kind():
    with pytest.raises(ValueError):
        ClientGameState().new_piece("")


def test_next_piece_is_fifo():
    state = ClientGameState()
    state.new_pieces.extend(["s", "z"])
    assert state.next_piece() == "s"
    assert state.next_piece() == "z"
    with pytest.raises(LookupError):
        state.next_piece()


def test_start_game_resets():
    state = ClientGameState()
    state.board[(5, 5)] = _block()
    state.line_count = 4
    state.start_game()
    assert state.playing is True
    assert state.line_count == 0
    assert list(state.board.blocks()) == []


def test_deserialize_sets_timing():
    state = ClientGameState()
    state.deserialize(format_state(0.25, 2.0))
    assert (state.dt, state.tic_size) == (0.25, 2.0)


def test_update_does_nothing_when_not_playing():
    steps = []
    state = ClientGameState(on_step=lambda: steps.append(1))
    state.new_piece("i")
    state.dt = 1.0
    state.update()
    assert steps == []
    assert state.elapsed == 0.0


def test_grounded_piece_clears_line_and_asks_for_new_piece():
    requests = []
    state = ClientGameState(on_new_piece=lambda: requests.append(1))
    state.start_game()
    state.deserialize(format_state(0.01, 1.0))
    for col in range(Board.COLS):
        if col not in (3, 4, 5, 6):
            state.board[(Board.ROWS - 1, col)] = _block()
    piece = state.new_piece("i")
    assert piece.move_to(3, Board.ROWS - 2)
    state.update()
    assert state.line_count == 1
    assert requests == [1]
    assert state.playing is True
    assert not state.board.row_is_complete(Board.ROWS - 1)


def test_piece_settling_at_top_ends_game():
    requests = []
    state = ClientGameState(on_new_piece=lambda: requests.append(1))
    state.start_game()
    state.board[(2, 3)] = _block()
    state.new_piece("o")
    state.update()
    assert state.playing is False
    assert requests == []


def test_step_fires_after_step_interval():
    steps = []
    state = ClientGameState(on_step=lambda: steps.append(1))
    state.start_game()
    state.new_piece("i")
    state.deserialize(format_state(0.06, 1.0))
    state.update()
    assert steps == []
    state.update()
    assert steps == [1]
    assert state.elapsed == 0.0


def test_timestamp_from_timeline():
    state = ClientGameState(Timeline())
    assert state.timestamp >= 0.0


def test_timestamp_without_timeline():
    with pytest.raises(RuntimeError):
        ClientGameState().timestamp