# gridfall

Game logic for a falling-block puzzle played over the network, and the server
that coordinates it. The server hands out the next piece kinds and publishes
the game clock; each player keeps a 10 × 16 board, drops pieces, clears
completed lines and counts them.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
gridfall-server
```

By default it answers client requests on `tcp://*:5555` and publishes the
state on `tcp://*:5556`. Both can be changed:

```
gridfall-server --reply tcp://*:6000 --publish tcp://*:6001
```

While at least one client is connected the server publishes, about every
10 ms, a state line of the form `[ dt tic_size ]`. Clients that send nothing
between two sweeps (every 200 seconds) are dropped.

## The board and pieces

The board and piece logic have no dependency on networking:

```python
from gridfall.board import Board
from gridfall.piece import Piece

board = Board()
piece = Piece(board, "t", 3, 0)
piece.move_to(3, 1)
piece.rotate_to(1)
if piece.is_grounded():
    cleared = board.clear_completed_lines()
print(board.render())
```

Piece kinds are `i`, `j`, `l`, `o`, `s`, `t` and `z`. `move_to` and
`rotate_to` return `False` when the move is blocked; `Board.render` draws the
board with `X` for a block and `0` for an empty cell.

## Other modules

- `gridfall.client_state.ClientGameState` ties a board to a
  `gridfall.timeline.Timeline`. Each call to `update` settles a grounded piece,
  counts cleared lines, ends the game when a piece settles at the top, and
  calls the `on_new_piece` and `on_step` callbacks you supply. `deserialize`
  reads the server's state line.
- `gridfall.protocol` holds the request and state formats (`format_request`,
  `parse_request`, `format_state`, `parse_state`, `encode_client_id`,
  `decode_client_id`) and the server's `ConnectionTable`.
- `gridfall.server.GameServer.handle_request` answers a single client message
  and can be used without sockets.
- `gridfall.objects`, `gridfall.collider`, `gridfall.mover` and
  `gridfall.character` provide rectangular world objects, collision tests,
  repeating movement patterns and a gravity-driven character.

## What is not included

There is no playable client: no window, no drawing of the board and no
keyboard or mouse input. A program that wants to play has to connect to the
server itself, send requests built with `format_request`, feed the published
state to `ClientGameState.deserialize`, and move and rotate the current piece
in response to its own input.