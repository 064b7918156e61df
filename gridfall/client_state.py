"""Client-side game state: the board, the falling piece and the line count."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque, List, Optional

from gridfall.board import Board
from gridfall.piece import Piece
from gridfall.protocol import parse_state
from gridfall.timeline import Timeline

log = logging.getLogger(__name__)

SPAWN_X = 3
SPAWN_Y = 0
# A piece that settles with its frame this high up ends the game.
TOP_OUT_ROW = 1

Callback = Callable[[], None]


class ClientGameState:
    """The game as one client plays it."""

    STEP = 0.1

    def __init__(
        self,
        timeline: Optional[Timeline] = None,
        on_new_piece: Optional[Callback] = None,
        on_step: Optional[Callback] = None,
    ) -> None:
        self.timeline = timeline
        self.on_new_piece = on_new_piece
        self.on_step = on_step
        self.board = Board()
        self.line_count = 0
        self.playing = False
        self.step = self.STEP
        self.dt = 0.0
        self.tic_size = 1.0
        self.elapsed = 0.0
        self.current_piece: Optional[Piece] = None
        self.pieces: List[Piece] = []
        self.new_pieces: Deque[str] = deque()
        self._lock = threading.RLock()

    def start_game(self) -> None:
        """Empty the board, reset the line count and start playing."""
        with self._lock:
            self.board.clear()
            self.line_count = 0
            self.playing = True

    def new_piece(self, kind: str) -> Piece:
        """Put a new piece of the kind named by the first letter of kind at the top."""
        if not kind:
            raise ValueError("piece kind must not be empty")
        with self._lock:
            piece = Piece(self.board, kind[0], SPAWN_X, SPAWN_Y)
            self.pieces.append(piece)
            self.current_piece = piece
            return piece

    def next_piece(self) -> str:
        """Take the oldest piece kind the server has handed out."""
        with self._lock:
            if not self.new_pieces:
                raise LookupError("no piece is waiting")
            return self.new_pieces.popleft()

    def _clear_completed_lines(self) -> int:
        with self._lock:
            cleared = self.board.clear_completed_lines()
            self.line_count += cleared
        if cleared:
            log.debug("cleared %d line(s)\n%s", cleared, self.board.render())
        return cleared

    def update(self) -> None:
        """Advance one frame: settle a grounded piece, end or continue, drop on each step."""
        if not self.playing:
            return
        self.elapsed += self.dt

        piece = self.current_piece
        if piece is not None and piece.is_grounded():
            self._clear_completed_lines()
            if piece.coordinate[1] <= TOP_OUT_ROW:
                self.playing = False
            elif self.on_new_piece is not None:
                self.on_new_piece()

        if self.playing and self.elapsed >= self.step and self.current_piece is not None:
            if self.on_step is not None:
                self.on_step()
            self.elapsed = 0.0

    def deserialize(self, data: str) -> None:
        """Take the frame timing from a state message published by the server."""
        dt, tic_size = parse_state(data)
        with self._lock:
            self.dt = dt
            self.tic_size = tic_size

    @property
    def timestamp(self) -> float:
        if self.timeline is None:
            raise RuntimeError("no timeline attached")
        return self.timeline.timestamp