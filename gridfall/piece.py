"""Falling pieces: their shapes, colours and movement on the board."""

from __future__ import annotations

import threading
from typing import Dict, List, Tuple

from gridfall.board import Block, Board, Color

# Each shape is four 4x4 bitmasks, one per rotation, read row by row from the top bit.
PATTERNS: Dict[str, Tuple[int, int, int, int]] = {
    "i": (0x0F00, 0x2222, 0x00F0, 0x4444),
    "j": (0x44C0, 0x8E00, 0x6440, 0x0E20),
    "l": (0x4460, 0x0E80, 0xC440, 0x2E00),
    "o": (0xCC00, 0xCC00, 0xCC00, 0xCC00),
    "s": (0x06C0, 0x8C40, 0x6C00, 0x4620),
    "t": (0x0E40, 0x4C40, 0x4E00, 0x4640),
    "z": (0x0C60, 0x4C80, 0xC600, 0x2640),
}

COLORS: Dict[str, Color] = {
    "i": (0, 255, 255),
    "j": (0, 0, 255),
    "l": (255, 165, 0),
    "o": (255, 255, 0),
    "s": (0, 255, 0),
    "t": (255, 0, 255),
    "z": (255, 0, 0),
}

ROTATIONS = 4


def pattern_cells(pattern: int) -> List[Tuple[int, int]]:
    """The (dx, dy) offsets of the set bits of a 4x4 pattern, in reading order."""
    return [(bit % 4, bit // 4) for bit in range(16) if pattern & (1 << (15 - bit))]


class Piece:
    """A four-block piece that occupies cells of a board."""

    def __init__(self, board: Board, kind: str, x: int, y: int) -> None:
        if kind not in PATTERNS:
            raise ValueError(f"unknown piece kind {kind!r}")
        self.kind = kind
        self._board = board
        self._patterns = PATTERNS[kind]
        self._rotation = 0
        self._coordinate = (x, y)
        self._occupied: List[Tuple[int, int]] = []
        self._blocks = [Block(kind, COLORS[kind]) for _ in range(4)]
        self._lock = threading.RLock()
        self._set_position(x, y, self._rotation)

    @property
    def blocks(self) -> List[Block]:
        return list(self._blocks)

    @property
    def coordinate(self) -> Tuple[int, int]:
        """Grid (x, y) of the top-left corner of the piece's 4x4 frame."""
        return self._coordinate

    @property
    def rotation(self) -> int:
        return self._rotation

    def _cells_at(self, x: int, y: int, pattern: int) -> List[Tuple[int, int]]:
        return [(x + dx, y + dy) for dx, dy in pattern_cells(pattern)]

    def is_valid_move(self, x: int, y: int, pattern: int) -> bool:
        """True if the pattern at (x, y) lies inside the board on empty cells."""
        for gx, gy in self._cells_at(x, y, pattern):
            if not (0 <= gx < Board.COLS and 0 <= gy < Board.ROWS):
                return False
            if self._board[(gy, gx)] is not None:
                return False
        return True

    def _lift(self) -> None:
        for gx, gy in self._occupied:
            if self._board[(gy, gx)] in self._blocks:
                self._board[(gy, gx)] = None

    def _drop(self) -> None:
        for (gx, gy), block in zip(self._occupied, self._blocks):
            self._board[(gy, gx)] = block

    def _set_position(self, x: int, y: int, rotation: int) -> bool:
        pattern = self._patterns[rotation]
        with self._lock:
            self._lift()
            if not self.is_valid_move(x, y, pattern):
                self._drop()
                return False
            cells = self._cells_at(x, y, pattern)
            for (gx, gy), block in zip(cells, self._blocks):
                block.x = Board.ORIGIN + Board.CELL_SIZE * gx
                block.y = Board.ORIGIN + Board.CELL_SIZE * gy
            self._occupied = cells
            self._coordinate = (x, y)
            self._drop()
            return True

    def move_to(self, x: int, y: int) -> bool:
        """Move the piece keeping its rotation; False if the move is not possible."""
        return self._set_position(x, y, self._rotation)

    def rotate_to(self, rotation: int) -> bool:
        """Turn the piece in place; False if the rotation is blocked."""
        if rotation not in range(ROTATIONS):
            raise ValueError(f"rotation must be between 0 and {ROTATIONS - 1}, got {rotation}")
        x, y = self._coordinate
        if self._set_position(x, y, rotation):
            self._rotation = rotation
            return True
        return False

    def is_grounded(self) -> bool:
        """True if the piece rests on the floor or on a block not its own."""
        with self._lock:
            x, y = self._coordinate
            cells = self._cells_at(x, y, self._patterns[self._rotation])
            if any(gy >= Board.ROWS - 1 for _gx, gy in cells):
                return True
            own = set(cells)
            return any(
                (gx, gy + 1) not in own and self._board[(gy + 1, gx)] is not None
                for gx, gy in cells
            )