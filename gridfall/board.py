"""The playing field: a fixed grid of settled and falling blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

Color = Tuple[int, int, int]
Cell = Tuple[int, int]


@dataclass(eq=False)
class Block:
    """One square of a piece, with its colour and its pixel position."""

    kind: str
    color: Color
    x: float = 0.0
    y: float = 0.0


class Board:
    """A grid of ROWS by COLS cells, indexed by (row, col); empty cells hold None."""

    ROWS = 16
    COLS = 10
    CELL_SIZE = 25.0
    ORIGIN = 15.0

    def __init__(self) -> None:
        self._cells: List[List[Optional[Block]]] = self._empty_rows(self.ROWS)

    @classmethod
    def _empty_rows(cls, count: int) -> List[List[Optional[Block]]]:
        return [[None] * cls.COLS for _ in range(count)]

    def _check(self, cell: Cell) -> Cell:
        row, col = cell
        if not (0 <= row < self.ROWS and 0 <= col < self.COLS):
            raise IndexError(f"cell {cell} is outside the board")
        return row, col

    def __getitem__(self, cell: Cell) -> Optional[Block]:
        row, col = self._check(cell)
        return self._cells[row][col]

    def __setitem__(self, cell: Cell, block: Optional[Block]) -> None:
        row, col = self._check(cell)
        self._cells[row][col] = block

    def row_is_complete(self, row: int) -> bool:
        self._check((row, 0))
        return all(block is not None for block in self._cells[row])

    def clear_completed_lines(self) -> int:
        """Remove full rows, drop the rows above them, and return how many were removed."""
        completed = {row for row in range(self.ROWS) if self.row_is_complete(row)}
        if not completed:
            return 0
        kept = [cells for row, cells in enumerate(self._cells) if row not in completed]
        self._cells = self._empty_rows(len(completed)) + kept
        for row, _col, block in self.blocks():
            block.y = self.ORIGIN + row * self.CELL_SIZE
        return len(completed)

    def blocks(self) -> Iterator[Tuple[int, int, Block]]:
        """Yield (row, col, block) for every occupied cell, top row first."""
        for row, cells in enumerate(self._cells):
            for col, block in enumerate(cells):
                if block is not None:
                    yield row, col, block

    def clear(self) -> None:
        self._cells = self._empty_rows(self.ROWS)

    def render(self) -> str:
        """Text picture of the board: X for a block, 0 for an empty cell."""
        return "\n".join(
            " ".join("0" if block is None else "X" for block in cells)
            for cells in self._cells
        )