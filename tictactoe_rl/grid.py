"""The tic-tac-toe board, its rules and perfect play by minimax."""

from __future__ import annotations

import functools
import itertools
import math
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

import numpy as np

from tictactoe_rl.cell import Cell, Player
from tictactoe_rl.index import ALL, GROUPS, TOTAL_COUNT, Index

_BORDER = "+-+-+-+"


class GameOver(Enum):
    """How a finished game ended."""

    X = "X"
    O = "O"
    DRAW = "Draw"


@dataclass(frozen=True)
class Grid:
    """An immutable 3x3 board, stored row by row."""

    cells: tuple[tuple[Cell, ...], ...]

    AREA: ClassVar[int] = 9
    SIZE: ClassVar[int] = 3

    @classmethod
    def all(cls) -> Iterator[Grid]:
        """Every assignment of cells to the nine squares, valid or not."""
        for cells in itertools.product(Cell, repeat=TOTAL_COUNT):
            yield cls.from_cells(cells)

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> Grid:
        """Board from nine cells listed row by row."""
        flat = tuple(cells)
        if len(flat) != cls.AREA:
            raise ValueError(f"a grid needs {cls.AREA} cells, got {len(flat)}")
        for cell in flat:
            if not isinstance(cell, Cell):
                raise TypeError(f"expected a Cell, got {cell!r}")
        rows = tuple(flat[start:start + cls.SIZE] for start in range(0, cls.AREA, cls.SIZE))
        return cls(rows)

    @classmethod
    def empty(cls) -> Grid:
        """Board with every square empty."""
        return cls.from_cells([Cell.EMPTY] * cls.AREA)

    def _flat(self) -> tuple[Cell, ...]:
        return tuple(itertools.chain.from_iterable(self.cells))

    def _empty_indices(self) -> Iterator[Index]:
        return (index for index in ALL if self[index] is Cell.EMPTY)

    def __getitem__(self, index: Index) -> Cell:
        row, column = Index(index).row_column()
        return self.cells[row][column]

    def with_cell(self, index: Index, cell: Cell) -> Grid:
        """Copy of this board with one square replaced."""
        flat = list(self._flat())
        flat[Index(index)] = cell
        return Grid.from_cells(flat)

    def count_cells(self) -> tuple[int, int, int]:
        """Counts of (X, O, empty) squares."""
        counts = Counter(self._flat())
        return counts[Cell.X], counts[Cell.O], counts[Cell.EMPTY]

    def is_valid(self) -> bool:
        """Whether the board can arise in a game where X moves first."""
        x_count, o_count, _ = self.count_cells()
        if x_count != o_count and x_count != o_count + 1:
            return False
        outcome = self.game_over()
        if outcome is GameOver.X:
            return x_count == o_count + 1
        if outcome is GameOver.O:
            return x_count == o_count
        return True

    def is_x_turn(self) -> bool:
        x_count, o_count, _ = self.count_cells()
        return x_count != o_count and x_count != o_count + 1

    def current_turn(self) -> Cell:
        return Cell.X if self.is_x_turn() else Cell.O

    def game_over(self) -> GameOver | None:
        """The result if the game has ended, otherwise None."""
        for a, b, c in GROUPS:
            cell = self[a]
            if cell is not Cell.EMPTY and self[b] is cell and self[c] is cell:
                return GameOver.X if cell is Cell.X else GameOver.O
        if all(cell is not Cell.EMPTY for cell in self._flat()):
            return GameOver.DRAW
        return None

    def find_best_move(self, player: Player) -> Index:
        """Square where the player should move under perfect play; I00 if none is free."""
        maximizing = player is Player.X
        best_score = -math.inf if maximizing else math.inf
        best_move = Index.I00
        mark = player.to_cell()
        for index in self._empty_indices():
            score = self.with_cell(index, mark).minimax(player is Player.O)
            if (score > best_score) if maximizing else (score < best_score):
                best_score = score
                best_move = index
        return best_move

    def minimax(self, is_x_turn: bool) -> int:
        """Value of the position under perfect play: 1 X wins, -1 O wins, 0 draw."""
        return _minimax(self, is_x_turn)

    def encode(self, perspective: Cell) -> np.ndarray:
        """3x3 float32 array: 1.0 for perspective's cells, -1.0 for the opponent's, else 0.0."""
        opponent = Cell.O if perspective is Cell.X else Cell.X
        return np.array(
            [
                [
                    1.0 if cell is perspective else -1.0 if cell is opponent else 0.0
                    for cell in row
                ]
                for row in self.cells
            ],
            dtype=np.float32,
        )

    def __str__(self) -> str:
        lines = [_BORDER]
        for row in self.cells:
            lines.append("|" + "".join(f"{cell.as_char()}|" for cell in row))
            lines.append(_BORDER)
        return "\n".join(lines) + "\n\n"


@functools.lru_cache(maxsize=None)
def _minimax(grid: Grid, is_x_turn: bool) -> int:
    outcome = grid.game_over()
    if outcome is GameOver.X:
        return 1
    if outcome is GameOver.O:
        return -1
    if outcome is GameOver.DRAW:
        return 0
    mark = Cell.X if is_x_turn else Cell.O
    scores = [
        _minimax(grid.with_cell(index, mark), not is_x_turn)
        for index in grid._empty_indices()
    ]
    if not scores:
        raise ValueError("non-terminal position must have legal moves")
    return max(scores) if is_x_turn else min(scores)