"""Positions on the board and helpers for flat indexing."""

from __future__ import annotations

from enum import IntEnum

_WIDTH = 3


def serialize_index(row: int, column: int, width: int) -> int:
    """Flat position of (row, column) in a row-major grid of the given width."""
    return row * width + column


def deserialize_index(index: int, width: int) -> tuple[int, int]:
    """(row, column) of a flat position in a row-major grid of the given width."""
    return divmod(index, width)


class Index(IntEnum):
    """A square of the board, numbered row by row."""

    I00 = 0
    I01 = 1
    I02 = 2
    I10 = 3
    I11 = 4
    I12 = 5
    I20 = 6
    I21 = 7
    I22 = 8

    @classmethod
    def from_usize(cls, x: int) -> Index | None:
        """Square at flat position x, or None if out of range."""
        try:
            return cls(x)
        except ValueError:
            return None

    @classmethod
    def from_row_column(cls, row: int, column: int) -> Index | None:
        """Square at (row, column), or None if out of range."""
        if 0 <= row < _WIDTH and 0 <= column < _WIDTH:
            return cls(serialize_index(row, column, _WIDTH))
        return None

    def row_column(self) -> tuple[int, int]:
        """(row, column) of this square."""
        return deserialize_index(self.value, _WIDTH)

    def one_hot_encode(self) -> tuple[float, ...]:
        """Nine values, 1.0 at this square and 0.0 elsewhere."""
        return tuple(1.0 if other is self else 0.0 for other in Index)


ALL: tuple[Index, ...] = tuple(Index)
TOTAL_COUNT: int = len(ALL)
ROWS: tuple[tuple[Index, Index, Index], ...] = (
    (Index.I00, Index.I01, Index.I02),
    (Index.I10, Index.I11, Index.I12),
    (Index.I20, Index.I21, Index.I22),
)
COLUMNS: tuple[tuple[Index, Index, Index], ...] = (
    (Index.I00, Index.I10, Index.I20),
    (Index.I01, Index.I11, Index.I21),
    (Index.I02, Index.I12, Index.I22),
)
DIAGONALS: tuple[tuple[Index, Index, Index], ...] = (
    (Index.I00, Index.I11, Index.I22),
    (Index.I20, Index.I11, Index.I02),
)
GROUPS: tuple[tuple[Index, Index, Index], ...] = ROWS + COLUMNS + DIAGONALS