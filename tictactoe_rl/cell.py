"""Board cells, players and board dimensions."""

from __future__ import annotations

from enum import Enum

ROW_COUNT = 3
COLUMN_COUNT = 3
PLAYER_COUNT = 2


class Cell(Enum):
    """Contents of a single square of the board."""

    EMPTY = " "
    O = "O"
    X = "X"

    def as_char(self) -> str:
        """Character used to draw this cell."""
        return self.value

    @classmethod
    def from_player(cls, player: Player) -> Cell:
        """Cell holding the given player's mark."""
        return player.to_cell()


class Player(Enum):
    """One of the two sides of a game."""

    X = "X"
    O = "O"

    def to_cell(self) -> Cell:
        """Cell holding this player's mark."""
        return Cell(self.value)

    def matches(self, cell: Cell) -> bool:
        """Whether the cell holds this player's mark."""
        return cell is self.to_cell()

    def opponent(self) -> Player:
        """The other player."""
        return Player.O if self is Player.X else Player.X