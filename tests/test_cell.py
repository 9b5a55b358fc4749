import pytest

from tictactoe_rl.cell import PLAYER_COUNT, Cell, Player


def test_variant_order():
    assert list(Cell) == [Cell.EMPTY, Cell.O, Cell.X]
    assert Cell.EMPTY.as_char() == " "
    assert Cell.O.as_char() == "O"
    assert Cell.X.as_char() == "X"


@pytest.mark.parametrize(
    ("cell", "char"),
    [(Cell.EMPTY, " "), (Cell.O, "O"), (Cell.X, "X")],
)
def test_as_char(cell, char):
    assert cell.as_char() == char


@pytest.mark.parametrize(
    ("player", "cell"),
    [(Player.X, Cell.X), (Player.O, Cell.O)],
)
def test_player_to_cell_and_back(player, cell):
    assert player.to_cell() is cell
    assert Cell.from_player(player) is cell


def test_matches_only_own_mark():
    assert Player.X.matches(Cell.X)
    assert not Player.X.matches(Cell.O)
    assert not Player.X.matches(Cell.EMPTY)
    assert Player.O.matches(Cell.O)
    assert not Player.O.matches(Cell.X)
    assert not Player.O.matches(Cell.EMPTY)


def test_opponent_is_involution():
    assert Player.X.opponent() is Player.O
    assert Player.O.opponent() is Player.X
    assert Player.X.opponent().opponent() is Player.X
    assert Player.O.opponent().opponent() is Player.O


def test_players_map_to_distinct_cells():
    cells = {Cell.from_player(Player.X), Cell.from_player(Player.O)}
    assert len(cells) == PLAYER_COUNT
    assert Cell.EMPTY not in cells