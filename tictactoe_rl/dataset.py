"""Training examples: valid boards paired with the minimax move, and batching."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from tictactoe_rl.cell import Player
from tictactoe_rl.grid import Grid
from tictactoe_rl.index import Index


def dataset(player: Player = Player.X) -> list[tuple[Grid, Index]]:
    """Every valid board with the best move for the player."""
    return [(grid, grid.find_best_move(player)) for grid in Grid.all() if grid.is_valid()]


@dataclass(frozen=True)
class TicTacToeBatch:
    """Inputs of shape (batch, 3, 3) and one-hot targets of shape (batch, 9)."""

    inputs: np.ndarray
    targets: np.ndarray

    def __len__(self) -> int:
        return len(self.inputs)


def batch(items: Sequence[tuple[Grid, Index]]) -> TicTacToeBatch:
    """Stack examples, each board encoded from the side whose turn it is."""
    if not items:
        raise ValueError("cannot build a batch from no items")
    inputs = np.stack([grid.encode(grid.current_turn()) for grid, _ in items])
    targets = np.array([move.one_hot_encode() for _, move in items], dtype=np.float32)
    return TicTacToeBatch(inputs=inputs.astype(np.float32), targets=targets)


def batches(
    items: Sequence[tuple[Grid, Index]], batch_size: int, rng=None
) -> Iterator[TicTacToeBatch]:
    """Batches of at most batch_size items, shuffled when a generator or seed is given."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    order = np.arange(len(items))
    if rng is not None:
        np.random.default_rng(rng).shuffle(order)
    for start in range(0, len(order), batch_size):
        yield batch([items[i] for i in order[start:start + batch_size]])