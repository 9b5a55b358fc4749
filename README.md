# tictactoe-rl

A tic-tac-toe toolkit built on numpy:

- a board model (`Grid`, `Cell`, `Player`, `Index`) that can enumerate every
  board, check whether a position can occur in a game where X moves first, and
  tell whether a game is over;
- a minimax solver that finds the best move for either player;
- a dataset of every valid position paired with its best move;
- a small fully connected network (9 → 64 → 64 → 9, ReLU) trained with
  cross-entropy loss and Adam to predict that move.

## Installation

```sh
pip install .
```

Add the `test` extra to run the test suite:

```sh
pip install ".[test]"
pytest
```

## Listing every valid board

```sh
tictactoe-rl
```

This writes every valid board to `output.txt` in the current directory,
replacing the file if it exists. Use `-o`/`--output` to choose another file:

```sh
tictactoe-rl --output boards.txt
```

Each board is drawn like this, followed by a blank line:

```
+-+-+-+
|X|O| |
+-+-+-+
| |X| |
+-+-+-+
|O| |X|
+-+-+-+
```

The same from Python:

```python
from tictactoe_rl.cli import valid_grids, write_valid_grids

grids = valid_grids()                    # list of Grid, in enumeration order
count = write_valid_grids("output.txt")  # number of boards written
```

## Working with boards

```python
from tictactoe_rl.cell import Cell, Player
from tictactoe_rl.grid import GameOver, Grid
from tictactoe_rl.index import Index

grid = Grid.empty().with_cell(Index.I11, Cell.X)
print(grid)
print(grid.is_valid())                 # True
print(grid.game_over())                # None: the game goes on
print(grid.count_cells())              # (1, 0, 8): X, O and empty squares
print(grid.find_best_move(Player.O))   # an Index
print(grid.encode(Cell.O))             # 3x3 float32 array: 1.0 own, -1.0 opponent, 0.0 empty
```

`Grid` is immutable; `with_cell` returns a new board. `Grid.all()` yields all
3⁹ boards, valid or not, and `Grid.from_cells` builds a board from nine cells
listed row by row. `Grid.game_over()` returns `GameOver.X`, `GameOver.O`,
`GameOver.DRAW` or `None`. `Grid.minimax(is_x_turn)` scores a position under
perfect play: 1 when X wins, -1 when O wins, 0 for a draw.

`Index` numbers the squares `I00` to `I22` row by row;
`Index.from_row_column`, `Index.from_usize`, `Index.row_column` and
`Index.one_hot_encode` convert between forms. The module also provides
`serialize_index` and `deserialize_index` for row-major flat positions, and the
line groups `ROWS`, `COLUMNS`, `DIAGONALS` and `GROUPS`.

## Dataset and batches

```python
from tictactoe_rl.cell import Player
from tictactoe_rl.dataset import batches, dataset

items = dataset(Player.X)   # list of (Grid, Index) for every valid board
for batch in batches(items, batch_size=64, rng=0):
    batch.inputs    # shape (n, 3, 3), each board encoded for the side to move
    batch.targets   # shape (n, 9), one-hot best move
```

`batches` shuffles only when `rng` (a seed or numpy generator) is given.

## Training the network

```python
from tictactoe_rl.cell import Player
from tictactoe_rl.network import TicTacToeNetworkConfig
from tictactoe_rl.train import AdamConfig, TrainingConfig, train

config = TrainingConfig(
    model=TicTacToeNetworkConfig(),
    optimizer=AdamConfig(),
    player=Player.X,
    num_epochs=1000,
)
network, history = train("./artifacts", config)
print(history[-1].valid_accuracy)
```

`train` creates the artifact directory if needed, writes `config.json` there
before training and `model.npz` after it, and returns the trained network
together with one `EpochMetrics` (training and validation loss and accuracy)
per epoch. Progress is reported through the `logging` module at INFO level.

The `TrainingConfig` defaults are 10 epochs, batch size 64, seed 42 and a
learning rate of 1e-4. `TrainingConfig.load` reads a saved configuration back,
and `TicTacToeNetwork.load` reads a saved model.

Using a network directly:

```python
import numpy as np
from tictactoe_rl.network import TicTacToeNetwork

network = TicTacToeNetwork.load("artifacts/model.npz")
scores = network.forward(np.stack([grid.encode(grid.current_turn())]))  # shape (1, 9)
```

## What it does not do

- Training runs on the CPU in a single process with numpy. `num_workers` is
  kept in `TrainingConfig` and in `config.json` but does not start workers.
- Only the final model is saved; there are no per-epoch checkpoints.
- There is no command for training or for playing a game; both are done from
  Python as shown above.