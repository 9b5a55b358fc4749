"""Tic-tac-toe board model, minimax solver, move dataset and a small numpy network trained on it."""

__version__ = "0.1.0"