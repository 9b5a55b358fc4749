"""Command that writes every valid board to a text file."""

from __future__ import annotations

import argparse
import os

from tictactoe_rl.grid import Grid


def valid_grids() -> list[Grid]:
    """Every board that can arise in a game, in enumeration order."""
    return [grid for grid in Grid.all() if grid.is_valid()]


def write_valid_grids(path: str | os.PathLike) -> int:
    """Write every valid board to path, replacing it; return how many were written."""
    grids = valid_grids()
    with open(path, "w", encoding="utf-8") as handle:
        for grid in grids:
            handle.write(f"{grid}\n")
    return len(grids)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Write every valid tic-tac-toe board.")
    parser.add_argument(
        "-o", "--output", default="output.txt", help="file to write (default: output.txt)"
    )
    args = parser.parse_args(argv)
    write_valid_grids(args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())