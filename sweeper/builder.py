"""Options and a builder for starting new games."""

from __future__ import annotations

import random
from dataclasses import dataclass

from .board import Board, BoardPoint
from .cell import Cell, CellState, MinesweeperError
from .game import Minesweeper


@dataclass(frozen=True)
class MinesweeperOpts:
    """Board size and number of mines for a new game."""

    rows: int
    cols: int
    num_mines: int

    def validate(self) -> bool:
        """Return True if the options describe a playable board."""
        if self.rows <= 0 or self.cols <= 0 or self.num_mines <= 0:
            return False
        return self.num_mines < self.rows * self.cols


class MinesweeperBuilder:
    """Collects game settings and creates a game with randomly planted mines."""

    def __init__(self, opts: MinesweeperOpts) -> None:
        if not opts.validate():
            raise MinesweeperError("Invalid minesweeper options")
        self.opts = opts
        self.players: int | None = None
        self.log = False
        self.superclick = False

    def with_multiplayer(self, players: int) -> MinesweeperBuilder:
        self.players = players
        return self

    def with_log(self) -> MinesweeperBuilder:
        self.log = True
        return self

    def with_superclick(self) -> MinesweeperBuilder:
        self.superclick = True
        return self

    def init(self) -> Minesweeper:
        """Create the game, planting mines at random squares."""
        board: Board[tuple[Cell, CellState]] = Board(
            self.opts.rows, self.opts.cols, (Cell.empty(), CellState())
        )
        points: list[BoardPoint] = [board.point_from_index(i) for i in range(board.size())]
        random.shuffle(points)
        game = Minesweeper(
            board,
            players=self.players if self.players is not None else 1,
            superclick=self.superclick,
            log=self.log,
        )
        for point in points[: self.opts.num_mines]:
            game.plant(point)
        return game