"""Board-wide analysis: deduce which hidden squares are safe or mined."""

from __future__ import annotations

from typing import Iterable

from .analysis_checks import (
    UNDETERMINED,
    AnalysisCell,
    AnalysisUpdate,
    AnalyzedCell,
    perform_checks,
)
from .board import Board, BoardPoint
from .cell import Cell, PlayerCell
from .upair import UnorderedPair

_OPPOSITE = {
    AnalyzedCell.MINE: AnalyzedCell.EMPTY,
    AnalyzedCell.EMPTY: AnalyzedCell.MINE,
}


class MinesweeperAnalysis:
    """Running deductions about a board as squares are revealed.

    Revealed numbers on the analysis board hold the count of mines that are
    still unaccounted for, so they shrink as mines become known.
    """

    def __init__(
        self,
        analysis_board: Board[AnalysisCell],
        fifty_fiftys: Iterable[UnorderedPair[BoardPoint]] | None = None,
    ) -> None:
        self.analysis_board = analysis_board
        self.fifty_fiftys: list[UnorderedPair[BoardPoint]] = list(fifty_fiftys or ())

    @classmethod
    def from_player_board(cls, board: Board[PlayerCell]) -> MinesweeperAnalysis:
        """Start an analysis from what a player can see."""
        analysis_board: Board[AnalysisCell] = Board(board.rows, board.cols, UNDETERMINED)
        revealed_mines: list[BoardPoint] = []
        for index, player_cell in enumerate(board):
            revealed = player_cell.revealed_cell
            if revealed is None:
                continue
            point = analysis_board.point_from_index(index)
            if revealed.contents.is_mine():
                revealed_mines.append(point)
            analysis_board[point] = AnalysisCell.revealed(revealed.contents)
        analysis = cls(analysis_board)
        for mine in revealed_mines:
            analysis._reduce_revealed_neighbors(mine)
        return analysis

    def _reduce_revealed_neighbors(self, point: BoardPoint) -> None:
        for neighbor in self.analysis_board.neighbors(point):
            cell = self.analysis_board[neighbor].cell
            if cell is not None:
                self.analysis_board[neighbor] = AnalysisCell.revealed(cell.decrement())

    def analyze_board(self) -> list[AnalysisUpdate]:
        """Analyse every revealed number that still touches an undetermined square."""
        points = [
            point
            for point in (
                self.analysis_board.point_from_index(i)
                for i in range(self.analysis_board.size())
            )
            if self.is_empty(point) and self.has_undetermined_neighbor(point)
        ]
        return self.analyze_cells(points)

    def analyze_cells(self, points: Iterable[BoardPoint]) -> list[AnalysisUpdate]:
        """Analyse the given revealed numbers, repeating until nothing new is found."""
        points = list(points)
        changes: list[AnalysisUpdate] = []
        has_updates = False
        to_reanalyze: dict[BoardPoint, None] = dict.fromkeys(points)

        for point in points:
            result = perform_checks(point, self.analysis_board, self.fifty_fiftys)
            if result.found_fifty_fifty is not None or result.guaranteed_plays:
                has_updates = True

            pair = result.found_fifty_fifty
            if pair is not None:
                self.fifty_fiftys.append(pair)
                for member in pair:
                    to_reanalyze.update(dict.fromkeys(self.analysis_board.neighbors(member)))

            plays = list(result.guaranteed_plays)
            while plays:
                handled = {update.point for update in changes}
                pending = [(p, verdict) for p, verdict in plays if p not in handled]
                plays = []
                for target, verdict in pending:
                    self._resolve_fifty_fiftys(target, verdict, plays)
                    current = self.analysis_board[target]
                    previous = (
                        current.analyzed
                        if current.analyzed in (AnalyzedCell.EMPTY, AnalyzedCell.MINE)
                        else None
                    )
                    self.analysis_board[target] = AnalysisCell.hidden(verdict)
                    changes.append(AnalysisUpdate(target, previous, verdict))
                    for neighbor in self.analysis_board.neighbors(target):
                        if verdict is AnalyzedCell.MINE:
                            cell = self.analysis_board[neighbor].cell
                            if cell is not None:
                                self.analysis_board[neighbor] = AnalysisCell.revealed(
                                    cell.decrement()
                                )
                        to_reanalyze[neighbor] = None

        if not has_updates:
            return changes
        next_points = [
            p for p in to_reanalyze if self.is_empty(p) and self.has_undetermined_neighbor(p)
        ]
        changes.extend(self.analyze_cells(next_points))
        return changes

    def _resolve_fifty_fiftys(
        self,
        point: BoardPoint,
        verdict: AnalyzedCell,
        plays: list[tuple[BoardPoint, AnalyzedCell]],
    ) -> None:
        """Drop the fifty-fiftys holding ``point`` and queue their other halves."""
        remaining: list[UnorderedPair[BoardPoint]] = []
        for pair in self.fifty_fiftys:
            if point not in pair:
                remaining.append(pair)
                continue
            if verdict not in _OPPOSITE:
                raise ValueError("a guaranteed play cannot be undetermined")
            new_play = (pair.other(point), _OPPOSITE[verdict])
            if new_play not in plays:
                plays.append(new_play)
        self.fifty_fiftys = remaining

    def apply_update(self, point: BoardPoint, cell: Cell) -> AnalysisUpdate | None:
        """Record that ``point`` was revealed as ``cell``.

        Returns the update that clears any earlier conclusion about the square.
        """
        current = self.analysis_board[point]
        update = None
        if current != UNDETERMINED:
            update = AnalysisUpdate(point, current.analyzed, None)
        if not cell.is_mine():
            for neighbor in self.analysis_board.neighbors(point):
                if self.is_mine(neighbor):
                    cell = cell.decrement()
        elif not self.is_mine(point):
            self._reduce_revealed_neighbors(point)
        self.fifty_fiftys = [pair for pair in self.fifty_fiftys if point not in pair]
        self.analysis_board[point] = AnalysisCell.revealed(cell)
        return update

    def has_undetermined_neighbor(self, point: BoardPoint) -> bool:
        return any(
            self.analysis_board[n] == UNDETERMINED
            for n in self.analysis_board.neighbors(point)
        )

    def is_empty(self, point: BoardPoint) -> bool:
        """Return True if ``point`` is a revealed number."""
        cell = self.analysis_board[point].cell
        return cell is not None and not cell.is_mine()

    def is_mine(self, point: BoardPoint) -> bool:
        """Return True if ``point`` is a revealed mine or a deduced one."""
        square = self.analysis_board[point]
        if square.cell is not None:
            return square.cell.is_mine()
        return square.analyzed is AnalyzedCell.MINE

    def neighbors(self, point: BoardPoint) -> list[BoardPoint]:
        return self.analysis_board.neighbors(point)