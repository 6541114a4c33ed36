"""Replays that also show what could be deduced at each step."""

from __future__ import annotations

from dataclasses import dataclass

from .analysis import MinesweeperAnalysis
from .analysis_checks import AnalysisUpdate, AnalyzedCell
from .board import Board, BoardPoint
from .cell import MinesweeperError, PlayerCell
from .plays import OutcomeKind, Play
from .replay import MinesweeperReplay, ReplayPosition, Replayable, SimplePlayer


@dataclass(frozen=True)
class ReplayAnalysisCell:
    """A replay square together with what analysis concluded about it."""

    player_cell: PlayerCell
    analyzed: AnalyzedCell | None = None


class MinesweeperReplayAnalysis(Replayable):
    """Analysis conclusions recorded for every step of a replay."""

    def __init__(
        self, rows: int, cols: int, log: list[list[AnalysisUpdate]]
    ) -> None:
        self.current_board: Board[AnalyzedCell | None] = Board(rows, cols, None)
        self.log = log
        self._pos = 0

    @classmethod
    def from_replay(cls, replay: MinesweeperReplay) -> MinesweeperReplayAnalysis:
        """Run the analysis over a whole replay, which is left at its beginning."""
        replay.to_pos(ReplayPosition.beginning())
        state = MinesweeperAnalysis.from_player_board(replay.current_board)
        log: list[list[AnalysisUpdate]] = []

        for _, outcome in replay.log:
            entry: list[AnalysisUpdate] = []
            log.append(entry)
            if outcome.kind is OutcomeKind.FLAG:
                continue
            new_revealed = list(outcome.cells)
            for point, revealed in new_revealed:
                # an earlier conclusion about this square no longer applies
                update = state.apply_update(point, revealed.contents)
                if update is not None:
                    entry.append(update)

            def worth_analyzing(p: BoardPoint) -> bool:
                return state.is_empty(p) and state.has_undetermined_neighbor(p)

            points: dict[BoardPoint, None] = dict.fromkeys(
                p for p, _ in new_revealed if worth_analyzing(p)
            )
            additional = [
                n
                for p in points
                for n in state.neighbors(p)
                if n not in points and worth_analyzing(n)
            ]
            points.update(dict.fromkeys(additional))
            if outcome.kind is OutcomeKind.FAILURE:
                recheck = [
                    n
                    for n in state.neighbors(new_revealed[0][0])
                    if n not in points and worth_analyzing(n)
                ]
                points.update(dict.fromkeys(recheck))
            entry.extend(state.analyze_cells(list(points)))

        board = replay.current_board
        return cls(board.rows, board.cols, log)

    def __len__(self) -> int:
        return len(self.log) + 1

    def current_pos(self) -> ReplayPosition:
        return ReplayPosition.from_pos(self._pos, len(self))

    def advance(self) -> ReplayPosition:
        if self._pos == len(self) - 1:
            raise MinesweeperError("Called next on end")
        for update in self.log[self._pos]:
            self.current_board[update.point] = update.to
        self._pos += 1
        return self.current_pos()

    def rewind(self) -> ReplayPosition:
        if self._pos == 0:
            raise MinesweeperError("Called prev on start")
        self._pos -= 1
        for update in self.log[self._pos]:
            self.current_board[update.point] = update.from_
        if self._pos > 0:
            for update in self.log[self._pos - 1]:
                self.current_board[update.point] = update.to
        return self.current_pos()


class MinesweeperReplayWithAnalysis(Replayable):
    """A replay whose board shows analysis conclusions alongside each square."""

    def __init__(
        self, replay: MinesweeperReplay, analysis: MinesweeperReplayAnalysis
    ) -> None:
        self.replay = replay
        self.analysis = analysis
        source = replay.current_board
        self.current_board: Board[ReplayAnalysisCell] = Board(
            source.rows, source.cols, ReplayAnalysisCell(PlayerCell.hidden())
        )
        self._update_current_board()

    @classmethod
    def from_replay(cls, replay: MinesweeperReplay) -> MinesweeperReplayWithAnalysis:
        analysis = MinesweeperReplayAnalysis.from_replay(replay)
        return cls(replay, analysis)

    @property
    def current_play(self) -> Play | None:
        return self.replay.current_play

    @property
    def current_players(self) -> list[SimplePlayer]:
        return self.replay.current_players

    def current_flags_and_revealed_mines(self) -> int:
        return self.replay.current_flags_and_revealed_mines()

    def _update_current_board(self) -> None:
        pairs = zip(self.replay.current_board, self.analysis.current_board)
        for index, (player_cell, analyzed) in enumerate(pairs):
            point = self.current_board.point_from_index(index)
            self.current_board[point] = ReplayAnalysisCell(player_cell, analyzed)

    def __len__(self) -> int:
        return len(self.replay)

    def current_pos(self) -> ReplayPosition:
        return self.replay.current_pos()

    def advance(self) -> ReplayPosition:
        try:
            self.analysis.advance()
        except MinesweeperError:
            pass
        pos = self.replay.advance()
        self._update_current_board()
        return pos

    def rewind(self) -> ReplayPosition:
        try:
            self.analysis.rewind()
        except MinesweeperError:
            pass
        pos = self.replay.rewind()
        self._update_current_board()
        return pos