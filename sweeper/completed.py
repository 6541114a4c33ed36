"""A finished game: final boards, scores and the recorded log."""

from __future__ import annotations

from typing import Iterable

from .board import Board
from .cell import MinesweeperError, PlayerCell
from .client import ClientPlayer
from .plays import Action, OutcomeKind, Play, PlayOutcome, Player
from .replay import MinesweeperReplay

LogEntry = tuple[Play, PlayOutcome]


class CompletedMinesweeper:
    """The state of a game after it has ended."""

    def __init__(
        self,
        players: Iterable[Player],
        board: Board[PlayerCell],
        log: list[LogEntry] | None = None,
    ) -> None:
        self.players: list[Player] = list(players)
        self.board = board
        self.log = log

    @classmethod
    def from_log(
        cls,
        board: Board[PlayerCell],
        log: Iterable[LogEntry],
        players: Iterable[ClientPlayer],
    ) -> CompletedMinesweeper:
        """Rebuild a finished game from its final board, log and player summaries."""
        client_players = list(players)
        restored = [Player() for _ in client_players]
        for client_player in client_players:
            target = restored[client_player.player_id]
            target.score = client_player.score
            target.dead = client_player.dead
            target.victory_click = client_player.victory_click
        entries = list(log)
        for play, outcome in entries:
            if outcome.kind is OutcomeKind.FLAG:
                point, _ = outcome.cells[0]
                restored[play.player].flags.add(point)
        return cls(restored, board, entries)

    def recover_log(self) -> list[LogEntry] | None:
        return self.log

    def _player(self, player: int) -> Player:
        if not 0 <= player < len(self.players):
            raise MinesweeperError(f"Player {player} doesn't exist")
        return self.players[player]

    def player_score(self, player: int) -> int:
        return self._player(player).score

    def player_dead(self, player: int) -> bool:
        return self._player(player).dead

    def player_victory_click(self, player: int) -> bool:
        return self._player(player).victory_click

    def _highest_score(self) -> int:
        return max((p.score for p in self.players), default=0)

    def top_score(self) -> int | None:
        """Return the best score in a multiplayer game, or None if there is none."""
        if len(self.players) < 2:
            return None
        return self._highest_score() or None

    def player_top_score(self, player: int) -> bool:
        target = self._player(player)
        if len(self.players) < 2:
            return False
        top = self._highest_score()
        return target.score == top and top != 0

    def viewer_board_final(self) -> Board[PlayerCell]:
        return self.board.copy()

    def player_board_final(self, player: int) -> Board[PlayerCell]:
        """Return the final board with the given player's flags shown."""
        board = self.viewer_board_final()
        for point in self.players[player].flags:
            if not board[point].is_revealed():
                board[point] = board[point].add_flag()
        return board

    def _board_start(self) -> Board[PlayerCell]:
        return Board.from_rows(
            [cell.into_hidden().remove_flag() for cell in row]
            for row in self.board.rows_iter()
        )

    def get_log(self) -> list[LogEntry] | None:
        return None if self.log is None else list(self.log)

    def replay(self, player: int | None = None) -> MinesweeperReplay | None:
        """Return a replay showing every reveal and only ``player``'s flags."""
        if self.log is None:
            return None
        player_log = [
            (play, outcome)
            for play, outcome in self.log
            if play.action is not Action.FLAG or play.player == player
        ]
        return MinesweeperReplay(self._board_start(), player_log, len(self.players))