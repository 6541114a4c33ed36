"""Client-side view of a game, kept up to date from play outcomes."""

from __future__ import annotations

from dataclasses import dataclass

from .board import Board, BoardPoint
from .cell import HiddenCell, PlayerCell
from .plays import OutcomeKind, PlayOutcome

MAX_PLAYERS = 8


@dataclass
class ClientPlayer:
    """What a client knows about one player."""

    player_id: int = 0
    username: str = ""
    dead: bool = False
    victory_click: bool = False
    top_score: bool = False
    score: int = 0


class MinesweeperClient:
    """Tracks the board and players as seen by one client."""

    def __init__(self, rows: int, cols: int) -> None:
        self.player: int | None = None
        self.players: list[ClientPlayer | None] = [None] * MAX_PLAYERS
        self.game_over = False
        self.board: Board[PlayerCell] = Board(rows, cols, PlayerCell.hidden())

    def set_state(self, board: Board[PlayerCell]) -> None:
        self.board = board

    def player_board(self) -> Board[PlayerCell]:
        return self.board

    def join(self, player_id: int) -> None:
        self.player = player_id

    def add_or_update_player(
        self, player: int, score: int | None = None, dead: bool | None = None
    ) -> None:
        """Create the player if unknown, then apply any given score or death state."""
        current = self.players[player]
        if current is None:
            current = ClientPlayer()
            self.players[player] = current
        if score is not None:
            current.score = score
        if dead is not None:
            current.dead = dead

    def update(self, outcome: PlayOutcome) -> list[tuple[BoardPoint, PlayerCell]]:
        """Apply an outcome to the board and return the squares that changed."""
        updated: list[tuple[BoardPoint, PlayerCell]] = []
        for point, cell in outcome.cells:
            if outcome.kind is OutcomeKind.FLAG:
                player_cell = cell
            else:
                player_cell = PlayerCell.revealed(cell)
            self.board[point] = player_cell
            updated.append((point, player_cell))
        if outcome.kind is OutcomeKind.VICTORY:
            self.game_over = True
        return updated

    def neighbors_flagged(self, point: BoardPoint) -> bool:
        """Return True if a revealed number has exactly that many flags or mines around it."""
        revealed = self.board[point].revealed_cell
        if revealed is None or revealed.contents.is_mine():
            return False
        marked = 0
        for neighbor in self.board.neighbors(point):
            item = self.board[neighbor]
            if item.hidden_state is HiddenCell.FLAG:
                marked += 1
            elif item.revealed_cell is not None and item.revealed_cell.contents.is_mine():
                marked += 1
        return marked == revealed.contents.value()