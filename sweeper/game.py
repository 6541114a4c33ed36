"""A game of minesweeper for one or more players."""

from __future__ import annotations

import random

from .board import Board, BoardPoint
from .cell import Cell, CellState, HiddenCell, MinesweeperError, PlayerCell, RevealedCell
from .completed import CompletedMinesweeper
from .plays import Action, Play, PlayOutcome, Player

Square = tuple[Cell, CellState]


def _viewer_board(board: Board[Square], is_final: bool) -> Board[PlayerCell]:
    view: Board[PlayerCell] = Board(board.rows, board.cols, PlayerCell.hidden())
    for index, (cell, state) in enumerate(board):
        point = board.point_from_index(index)
        if state.revealed:
            assert state.player is not None
            view[point] = PlayerCell.revealed(RevealedCell(state.player, cell))
        elif is_final and cell.is_mine():
            view[point] = PlayerCell.hidden(HiddenCell.MINE)
    return view


class Minesweeper:
    """A running game: the true board, the players and an optional play log."""

    def __init__(
        self,
        board: Board[Square],
        players: int = 1,
        superclick: bool = False,
        log: bool = False,
    ) -> None:
        self.board = board
        self.players: list[Player] = [Player() for _ in range(players)]
        self.superclick = superclick
        self.log: list[tuple[Play, PlayOutcome]] | None = [] if log else None
        self.available: set[BoardPoint] = {
            board.point_from_index(index)
            for index, (cell, state) in enumerate(board)
            if not cell.is_mine() and not state.revealed
        }

    # --- board manipulation -------------------------------------------------

    def _set_cell(self, point: BoardPoint, cell: Cell) -> None:
        self.board[point] = (cell, self.board[point][1])

    def plant(self, point: BoardPoint) -> None:
        """Put a mine at ``point`` and raise the counts around it."""
        self.available.discard(point)
        self._set_cell(point, self.board[point][0].plant())
        for neighbor in self.board.neighbors(point):
            self._set_cell(neighbor, self.board[neighbor][0].increment())

    def unplant(self, point: BoardPoint, rem_neighbors: bool) -> list[BoardPoint]:
        """Remove the mine at ``point`` (and, if asked, from its neighbours).

        Mines removed with ``rem_neighbors`` are planted again elsewhere.
        Returns the revealed squares whose numbers changed.
        """
        updated: set[BoardPoint] = set()
        to_replant = 0 if rem_neighbors else None
        neighbors = self.board.neighbors(point)

        was_mine = self.board[point][0].is_mine()
        if was_mine:
            neighboring_mines = sum(self.board[n][0].is_mine() for n in neighbors)
            self._set_cell(point, self.board[point][0].unplant(neighboring_mines))
            if to_replant is not None:
                to_replant += 1

        for neighbor in neighbors:
            cell, state = self.board[neighbor]
            if was_mine:
                if state.revealed:
                    updated.add(neighbor)
                new = cell.decrement()
            else:
                new = cell
            if rem_neighbors and new.is_mine():
                updated.update(self.unplant(neighbor, False))
                if to_replant is not None:
                    to_replant += 1
            else:
                self._set_cell(neighbor, new)

        if to_replant is not None:
            self._replant(to_replant, point, neighbors)
        return list(updated)

    def _has_revealed_neighbor(self, point: BoardPoint) -> bool:
        return any(self.board[n][1].revealed for n in self.board.neighbors(point))

    def _replant(
        self, count: int, first_cell: BoardPoint, neighbors: list[BoardPoint]
    ) -> None:
        if count == 0:
            return
        candidates = sorted(
            p
            for p in self.available
            if p != first_cell and p not in neighbors and not self._has_revealed_neighbor(p)
        )
        random.shuffle(candidates)
        if count > len(candidates):
            fallback = list(neighbors)
            random.shuffle(fallback)
            candidates.extend(fallback)
        for point in candidates[:count]:
            self.plant(point)

    def _is_revealed_mine(self, point: BoardPoint) -> bool:
        cell, state = self.board[point]
        return state.revealed and cell.is_mine()

    def _reveal(self, player: int, point: BoardPoint) -> bool:
        cell, state = self.board[point]
        if state.revealed:
            return False
        self.board[point] = (cell, CellState(True, player))
        self.available.discard(point)
        for each in self.players:
            each.flags.discard(point)
        return True

    def _reveal_neighbors(self, player: int, point: BoardPoint) -> list[BoardPoint]:
        """Reveal a zero and flood outwards through connected zeros."""
        self._reveal(player, point)
        found = [point]
        stack = [point]
        while stack:
            current = stack.pop()
            for neighbor in self.board.neighbors(current):
                cell, state = self.board[neighbor]
                if state.revealed:
                    continue
                if cell.is_mine():
                    raise MinesweeperError(
                        "Called reveal neighbors when there is a mine nearby"
                    )
                self._reveal(player, neighbor)
                found.append(neighbor)
                if cell.value() == 0:
                    stack.append(neighbor)
        return found

    def _has_no_revealed_nearby(self, point: BoardPoint) -> bool:
        nearby = {
            far for near in self.board.neighbors(point) for far in self.board.neighbors(near)
        }
        return not any(self.board[p][1].revealed for p in nearby)

    # --- actions ------------------------------------------------------------

    def _handle_flag(self, player: int, point: BoardPoint) -> PlayOutcome:
        if self.board[point][1].revealed:
            raise MinesweeperError("Tried to play already revealed cell")
        flags = self.players[player].flags
        if point in flags:
            flags.remove(point)
            return PlayOutcome.flag(point, PlayerCell.hidden(HiddenCell.EMPTY))
        flags.add(point)
        return PlayOutcome.flag(point, PlayerCell.hidden(HiddenCell.FLAG))

    def _handle_click(self, player: int, point: BoardPoint) -> PlayOutcome:
        if self.board[point][1].revealed:
            raise MinesweeperError("Tried to play already revealed cell")
        current = self.players[player]
        if point in current.flags:
            raise MinesweeperError("Tried to play flagged cell")
        updated: list[BoardPoint] | None = None
        if not current.played and self._has_no_revealed_nearby(point):
            # the first click on untouched ground never hits a mine
            current.played = True
            updated = self.unplant(point, self.superclick)

        cell = self.board[point][0]
        if cell.is_mine():
            self._reveal(player, point)
            current.dead = True
            return PlayOutcome.failure(point, RevealedCell(player, cell))

        if cell.value() == 0:
            points = self._reveal_neighbors(player, point)
            if updated:
                points.extend(updated)
        else:
            self._reveal(player, point)
            points = [point]
        revealed = [(p, RevealedCell(player, self.board[p][0])) for p in points]
        current.score += len(revealed)
        if not self.available:
            return PlayOutcome.victory(revealed)
        return PlayOutcome.success(revealed)

    def _handle_double_click(self, player: int, point: BoardPoint) -> PlayOutcome:
        cell, state = self.board[point]
        if not state.revealed:
            raise MinesweeperError("Tried to double-click cell that isn't revealed")
        if cell.is_mine():
            raise MinesweeperError("Tried to double-click mine")
        if cell.value() == 0:
            raise MinesweeperError("Tried to double-click zero space")
        flags = self.players[player].flags
        neighbors = self.board.neighbors(point)
        flagged = sum(1 for n in neighbors if n in flags or self._is_revealed_mine(n))
        if flagged != cell.value():
            raise MinesweeperError(
                "Tried to double-click with wrong number of flagged neighbors.  "
                f"Expected {cell.value()} got {flagged}"
            )
        unflagged = [
            n for n in neighbors if not self.board[n][1].revealed and n not in flags
        ]
        # a mine ends the move before any other square is opened
        mine = next((n for n in unflagged if self.board[n][0].is_mine()), None)
        if mine is not None:
            self._reveal(player, mine)
            self.players[player].dead = True
            return PlayOutcome.failure(mine, RevealedCell(player, self.board[mine][0]))
        outcome = PlayOutcome.success(())
        for neighbor in unflagged:
            if self.board[neighbor][1].revealed:
                continue
            outcome = outcome.combine(self._handle_click(player, neighbor))
        return outcome

    # --- public interface ---------------------------------------------------

    def complete(self) -> CompletedMinesweeper:
        return CompletedMinesweeper(
            self.players, _viewer_board(self.board, True), self.log
        )

    def _player(self, player: int) -> Player:
        if not 0 <= player < len(self.players):
            raise MinesweeperError(f"Player {player} doesn't exist")
        return self.players[player]

    def play(self, play: Play) -> PlayOutcome:
        """Carry out a move, raising MinesweeperError if it is not allowed."""
        if self.is_over():
            raise MinesweeperError("Game is over")
        if self._player(play.player).dead:
            raise MinesweeperError("Tried to play as dead player")
        if not self.board.is_in_bounds(play.point):
            raise MinesweeperError("Tried to play point outside of playzone")
        handlers = {
            Action.REVEAL: self._handle_click,
            Action.REVEAL_ADJACENT: self._handle_double_click,
            Action.FLAG: self._handle_flag,
        }
        try:
            outcome = handlers[play.action](play.player, play.point)
        finally:
            if not self.available:
                self.players[play.player].victory_click = True
        if self.log is not None:
            self.log.append((play, outcome))
        return outcome

    def player_score(self, player: int) -> int:
        return self._player(player).score

    def player_dead(self, player: int) -> bool:
        return self._player(player).dead

    def _highest_score(self) -> int:
        return max((p.score for p in self.players), default=0)

    def current_top_score(self) -> int | None:
        if len(self.players) < 2:
            return None
        return self._highest_score() or None

    def player_top_score(self, player: int) -> bool:
        target = self._player(player)
        if len(self.players) < 2:
            return False
        top = self._highest_score()
        return target.score == top and top != 0

    def player_victory_click(self, player: int) -> bool:
        return self._player(player).victory_click

    def is_over(self) -> bool:
        return not self.available or all(p.dead for p in self.players)

    def viewer_board(self) -> Board[PlayerCell]:
        return _viewer_board(self.board, False)

    def player_board(self, player: int) -> Board[PlayerCell]:
        """Return the board as seen by ``player``, with their flags."""
        board = self.viewer_board()
        for point in self.players[player].flags:
            if not board[point].is_revealed():
                board[point] = board[point].add_flag()
        return board