"""Stepping forwards and backwards through a recorded game."""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .board import Board
from .cell import HiddenCell, MinesweeperError, PlayerCell
from .client import ClientPlayer
from .plays import OutcomeKind, Play, PlayOutcome


class PositionKind(Enum):
    BEGINNING = "beginning"
    OTHER = "other"
    END = "end"


_KIND_RANK = {PositionKind.BEGINNING: 0, PositionKind.OTHER: 1, PositionKind.END: 2}


@functools.total_ordering
@dataclass(frozen=True)
class ReplayPosition:
    """A position in a replay: the beginning, the end, or a step in between."""

    kind: PositionKind
    index: int = 0

    @classmethod
    def end(cls) -> ReplayPosition:
        return cls(PositionKind.END)

    @classmethod
    def beginning(cls) -> ReplayPosition:
        return cls(PositionKind.BEGINNING)

    @classmethod
    def other(cls, index: int) -> ReplayPosition:
        return cls(PositionKind.OTHER, index)

    @classmethod
    def from_pos(cls, pos: int, length: int) -> ReplayPosition:
        if pos == length - 1:
            return cls.end()
        if pos == 0:
            return cls.beginning()
        return cls.other(pos)

    def to_num(self, length: int) -> int:
        if self.kind is PositionKind.END:
            return length
        if self.kind is PositionKind.BEGINNING:
            return 0
        return self.index

    def is_valid(self, length: int) -> bool:
        if self.kind is PositionKind.OTHER:
            return self.index != 0 and self.index < length
        return True

    def _key(self) -> tuple[int, int]:
        return (_KIND_RANK[self.kind], self.index if self.kind is PositionKind.OTHER else 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ReplayPosition):
            return NotImplemented
        return self._key() < other._key()


class Replayable(ABC):
    """Something that can be stepped through one play at a time."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of positions, one more than the number of plays."""

    @abstractmethod
    def current_pos(self) -> ReplayPosition:
        ...

    @abstractmethod
    def advance(self) -> ReplayPosition:
        ...

    @abstractmethod
    def rewind(self) -> ReplayPosition:
        ...

    def to_pos(self, pos: ReplayPosition) -> ReplayPosition:
        """Step forwards or backwards until ``pos`` is reached."""
        length = len(self)
        if not pos.is_valid(length):
            raise MinesweeperError(
                f"Called to_pos with pos out of bounds (max {length - 1}): {pos}"
            )
        while pos < self.current_pos():
            self.rewind()
        while pos > self.current_pos():
            self.advance()
        new_pos = self.current_pos()
        if new_pos != pos:
            raise MinesweeperError(f"Could not reach {pos}, stopped at {new_pos}")
        return new_pos


@dataclass
class SimplePlayer:
    """A player's score and status at a point in a replay."""

    score: int = 0
    dead: bool = False
    victory_click: bool = False

    def update_client_player(self, client_player: ClientPlayer) -> None:
        client_player.top_score = False
        client_player.score = self.score
        client_player.dead = self.dead
        client_player.victory_click = self.victory_click


@dataclass
class _ReplayState:
    players: list[SimplePlayer] = field(default_factory=list)
    flags: int = 0
    revealed_mines: int = 0


class MinesweeperReplay(Replayable):
    """Replays a game log over its starting board."""

    def __init__(
        self,
        starting_board: Board[PlayerCell],
        log: Iterable[tuple[Play, PlayOutcome]],
        players: int,
    ) -> None:
        self.current_play: Play | None = None
        self.current_board = starting_board.copy()
        self.current_players = [SimplePlayer() for _ in range(players)]
        self.current_flags = 0
        self.current_revealed_mines = 0
        self.log: list[tuple[Play, PlayOutcome]] = list(log)
        self._pos = 0

    def current_flags_and_revealed_mines(self) -> int:
        return self.current_flags + self.current_revealed_mines

    def __len__(self) -> int:
        return len(self.log) + 1

    def current_pos(self) -> ReplayPosition:
        return ReplayPosition.from_pos(self._pos, len(self))

    def advance(self) -> ReplayPosition:
        if self._pos == len(self) - 1:
            raise MinesweeperError("Called next on end")
        play, outcome = self.log[self._pos]
        self.current_play = play
        board = self.current_board
        if outcome.kind is OutcomeKind.FLAG:
            point, player_cell = outcome.cells[0]
            if player_cell.hidden_state is HiddenCell.FLAG:
                self.current_flags += 1
                board[point] = board[point].add_flag()
            else:
                self.current_flags -= 1
                board[point] = board[point].remove_flag()
        elif outcome.kind is OutcomeKind.FAILURE:
            point, revealed = outcome.cells[0]
            self.current_players[revealed.player].dead = True
            self.current_revealed_mines += 1
            board[point] = PlayerCell.revealed(revealed)
        else:
            if outcome.kind is OutcomeKind.VICTORY:
                self.current_players[outcome.cells[0][1].player].victory_click = True
            for point, revealed in outcome.cells:
                self.current_players[revealed.player].score += 1
                board[point] = PlayerCell.revealed(revealed)
        self._pos += 1
        return self.current_pos()

    def rewind(self) -> ReplayPosition:
        if self._pos == 0:
            raise MinesweeperError("Called prev on start")
        self._pos -= 1
        _, outcome = self.log[self._pos]
        self.current_play = self.log[self._pos - 1][0] if self._pos else None
        board = self.current_board
        if outcome.kind is OutcomeKind.FLAG:
            point, player_cell = outcome.cells[0]
            if player_cell.hidden_state is HiddenCell.FLAG:
                self.current_flags -= 1
                board[point] = board[point].remove_flag()
            else:
                self.current_flags += 1
                board[point] = board[point].add_flag()
        elif outcome.kind is OutcomeKind.FAILURE:
            point, revealed = outcome.cells[0]
            self.current_players[revealed.player].dead = False
            self.current_revealed_mines -= 1
            board[point] = PlayerCell.hidden(HiddenCell.MINE)
        else:
            if outcome.kind is OutcomeKind.VICTORY:
                self.current_players[outcome.cells[0][1].player].victory_click = False
            for point, revealed in outcome.cells:
                self.current_players[revealed.player].score -= 1
                board[point] = PlayerCell.hidden(HiddenCell.EMPTY)
        return self.current_pos()