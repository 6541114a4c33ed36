"""Moves, their outcomes and per-player game state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Union

from .board import BoardPoint
from .cell import PlayerCell, RevealedCell


class Action(Enum):
    """What a player does to a square."""

    FLAG = "f"
    REVEAL = "r"
    REVEAL_ADJACENT = "ra"

    @classmethod
    def _missing_(cls, value: object) -> Action | None:
        return _ACTION_ALIASES.get(value)  # type: ignore[arg-type]

    def label(self) -> str:
        return _ACTION_LABELS[self]


_ACTION_ALIASES = {
    "Flag": Action.FLAG,
    "Reveal": Action.REVEAL,
    "RevealAdjacent": Action.REVEAL_ADJACENT,
}

_ACTION_LABELS = {
    Action.FLAG: "Flag",
    Action.REVEAL: "Reveal",
    Action.REVEAL_ADJACENT: "Reveal Adjacent",
}


def _pick(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise ValueError(f"missing field {keys[0]!r}")


def _point_to_dict(point: BoardPoint) -> dict[str, int]:
    return {"row": point.row, "col": point.col}


def _point_from_dict(data: dict[str, Any]) -> BoardPoint:
    return BoardPoint(int(data["row"]), int(data["col"]))


@dataclass(frozen=True)
class Play:
    """A single move by a player."""

    player: int
    action: Action
    point: BoardPoint

    def to_dict(self) -> dict[str, Any]:
        return {
            "p": self.player,
            "a": self.action.value,
            "bp": _point_to_dict(self.point),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Play:
        return cls(
            int(_pick(data, "p", "player")),
            Action(_pick(data, "a", "action")),
            _point_from_dict(_pick(data, "bp", "point")),
        )


class OutcomeKind(Enum):
    SUCCESS = "s"
    FAILURE = "x"
    VICTORY = "v"
    FLAG = "f"

    @classmethod
    def _missing_(cls, value: object) -> OutcomeKind | None:
        return _OUTCOME_ALIASES.get(value)  # type: ignore[arg-type]


_OUTCOME_ALIASES = {
    "Success": OutcomeKind.SUCCESS,
    "Failure": OutcomeKind.FAILURE,
    "Victory": OutcomeKind.VICTORY,
    "Flag": OutcomeKind.FLAG,
}

OutcomeCell = tuple[BoardPoint, Union[RevealedCell, PlayerCell]]


@dataclass(frozen=True)
class PlayOutcome:
    """The result of a play.

    Success and victory carry any number of revealed cells; failure carries the
    mine that was hit and flag carries the new state of the flagged square.
    """

    kind: OutcomeKind
    cells: tuple[OutcomeCell, ...] = ()

    @classmethod
    def success(cls, cells: Iterable[tuple[BoardPoint, RevealedCell]]) -> PlayOutcome:
        return cls(OutcomeKind.SUCCESS, tuple(cells))

    @classmethod
    def victory(cls, cells: Iterable[tuple[BoardPoint, RevealedCell]]) -> PlayOutcome:
        return cls(OutcomeKind.VICTORY, tuple(cells))

    @classmethod
    def failure(cls, point: BoardPoint, revealed_cell: RevealedCell) -> PlayOutcome:
        return cls(OutcomeKind.FAILURE, ((point, revealed_cell),))

    @classmethod
    def flag(cls, point: BoardPoint, player_cell: PlayerCell) -> PlayOutcome:
        return cls(OutcomeKind.FLAG, ((point, player_cell),))

    def __len__(self) -> int:
        if self.kind in (OutcomeKind.SUCCESS, OutcomeKind.VICTORY):
            return len(self.cells)
        return 1

    def __bool__(self) -> bool:
        return True

    def combine(self, other: PlayOutcome) -> PlayOutcome:
        """Merge two outcomes; a failure or flag on either side wins."""
        if self.kind in (OutcomeKind.FAILURE, OutcomeKind.FLAG):
            return self
        if other.kind in (OutcomeKind.FAILURE, OutcomeKind.FLAG):
            return other
        merged = self.cells + other.cells
        if OutcomeKind.VICTORY in (self.kind, other.kind):
            return PlayOutcome(OutcomeKind.VICTORY, merged)
        return PlayOutcome(OutcomeKind.SUCCESS, merged)

    def to_dict(self) -> dict[str, Any]:
        pairs = [[_point_to_dict(point), cell.to_dict()] for point, cell in self.cells]
        if self.kind in (OutcomeKind.SUCCESS, OutcomeKind.VICTORY):
            return {self.kind.value: pairs}
        return {self.kind.value: pairs[0]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayOutcome:
        if not isinstance(data, dict) or len(data) != 1:
            raise ValueError(f"unknown play outcome {data!r}")
        (key, value), = data.items()
        kind = OutcomeKind(key)
        if kind in (OutcomeKind.SUCCESS, OutcomeKind.VICTORY):
            return cls(
                kind,
                tuple(
                    (_point_from_dict(point), RevealedCell.from_dict(cell))
                    for point, cell in value
                ),
            )
        point, cell = value
        if kind is OutcomeKind.FAILURE:
            return cls.failure(_point_from_dict(point), RevealedCell.from_dict(cell))
        return cls.flag(_point_from_dict(point), PlayerCell.from_dict(cell))


@dataclass
class Player:
    """Per-player game state."""

    played: bool = False
    dead: bool = False
    victory_click: bool = False
    score: int = 0
    flags: set[BoardPoint] = field(default_factory=set)