"""Cell contents and the view of cells that players see."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class MinesweeperError(Exception):
    """Raised when a move or cell operation breaks the rules of the game."""


_MINE_NAMES = ("m", "Mine", "Bomb")
_EMPTY_NAMES = ("e", "Empty")


@dataclass(frozen=True)
class Cell:
    """The true contents of a square: a mine (count is None) or a neighbour count."""

    count: int | None = 0

    def __post_init__(self) -> None:
        if self.count is not None and self.count < 0:
            raise ValueError("a cell count must not be negative")

    @classmethod
    def empty(cls, count: int = 0) -> Cell:
        return cls(count)

    @classmethod
    def mine(cls) -> Cell:
        return cls(None)

    def increment(self) -> Cell:
        return self if self.count is None else Cell(self.count + 1)

    def decrement(self) -> Cell:
        if self.count is None:
            return self
        if self.count == 0:
            raise MinesweeperError("Decrement on zero not allowed")
        return Cell(self.count - 1)

    def plant(self) -> Cell:
        if self.count is None:
            raise MinesweeperError("Plant on mine not allowed")
        return Cell.mine()

    def unplant(self, count: int) -> Cell:
        if self.count is not None:
            raise MinesweeperError("Unplant on empty not allowed")
        return Cell(count)

    def is_mine(self) -> bool:
        return self.count is None

    def value(self) -> int | None:
        return self.count

    def to_dict(self) -> dict[str, int] | str:
        """Return the JSON-compatible form: ``"m"`` or ``{"e": count}``."""
        return "m" if self.count is None else {"e": self.count}

    @classmethod
    def from_dict(cls, data: Any) -> Cell:
        if isinstance(data, str):
            if data in _MINE_NAMES:
                return cls.mine()
            raise ValueError(f"unknown cell {data!r}")
        if isinstance(data, dict) and len(data) == 1:
            (key, value), = data.items()
            if key in _EMPTY_NAMES:
                return cls.empty(int(value))
        raise ValueError(f"unknown cell {data!r}")

    def __str__(self) -> str:
        return "M" if self.count is None else str(self.count)


class HiddenCell(Enum):
    """What a player sees on an unrevealed square."""

    EMPTY = "e"
    MINE = "m"  # only shown after the game
    FLAG = "f"
    FLAG_MINE = "fm"  # only shown after the game

    @classmethod
    def _missing_(cls, value: object) -> HiddenCell | None:
        return _HIDDEN_ALIASES.get(value)  # type: ignore[arg-type]


_HIDDEN_ALIASES = {
    "Hidden": HiddenCell.EMPTY,
    "Mine": HiddenCell.MINE,
    "Bomb": HiddenCell.MINE,
    "Flag": HiddenCell.FLAG,
    "FlagMine": HiddenCell.FLAG_MINE,
}


def _pick(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise ValueError(f"missing field {keys[0]!r}")


@dataclass(frozen=True)
class RevealedCell:
    """A revealed square together with the player who revealed it."""

    player: int
    contents: Cell

    def to_dict(self) -> dict[str, Any]:
        return {"p": self.player, "c": self.contents.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RevealedCell:
        return cls(
            int(_pick(data, "p", "player")),
            Cell.from_dict(_pick(data, "c", "contents")),
        )


@dataclass(frozen=True)
class CellState:
    """Whether a square is revealed and, if so, by whom."""

    revealed: bool = False
    player: int | None = None


_HIDDEN_SYMBOLS = {
    HiddenCell.EMPTY: "-",
    HiddenCell.MINE: "*",
    HiddenCell.FLAG: "f",
    HiddenCell.FLAG_MINE: "F",
}


@dataclass(frozen=True)
class PlayerCell:
    """A square as shown to a player: either hidden or revealed."""

    hidden_state: HiddenCell | None = HiddenCell.EMPTY
    revealed_cell: RevealedCell | None = None

    def __post_init__(self) -> None:
        if (self.hidden_state is None) == (self.revealed_cell is None):
            raise ValueError("a player cell is either hidden or revealed")

    @classmethod
    def hidden(cls, state: HiddenCell = HiddenCell.EMPTY) -> PlayerCell:
        return cls(hidden_state=state)

    @classmethod
    def revealed(cls, revealed_cell: RevealedCell) -> PlayerCell:
        return cls(hidden_state=None, revealed_cell=revealed_cell)

    def is_revealed(self) -> bool:
        return self.revealed_cell is not None

    def add_flag(self) -> PlayerCell:
        if self.hidden_state is HiddenCell.EMPTY:
            return PlayerCell.hidden(HiddenCell.FLAG)
        if self.hidden_state is HiddenCell.MINE:
            return PlayerCell.hidden(HiddenCell.FLAG_MINE)
        return self

    def remove_flag(self) -> PlayerCell:
        if self.hidden_state is HiddenCell.FLAG:
            return PlayerCell.hidden(HiddenCell.EMPTY)
        if self.hidden_state is HiddenCell.FLAG_MINE:
            return PlayerCell.hidden(HiddenCell.MINE)
        return self

    def into_hidden(self) -> PlayerCell:
        if self.revealed_cell is None:
            return self
        if self.revealed_cell.contents.is_mine():
            return PlayerCell.hidden(HiddenCell.MINE)
        return PlayerCell.hidden(HiddenCell.EMPTY)

    def to_dict(self) -> dict[str, Any] | str:
        """Return the JSON-compatible form: ``{"r": {...}}`` or the hidden state code."""
        if self.revealed_cell is not None:
            return {"r": self.revealed_cell.to_dict()}
        assert self.hidden_state is not None
        return self.hidden_state.value

    @classmethod
    def from_dict(cls, data: Any) -> PlayerCell:
        if isinstance(data, str):
            return cls.hidden(HiddenCell(data))
        if isinstance(data, dict) and len(data) == 1:
            (key, value), = data.items()
            if key in ("r", "Revealed"):
                return cls.revealed(RevealedCell.from_dict(value))
        raise ValueError(f"unknown player cell {data!r}")

    def __str__(self) -> str:
        if self.revealed_cell is not None:
            value = self.revealed_cell.contents.value()
            return "X" if value is None else str(value)
        assert self.hidden_state is not None
        return _HIDDEN_SYMBOLS[self.hidden_state]