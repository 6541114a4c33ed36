"""Play a single-player game in the terminal."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .board import Board, BoardPoint
from .builder import MinesweeperBuilder, MinesweeperOpts
from .cell import MinesweeperError, PlayerCell
from .plays import Action, OutcomeKind, Play

_UNDERLINE = "\x1b[4m"
_RESET = "\x1b[0m"

_ACTIONS = {"c": Action.REVEAL, "d": Action.REVEAL_ADJACENT, "f": Action.FLAG}

PROMPT = "Input action & 2 numbers `{c|d|f} {row} {col}` as play:"


def _underline(text: str) -> str:
    return f"{_UNDERLINE}{text}{_RESET}"


def format_board(board: Board[PlayerCell]) -> str:
    """Render a board with column and row headers."""
    tens = "".join(f"|{col // 10}" for col in range(board.cols))
    ones = "".join(f"|{col % 10}" for col in range(board.cols))
    lines = [f"XX{tens}|", _underline(f"XX{ones}|")]
    for number, row in enumerate(board.rows_iter()):
        cells = "".join(_underline(f"|{item}") for item in row)
        lines.append(_underline(f"{number:02d}") + cells + _underline("|"))
    return "\n".join(lines)


def _parse_index(text: str, name: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ValueError(f"Invalid {name}: {text!r}") from None
    if value < 0:
        raise ValueError(f"Invalid {name}: {text!r}")
    return value


def parse_play(line: str) -> Play:
    """Parse ``"<c|d|f> <row> <col>"`` into a play for player 0."""
    parts = line.rstrip().split(" ")
    if len(parts) != 3:
        raise ValueError("Bad number of inputs")
    code, row_text, col_text = parts
    action = _ACTIONS.get(code)
    if action is None:
        raise ValueError("Bad action")
    row = _parse_index(row_text, "row")
    col = _parse_index(col_text, "col")
    return Play(player=0, action=action, point=BoardPoint(row, col))


def _options(args: argparse.Namespace) -> MinesweeperOpts:
    if args.expert:
        return MinesweeperOpts(rows=16, cols=30, num_mines=99)
    if args.intermediate:
        return MinesweeperOpts(rows=16, cols=16, num_mines=40)
    return MinesweeperOpts(rows=9, cols=9, num_mines=10)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sweeper", description="Play minesweeper.")
    parser.add_argument("-i", "--intermediate", action="store_true")
    parser.add_argument("-e", "--expert", action="store_true")
    args = parser.parse_args(argv)

    game = MinesweeperBuilder(_options(args)).init()
    while not game.is_over():
        print(format_board(game.player_board(0)))
        print(PROMPT)
        line = sys.stdin.readline()
        if not line:
            break
        try:
            play = parse_play(line)
        except ValueError as exc:
            print(f"{exc} - try again")
            continue
        try:
            outcome = game.play(play)
        except MinesweeperError as exc:
            print(f"Invalid action - try again: {exc}")
            continue
        if outcome.kind is OutcomeKind.FAILURE:
            print("You Died")
        elif outcome.kind is OutcomeKind.VICTORY:
            print("You won!!!")
        elif outcome.kind is OutcomeKind.FLAG:
            print("Flagged")
        else:
            print("Success")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())