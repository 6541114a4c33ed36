"""Single-cell deductions used by the board analyser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .board import Board, BoardPoint
from .cell import Cell
from .upair import UnorderedPair


class AnalyzedCell(Enum):
    """What analysis has concluded about a hidden square."""

    MINE = "mine"
    EMPTY = "empty"
    UNDETERMINED = "undetermined"


_HIDDEN_SYMBOLS = {
    AnalyzedCell.UNDETERMINED: "-",
    AnalyzedCell.EMPTY: "c",
    AnalyzedCell.MINE: "m",
}


@dataclass(frozen=True)
class AnalysisCell:
    """A square on the analysis board: hidden with a conclusion, or revealed."""

    analyzed: AnalyzedCell | None = AnalyzedCell.UNDETERMINED
    cell: Cell | None = None

    def __post_init__(self) -> None:
        if (self.analyzed is None) == (self.cell is None):
            raise ValueError("an analysis cell is either hidden or revealed")

    @classmethod
    def hidden(cls, analyzed: AnalyzedCell = AnalyzedCell.UNDETERMINED) -> AnalysisCell:
        return cls(analyzed=analyzed)

    @classmethod
    def revealed(cls, cell: Cell) -> AnalysisCell:
        return cls(analyzed=None, cell=cell)

    def number(self) -> int:
        """Return the remaining mine count of a revealed number square."""
        if self.cell is None or self.cell.is_mine():
            raise ValueError(f"{self!r} is not a revealed number")
        return self.cell.count  # type: ignore[return-value]

    def __str__(self) -> str:
        if self.cell is not None:
            return str(self.cell)
        assert self.analyzed is not None
        return _HIDDEN_SYMBOLS[self.analyzed]


UNDETERMINED = AnalysisCell.hidden(AnalyzedCell.UNDETERMINED)


def _is_number(cell: AnalysisCell) -> bool:
    return cell.cell is not None and not cell.cell.is_mine()


@dataclass
class AnalysisUpdate:
    """A change to a square's analysed state; ``None`` means no conclusion."""

    point: BoardPoint
    from_: AnalyzedCell | None = None
    to: AnalyzedCell | None = None


@dataclass
class AnalysisResult:
    """The conclusions reached from one revealed number."""

    guaranteed_plays: list[tuple[BoardPoint, AnalyzedCell]] = field(default_factory=list)
    found_fifty_fifty: UnorderedPair[BoardPoint] | None = None


def neighbor_info(
    point: BoardPoint, board: Board[AnalysisCell]
) -> tuple[list[BoardPoint], list[BoardPoint]]:
    """Split the neighbours of ``point`` into revealed numbers and undetermined squares."""
    revealed: list[BoardPoint] = []
    undetermined: list[BoardPoint] = []
    for neighbor in board.neighbors(point):
        cell = board[neighbor]
        if cell == UNDETERMINED:
            undetermined.append(neighbor)
        elif _is_number(cell):
            revealed.append(neighbor)
    return revealed, undetermined


def _mark(points: Sequence[BoardPoint], verdict: AnalyzedCell) -> AnalysisResult:
    return AnalysisResult(guaranteed_plays=[(p, verdict) for p in points])


def perform_checks(
    point: BoardPoint,
    board: Board[AnalysisCell],
    fifty_fiftys: Sequence[UnorderedPair[BoardPoint]],
) -> AnalysisResult:
    """Apply every deduction rule to the revealed number at ``point``."""
    cell_num = board[point].number()
    revealed_points, undetermined = neighbor_info(point, board)

    if cell_num == 0:
        return _mark(undetermined, AnalyzedCell.EMPTY)

    num_undetermined = len(undetermined)
    if cell_num == num_undetermined:
        return _mark(undetermined, AnalyzedCell.MINE)

    if cell_num > num_undetermined:
        raise ValueError(f"{point} needs more mines than it has hidden neighbours")

    ff_pairs = [
        pair for pair in fifty_fiftys if pair.a in undetermined and pair.b in undetermined
    ]
    ff_points: list[BoardPoint] = []
    non_ff: list[BoardPoint] = []
    for p in undetermined:
        (ff_points if any(p in pair for pair in ff_pairs) else non_ff).append(p)
    num_unique_ff = len(ff_points) // 2
    exact_unique_ff = len(ff_points) % 2 == 0

    if cell_num == 1 and len(ff_points) == 3:
        # overlapping fifty-fiftys next to a 1: the shared square is the mine
        return AnalysisResult(
            guaranteed_plays=[
                (
                    p,
                    AnalyzedCell.MINE
                    if sum(p in pair for pair in ff_pairs) > 1
                    else AnalyzedCell.EMPTY,
                )
                for p in ff_points
            ]
        )

    if exact_unique_ff and cell_num - num_unique_ff == 1 and len(non_ff) == 2:
        return AnalysisResult(found_fifty_fifty=UnorderedPair(non_ff[0], non_ff[1]))

    if (
        cell_num == 2
        and num_undetermined == 4
        and (len(ff_points) == 3 or len(ff_pairs) == 3)
    ):
        for pair in ff_pairs:
            rest = [p for p in undetermined if p not in pair]
            if len(rest) == 2:
                candidate = UnorderedPair(rest[0], rest[1])
                if candidate not in ff_pairs:
                    return AnalysisResult(found_fifty_fifty=candidate)

    if cell_num == num_unique_ff and non_ff:
        return _mark(non_ff, AnalyzedCell.EMPTY)

    if exact_unique_ff and cell_num - num_unique_ff == len(non_ff):
        return _mark(non_ff, AnalyzedCell.MINE)

    for rp in revealed_points:
        r_cell = board[rp]
        if not _is_number(r_cell):
            continue
        r_num = r_cell.number()
        other_undetermined = [p for p in undetermined if not p.is_neighbor(rp)]
        num_other = len(other_undetermined)

        if num_other > 0 and cell_num > r_num and cell_num - r_num == num_other:
            # rp's neighbours cannot hold enough mines, so the rest must
            return _mark(other_undetermined, AnalyzedCell.MINE)

        other_ff = sum(p in ff_points for p in other_undetermined)
        all_other_ff = other_ff == num_other
        other_mines = other_ff // 2
        if all_other_ff and cell_num - other_mines == r_num:
            # rp's mines all lie among our undetermined squares
            rp_free = [
                p
                for p in board.neighbors(rp)
                if board[p] == UNDETERMINED and p not in undetermined
            ]
            if not rp_free:
                continue
            return _mark(rp_free, AnalyzedCell.EMPTY)

    # revealed 1s touching two or more of our undetermined squares act as fifty-fiftys
    seen = [point]
    local_ff_points: list[BoardPoint] = []
    one = AnalysisCell.revealed(Cell.empty(1))
    for p in revealed_points:
        if board[p] != one:
            continue
        touching = [q for q in undetermined if q not in seen and p.is_neighbor(q)]
        if len(touching) >= 2:
            seen.extend(touching)
            local_ff_points.append(p)
    not_ff = [
        p for p in undetermined if not any(p.is_neighbor(q) for q in local_ff_points)
    ]

    if (
        cell_num > num_undetermined // 2
        and local_ff_points
        and cell_num - len(local_ff_points) == 1
        and len(not_ff) == 1
    ):
        return _mark(not_ff, AnalyzedCell.MINE)

    return AnalysisResult()