"""Rectangular game boards addressed by row/column points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class BoardPoint:
    """A position on a board."""

    row: int
    col: int

    def is_neighbor(self, other: BoardPoint) -> bool:
        """Return True if ``other`` touches this point (a point is not its own neighbour)."""
        if self == other:
            return False
        return abs(self.row - other.row) <= 1 and abs(self.col - other.col) <= 1


class Board(Generic[T]):
    """A fixed-size grid of values stored in row-major order.

    The fill value is shared between cells, so it should be immutable.
    """

    __slots__ = ("rows", "cols", "_cells")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int, cols: int, fill: T) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("board dimensions must not be negative")
        self.rows = rows
        self.cols = cols
        self._cells: list[T] = [fill] * (rows * cols)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[T]]) -> Board[T]:
        """Build a board from a sequence of equally long rows."""
        grid = [list(row) for row in rows]
        if not grid:
            raise ValueError("a board needs at least one row")
        cols = len(grid[0])
        if any(len(row) != cols for row in grid):
            raise ValueError("all rows must have the same length")
        board: Board[T] = cls(len(grid), cols, None)  # type: ignore[arg-type]
        board._cells = [item for row in grid for item in row]
        return board

    def point_from_index(self, index: int) -> BoardPoint:
        return BoardPoint(index // self.cols, index % self.cols)

    def index_from_point(self, point: BoardPoint) -> int:
        return point.row * self.cols + point.col

    def size(self) -> int:
        return len(self._cells)

    def is_empty(self) -> bool:
        return not self._cells

    def rows_iter(self) -> Iterator[list[T]]:
        """Yield each row as a new list."""
        for start in range(0, len(self._cells), self.cols or 1):
            yield self._cells[start:start + self.cols]

    def is_in_bounds(self, point: BoardPoint) -> bool:
        return 0 <= point.row < self.rows and 0 <= point.col < self.cols

    def neighbors(self, point: BoardPoint) -> list[BoardPoint]:
        """Return the in-bounds points surrounding ``point``."""
        row, col = point.row, point.col
        found: list[BoardPoint] = []
        has_up = row > 0
        has_down = row < self.rows - 1
        if col > 0:
            found.append(BoardPoint(row, col - 1))
            if has_up:
                found.append(BoardPoint(row - 1, col - 1))
            if has_down:
                found.append(BoardPoint(row + 1, col - 1))
        if col < self.cols - 1:
            found.append(BoardPoint(row, col + 1))
            if has_up:
                found.append(BoardPoint(row - 1, col + 1))
            if has_down:
                found.append(BoardPoint(row + 1, col + 1))
        if has_up:
            found.append(BoardPoint(row - 1, col))
        if has_down:
            found.append(BoardPoint(row + 1, col))
        return found

    def to_lists(self) -> list[list[T]]:
        return list(self.rows_iter())

    def copy(self) -> Board[T]:
        board: Board[T] = Board(self.rows, self.cols, None)  # type: ignore[arg-type]
        board._cells = list(self._cells)
        return board

    def _index(self, point: BoardPoint) -> int:
        if not self.is_in_bounds(point):
            raise IndexError(f"{point} is outside a {self.rows}x{self.cols} board")
        return self.index_from_point(point)

    def __getitem__(self, point: BoardPoint) -> T:
        return self._cells[self._index(point)]

    def __setitem__(self, point: BoardPoint, value: T) -> None:
        self._cells[self._index(point)] = value

    def __iter__(self) -> Iterator[T]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and self._cells == other._cells
        )

    def __str__(self) -> str:
        lines = ("".join(str(item) for item in row) for row in self.rows_iter())
        return "\n".join(lines).rstrip()

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, cells={self._cells!r})"