import pytest

from sweeper.analysis import MinesweeperAnalysis
from sweeper.analysis_checks import AnalysisCell, AnalysisUpdate, AnalyzedCell
from sweeper.board import Board, BoardPoint
from sweeper.cell import Cell, HiddenCell, PlayerCell, RevealedCell
from sweeper.upair import UnorderedPair


def visual_to_board(text):
    rows = []
    for line in text.strip().splitlines():
        row = []
        for ch in line.strip():
            if ch.isdigit():
                row.append(AnalysisCell.revealed(Cell.empty(int(ch))))
            elif ch == "M":
                row.append(AnalysisCell.revealed(Cell.mine()))
            elif ch == "m":
                row.append(AnalysisCell.hidden(AnalyzedCell.MINE))
            elif ch == "c":
                row.append(AnalysisCell.hidden(AnalyzedCell.EMPTY))
            else:
                row.append(AnalysisCell.hidden(AnalyzedCell.UNDETERMINED))
        rows.append(row)
    return Board.from_rows(rows)


P = BoardPoint

CASES = [
    (
        """
        ----
        --2-
        --21
        --3-
        -2--
        """,
        [UnorderedPair(P(4, 2), P(4, 3)), UnorderedPair(P(3, 3), P(4, 3))],
        """
        ----
        -c2c
        --10
        --1m
        -1mc
        """,
    ),
    (
        """
        -100
        -100
        121m
        ----
        """,
        [],
        """
        -100
        -100
        110m
        -cmc
        """,
    ),
    (
        """
        111m
        --2-
        --3-
        --31
        --2-
        """,
        [],
        """
        111m
        --2-
        --2-
        -m21
        --1-
        """,
    ),
    (
        """
        -22-1
        ----1
        m1m1m
        """,
        [],
        """
        m12-1
        c---1
        m1m1m
        """,
    ),
]


@pytest.mark.parametrize("start, fifty_fiftys, expected", CASES)
def test_complex_reveal(start, fifty_fiftys, expected):
    analysis = MinesweeperAnalysis(visual_to_board(start), fifty_fiftys)
    analysis.analyze_board()
    assert analysis.analysis_board == visual_to_board(expected)


def test_analyze_board_reports_changes():
    analysis = MinesweeperAnalysis(visual_to_board(CASES[1][0]))
    updates = analysis.analyze_board()
    by_point = {u.point: u for u in updates}
    assert set(by_point) == {P(3, 2), P(3, 1), P(3, 3)}
    assert by_point[P(3, 2)].to is AnalyzedCell.MINE
    assert by_point[P(3, 1)].to is AnalyzedCell.EMPTY
    assert all(u.from_ is None for u in updates)


def test_analyze_board_without_information_changes_nothing():
    board = visual_to_board("--\n--")
    analysis = MinesweeperAnalysis(board)
    assert analysis.analyze_board() == []
    assert str(analysis.analysis_board) == "--\n--"


def test_from_player_board_reduces_numbers_next_to_mines():
    board = Board(2, 2, PlayerCell.hidden())
    board[P(0, 0)] = PlayerCell.revealed(RevealedCell(0, Cell.mine()))
    board[P(0, 1)] = PlayerCell.revealed(RevealedCell(0, Cell.empty(1)))
    board[P(1, 1)] = PlayerCell.hidden(HiddenCell.FLAG)
    analysis = MinesweeperAnalysis.from_player_board(board)
    assert analysis.analysis_board[P(0, 1)] == AnalysisCell.revealed(Cell.empty(0))
    assert analysis.is_mine(P(0, 0))
    assert analysis.is_empty(P(0, 1))
    assert not analysis.is_empty(P(0, 0))
    assert analysis.has_undetermined_neighbor(P(0, 1))
    assert str(analysis.analysis_board) == "M0\n--"


def test_apply_update_on_undetermined_square():
    analysis = MinesweeperAnalysis(visual_to_board("m-\n--"))
    assert analysis.apply_update(P(0, 1), Cell.empty(1)) is None
    assert analysis.analysis_board[P(0, 1)] == AnalysisCell.revealed(Cell.empty(0))


def test_apply_update_clears_earlier_conclusion():
    analysis = MinesweeperAnalysis(visual_to_board("m0\n--"))
    update = analysis.apply_update(P(0, 0), Cell.mine())
    assert update == AnalysisUpdate(P(0, 0), AnalyzedCell.MINE, None)
    assert analysis.analysis_board[P(0, 1)] == AnalysisCell.revealed(Cell.empty(0))
    assert analysis.is_mine(P(0, 0))


def test_apply_update_new_mine_reduces_neighbors():
    analysis = MinesweeperAnalysis(visual_to_board("-2\n--"))
    analysis.apply_update(P(0, 0), Cell.mine())
    assert analysis.analysis_board[P(0, 1)] == AnalysisCell.revealed(Cell.empty(1))


def test_apply_update_removes_fifty_fiftys():
    pair = UnorderedPair(P(0, 0), P(1, 0))
    analysis = MinesweeperAnalysis(visual_to_board("--\n--"), [pair])
    analysis.apply_update(P(0, 0), Cell.empty(1))
    assert analysis.fifty_fiftys == []


def test_neighbors_matches_board():
    analysis = MinesweeperAnalysis(visual_to_board("---\n---\n---"))
    assert sorted(analysis.neighbors(P(0, 0))) == [P(0, 1), P(1, 0), P(1, 1)]
    assert len(analysis.neighbors(P(1, 1))) == 8