import pytest

from sweeper.board import Board, BoardPoint
from sweeper.cell import Cell, HiddenCell, MinesweeperError, PlayerCell, RevealedCell
from sweeper.client import ClientPlayer
from sweeper.plays import Action, Play, PlayOutcome
from sweeper.replay import MinesweeperReplay, ReplayPosition, SimplePlayer

P = BoardPoint

MINES = [P(0, 3), P(3, 0), P(3, 2), P(3, 3)]
PLAY_1_RES = [
    (P(0, 0), RevealedCell(0, Cell.empty(0))),
    (P(0, 1), RevealedCell(0, Cell.empty(0))),
    (P(0, 2), RevealedCell(0, Cell.empty(1))),
    (P(1, 0), RevealedCell(0, Cell.empty(0))),
    (P(1, 1), RevealedCell(0, Cell.empty(0))),
    (P(1, 2), RevealedCell(0, Cell.empty(1))),
    (P(2, 0), RevealedCell(0, Cell.empty(1))),
    (P(2, 1), RevealedCell(0, Cell.empty(2))),
    (P(2, 2), RevealedCell(0, Cell.empty(2))),
]
PLAY_2_RES = (P(3, 2), PlayerCell.hidden(HiddenCell.FLAG))
PLAY_3_RES = (P(2, 3), RevealedCell(0, Cell.empty(2)))
PLAY_4_RES = (P(3, 3), RevealedCell(0, Cell.mine()))


def make_log():
    return [
        (Play(0, Action.REVEAL, P(2, 2)), PlayOutcome.success(PLAY_1_RES)),
        (Play(0, Action.FLAG, P(3, 2)), PlayOutcome.flag(*PLAY_2_RES)),
        (Play(0, Action.REVEAL, P(2, 3)), PlayOutcome.success([PLAY_3_RES])),
        (Play(0, Action.REVEAL, P(3, 3)), PlayOutcome.failure(*PLAY_4_RES)),
    ]


@pytest.fixture
def boards():
    start = Board(4, 4, PlayerCell.hidden(HiddenCell.EMPTY))
    for point in MINES:
        start[point] = PlayerCell.hidden(HiddenCell.MINE)
    board_1 = start.copy()
    for point, rc in PLAY_1_RES:
        board_1[point] = PlayerCell.revealed(rc)
    board_2 = board_1.copy()
    board_2[PLAY_2_RES[0]] = PlayerCell.hidden(HiddenCell.FLAG_MINE)
    board_3 = board_2.copy()
    board_3[PLAY_3_RES[0]] = PlayerCell.revealed(PLAY_3_RES[1])
    final = board_3.copy()
    final[PLAY_4_RES[0]] = PlayerCell.revealed(PLAY_4_RES[1])
    return start, board_1, board_2, board_3, final


def test_replay(boards):
    start, board_1, board_2, board_3, final = boards
    replay = MinesweeperReplay(start, make_log(), 2)

    assert len(replay.current_players) == 2
    assert sum(p.score for p in replay.current_players) == 0
    assert replay.current_flags == 0
    assert replay.current_revealed_mines == 0
    assert len(replay) == 5

    assert replay.advance() == ReplayPosition.other(1)
    assert replay.current_board == board_1
    assert replay.advance() == ReplayPosition.other(2)
    assert replay.current_board == board_2
    assert replay.advance() == ReplayPosition.other(3)
    assert replay.current_board == board_3
    assert replay.advance() == ReplayPosition.end()
    assert replay.current_board == final

    with pytest.raises(MinesweeperError):
        replay.advance()

    assert replay.rewind() == ReplayPosition.other(3)
    assert replay.current_board == board_3
    assert replay.rewind() == ReplayPosition.other(2)
    assert replay.current_board == board_2
    assert replay.rewind() == ReplayPosition.other(1)
    assert replay.current_board == board_1
    assert replay.rewind() == ReplayPosition.beginning()
    assert replay.current_board == start

    with pytest.raises(MinesweeperError):
        replay.rewind()

    for _ in range(2):
        assert replay.to_pos(ReplayPosition.other(2)) == ReplayPosition.other(2)
        assert replay.current_board == board_2
        assert replay.to_pos(ReplayPosition.end()) == ReplayPosition.end()
        assert replay.current_board == final
        assert replay.to_pos(ReplayPosition.other(1)) == ReplayPosition.other(1)
        assert replay.current_board == board_1
        with pytest.raises(MinesweeperError):
            replay.to_pos(ReplayPosition.other(5))


def test_replay_does_not_mutate_starting_board(boards):
    start = boards[0]
    snapshot = start.copy()
    replay = MinesweeperReplay(start, make_log(), 1)
    replay.to_pos(ReplayPosition.end())
    assert start == snapshot


def test_victory_sets_and_clears_victory_click():
    board = Board(1, 2, PlayerCell.hidden())
    log = [
        (
            Play(1, Action.REVEAL, P(0, 0)),
            PlayOutcome.victory([(P(0, 0), RevealedCell(1, Cell.empty(1)))]),
        )
    ]
    replay = MinesweeperReplay(board, log, 2)
    assert replay.advance() == ReplayPosition.end()
    assert replay.current_players[1].victory_click is True
    assert replay.current_players[1].score == 1
    replay.rewind()
    assert replay.current_players[1].victory_click is False
    assert replay.current_board[P(0, 0)] == PlayerCell.hidden(HiddenCell.EMPTY)


def test_position_from_pos():
    assert ReplayPosition.from_pos(4, 5) == ReplayPosition.end()
    assert ReplayPosition.from_pos(0, 5) == ReplayPosition.beginning()
    assert ReplayPosition.from_pos(2, 5) == ReplayPosition.other(2)


def test_position_to_num_and_validity():
    assert ReplayPosition.end().to_num(5) == 5
    assert ReplayPosition.beginning().to_num(5) == 0
    assert ReplayPosition.other(3).to_num(5) == 3
    assert ReplayPosition.other(4).is_valid(5)
    assert not ReplayPosition.other(5).is_valid(5)
    assert not ReplayPosition.other(0).is_valid(5)
    assert ReplayPosition.end().is_valid(1)


def test_position_ordering():
    assert ReplayPosition.beginning() < ReplayPosition.other(1)
    assert ReplayPosition.other(1) < ReplayPosition.other(2)
    assert ReplayPosition.other(100) < ReplayPosition.end()
    assert ReplayPosition.end() > ReplayPosition.beginning()
    assert not ReplayPosition.end() < ReplayPosition.end()


def test_simple_player_updates_client_player():
    client_player = ClientPlayer(player_id=3, top_score=True, score=1)
    SimplePlayer(score=7, dead=True, victory_click=True).update_client_player(client_player)
    assert client_player == ClientPlayer(
        player_id=3, dead=True, victory_click=True, top_score=False, score=7
    )