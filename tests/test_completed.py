import pytest

from sweeper.board import Board, BoardPoint
from sweeper.cell import Cell, CellState, HiddenCell, MinesweeperError, PlayerCell, RevealedCell
from sweeper.client import ClientPlayer
from sweeper.completed import CompletedMinesweeper
from sweeper.game import Minesweeper
from sweeper.plays import Action, Play, Player
from sweeper.replay import ReplayPosition

MINE = BoardPoint(0, 0)
FIRST = BoardPoint(0, 1)
FLAGGED = BoardPoint(1, 1)


def played_game(log=True):
    board = Board(3, 3, (Cell.empty(0), CellState()))
    game = Minesweeper(board, 2, superclick=False, log=log)
    game.plant(MINE)
    game.play(Play(0, Action.REVEAL, FIRST))
    game.play(Play(1, Action.REVEAL, MINE))
    game.play(Play(0, Action.FLAG, FLAGGED))
    return game


def test_scores_and_status_carry_over():
    game = played_game()
    score0, score1 = game.player_score(0), game.player_score(1)
    top = game.current_top_score()
    completed = game.complete()
    assert completed.player_score(0) == score0
    assert completed.player_score(1) == score1
    assert completed.top_score() == top
    assert completed.player_dead(1) is True
    assert completed.player_dead(0) is False
    assert completed.player_victory_click(0) is False
    assert completed.player_top_score(0) is True
    assert completed.player_top_score(1) is False


def test_unknown_player_raises():
    completed = played_game().complete()
    with pytest.raises(MinesweeperError):
        completed.player_score(2)
    with pytest.raises(MinesweeperError):
        completed.player_dead(5)
    with pytest.raises(MinesweeperError):
        completed.player_top_score(2)


def test_final_boards():
    completed = played_game().complete()
    final = completed.viewer_board_final()
    assert final[MINE] == PlayerCell.revealed(RevealedCell(1, Cell.mine()))
    assert final[FLAGGED] == PlayerCell.hidden(HiddenCell.EMPTY)
    assert completed.player_board_final(0)[FLAGGED] == PlayerCell.hidden(HiddenCell.FLAG)
    assert completed.player_board_final(1)[FLAGGED] == PlayerCell.hidden(HiddenCell.EMPTY)


def test_viewer_board_final_is_a_copy():
    completed = played_game().complete()
    board = completed.viewer_board_final()
    board[FLAGGED] = PlayerCell.hidden(HiddenCell.FLAG)
    assert completed.viewer_board_final()[FLAGGED] == PlayerCell.hidden(HiddenCell.EMPTY)


def test_replay_reaches_player_final_board():
    completed = played_game().complete()
    replay = completed.replay(0)
    assert replay.current_board[MINE] == PlayerCell.hidden(HiddenCell.MINE)
    assert replay.current_board[FIRST] == PlayerCell.hidden(HiddenCell.EMPTY)
    assert replay.to_pos(ReplayPosition.end()) == ReplayPosition.end()
    assert replay.current_board == completed.player_board_final(0)


def test_replay_filters_other_players_flags():
    completed = played_game().complete()
    log = completed.get_log()
    assert len(completed.replay(0)) == len(log) + 1
    assert len(completed.replay(1)) == len(log)
    assert len(completed.replay(None)) == len(log)


def test_get_log_returns_copy():
    completed = played_game().complete()
    log = completed.get_log()
    log.clear()
    assert completed.get_log() == completed.recover_log()
    assert len(completed.recover_log()) > 0


def test_without_log():
    completed = played_game(log=False).complete()
    assert completed.replay(0) is None
    assert completed.get_log() is None
    assert completed.recover_log() is None


def test_from_log_restores_players_and_flags():
    original = played_game().complete()
    restored = CompletedMinesweeper.from_log(
        original.viewer_board_final(),
        original.get_log(),
        [
            ClientPlayer(player_id=1, score=3, dead=True, victory_click=True),
            ClientPlayer(player_id=0, score=7),
        ],
    )
    assert restored.player_score(1) == 3
    assert restored.player_dead(1) is True
    assert restored.player_victory_click(1) is True
    assert restored.player_score(0) == 7
    assert restored.top_score() == 7
    assert restored.player_top_score(0) is True
    assert restored.player_board_final(0)[FLAGGED] == PlayerCell.hidden(HiddenCell.FLAG)
    assert restored.player_board_final(1)[FLAGGED] == PlayerCell.hidden(HiddenCell.EMPTY)


def test_single_player_has_no_top_score():
    board = Board(2, 2, PlayerCell.hidden())
    completed = CompletedMinesweeper([Player(score=4)], board, None)
    assert completed.top_score() is None
    assert completed.player_top_score(0) is False