# sweeper

A minesweeper engine for one or more players. It places the mines, handles
flags and reveal-adjacent clicks, keeps scores and detects victory. A
player's first click on untouched ground has the mine under it, and any
mines around it, moved elsewhere. A game can be recorded, replayed one step
at a time in either direction, and analysed at each position to mark the
hidden cells that must be mines or must be safe.

## Installation

```
pip install .
```

## Playing in the terminal

```
sweeper                 # beginner: 9x9, 10 mines
sweeper --intermediate  # 16x16, 40 mines
sweeper --expert        # 16 rows x 30 columns, 99 mines
```

The board is printed before each move. Enter an action letter followed by
a row and a column, separated by single spaces:

- `c ROW COL`: reveal a cell
- `d ROW COL`: reveal every unflagged neighbour of a revealed number whose
  flags already match it
- `f ROW COL`: toggle a flag

The game ends when you hit a mine, reveal every safe cell, or close the
input.

## Using the library

```python
from sweeper.board import BoardPoint
from sweeper.builder import MinesweeperBuilder, MinesweeperOpts
from sweeper.plays import Action, Play

game = (
    MinesweeperBuilder(MinesweeperOpts(rows=9, cols=9, num_mines=10))
    .with_multiplayer(2)
    .with_log()
    .init()
)

outcome = game.play(Play(player=0, action=Action.REVEAL, point=BoardPoint(4, 4)))
print(outcome.kind, len(outcome), game.player_score(0))
print(game.player_board(0))
```

`MinesweeperBuilder` raises `sweeper.cell.MinesweeperError` for options
that do not describe a playable board. `with_superclick()` makes the first
click also clear mines from the surrounding cells.

`Minesweeper.play` returns a `sweeper.plays.PlayOutcome` whose `kind` is
one of `OutcomeKind.SUCCESS`, `FAILURE`, `VICTORY` or `FLAG`. A move that
breaks the rules raises `MinesweeperError`. Examples are playing after the
game has ended, playing as a player who has hit a mine, clicking a revealed
or flagged cell, and playing outside the board.

Other things you can ask a running game for are `viewer_board()`,
`player_board(player)`, `player_dead(player)`, `player_victory_click(player)`,
`current_top_score()`, `player_top_score(player)` and `is_over()`.

`Play`, `PlayOutcome`, `Cell`, `RevealedCell` and `PlayerCell` have
`to_dict()` and `from_dict()` methods that convert to and from plain
JSON-compatible data.

### Client view

`sweeper.client.MinesweeperClient` holds a board as one player sees it. Its
`update(outcome)` method applies a `PlayOutcome` and returns the cells that
changed, and `neighbors_flagged(point)` tells whether a revealed number
already has as many flags or revealed mines around it as its count.

### Replays and analysis

Once a game is finished, `Minesweeper.complete()` returns a
`sweeper.completed.CompletedMinesweeper`. If the game was built
`with_log()`, its `replay(player)` method gives a
`sweeper.replay.MinesweeperReplay`, which shows every reveal and only that
player's flags. It returns `None` when there is no log. Move through a
replay with `advance()`, `rewind()` and `to_pos(ReplayPosition...)`. A game
can also be rebuilt from a final board, a log and `ClientPlayer` summaries
with `CompletedMinesweeper.from_log`.

`sweeper.replay_analysis.MinesweeperReplayWithAnalysis.from_replay(replay)`
wraps a replay so that each cell of its `current_board` also carries the
analysis result (`AnalyzedCell.MINE`, `AnalyzedCell.EMPTY`, or `None`) for
that position.

To analyse a single position, build
`sweeper.analysis.MinesweeperAnalysis.from_player_board(board)` and call
`analyze_board()`. It returns the list of `AnalysisUpdate` changes it made.

## What it does not do

Players in a multiplayer game take turns on one `Minesweeper` object in
one process. The package has no server, no network transport, no web or
graphical interface and no storage. Saving or sending games is left to the
caller, for example through the `to_dict()` and `from_dict()` methods.