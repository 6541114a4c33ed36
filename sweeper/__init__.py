"""Minesweeper engine for one or more players, with replays, board analysis and a terminal game."""

__version__ = "0.1.0"