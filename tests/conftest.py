"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from consolechess.core.board import Board
from consolechess.core.executor import MoveExecutor
from consolechess.core.notation import parse_coordinate_move
from consolechess.core.validator import MoveValidator

PlayFn = Callable[..., Board]


@pytest.fixture
def board() -> Board:
    """A fresh board in the standard starting layout."""
    return Board.initial()


@pytest.fixture
def play() -> PlayFn:
    """Play coordinate moves on a board, alternating sides by move counter.

    Every move must be legal; the board is returned for chaining.
    """

    def _play(target: Board, *moves: str) -> Board:
        for text in moves:
            from_sq, to_sq = parse_coordinate_move(text)
            color = target.side_to_move
            assert MoveValidator(target).is_valid_move(
                from_sq, to_sq, color
            ), f"{text} rejected for {color}"
            MoveExecutor(target).make_move(from_sq, to_sq)
        return target

    return _play
