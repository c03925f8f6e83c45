"""High-level chess rules: check, checkmate, stalemate, end-of-turn status."""

from __future__ import annotations

from typing import TYPE_CHECKING

from consolechess.core.attacks import AttackDetector
from consolechess.core.enums import Color, GameResult, GameStatus
from consolechess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from consolechess.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return AttackDetector(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        return Rules.status(board, color) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        return Rules.status(board, color) == GameStatus.STALEMATE

    @staticmethod
    def status(board: Board, color: Color) -> GameStatus:
        """Situation of *color*, normally the side that just got the move."""
        in_check = Rules.is_in_check(board, color)
        if MoveGenerator(board).has_any_legal_move(color):
            return GameStatus.CHECK if in_check else GameStatus.IN_PROGRESS
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE

    @staticmethod
    def result_for(status: GameStatus, mover: Color) -> GameResult:
        """Game result once *mover* has produced *status* for the opponent."""
        if status == GameStatus.CHECKMATE:
            return GameResult.WHITE_WINS if mover == Color.WHITE else GameResult.BLACK_WINS
        if status == GameStatus.STALEMATE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
