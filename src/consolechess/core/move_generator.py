"""Legal move enumeration by exhaustive (from, to) validation."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from consolechess.core.enums import Color, MoveFlag, PieceType
from consolechess.core.move import Move
from consolechess.core.position import ALL_POSITIONS, Position
from consolechess.core.validator import MoveValidator

if TYPE_CHECKING:
    from consolechess.core.board import Board


class MoveGenerator:
    """Generates legal moves for one color on a :class:`Board`.

    Every square owned by the color is tried against every square of the
    board through :class:`MoveValidator`, so the result always agrees with
    what the validator accepts.
    """

    __slots__ = ("_board", "_validator")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._validator = MoveValidator(board)

    # -- Public API ---------------------------------------------------------

    def has_any_legal_move(self, color: Color) -> bool:
        """Stop at the first legal move found."""
        return next(self._legal_pairs(color), None) is not None

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, row-major by source then destination."""
        return [
            self._annotate(from_sq, to_sq) for from_sq, to_sq in self._legal_pairs(color)
        ]

    def legal_destinations(self, from_sq: Position) -> list[Position]:
        """Legal target squares for the piece on *from_sq*."""
        piece = self._board[from_sq]
        if piece is None:
            return []
        is_valid = self._validator.is_valid_move
        return [
            to_sq
            for to_sq in ALL_POSITIONS
            if to_sq != from_sq and is_valid(from_sq, to_sq, piece.color)
        ]

    # -- Internal -----------------------------------------------------------

    def _legal_pairs(self, color: Color) -> Iterator[tuple[Position, Position]]:
        is_valid = self._validator.is_valid_move
        for from_sq, _ in self._board.pieces(color):
            for to_sq in ALL_POSITIONS:
                if to_sq != from_sq and is_valid(from_sq, to_sq, color):
                    yield from_sq, to_sq

    def _annotate(self, from_sq: Position, to_sq: Position) -> Move:
        board = self._board
        piece = board[from_sq]
        target = board[to_sq]
        assert piece is not None

        if target is not None:
            return Move(from_sq, to_sq, MoveFlag.CAPTURE, target.piece_type)
        if piece.piece_type == PieceType.KING and abs(to_sq.column - from_sq.column) == 2:
            flag = (
                MoveFlag.CASTLE_KINGSIDE
                if to_sq.column > from_sq.column
                else MoveFlag.CASTLE_QUEENSIDE
            )
            return Move(from_sq, to_sq, flag)
        if (
            piece.piece_type == PieceType.PAWN
            and to_sq == board.en_passant
            and to_sq.column != from_sq.column
        ):
            return Move(from_sq, to_sq, MoveFlag.EN_PASSANT)
        return Move(from_sq, to_sq)
