"""Move execution: apply an already-validated move to the board."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from consolechess.config import EngineOptions
from consolechess.core.attacks import PAWN_DIRECTION
from consolechess.core.enums import CastlingFlags, CastlingSide, Color, PieceType
from consolechess.core.piece import Piece
from consolechess.core.position import Position
from consolechess.core.validator import HOME_ROW, PAWN_START_ROW, MoveValidator

if TYPE_CHECKING:
    from consolechess.core.board import Board

_LOGGER = logging.getLogger(__name__)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Original rook corners → the flag that revokes castling on that side.
_ROOK_CORNERS: dict[Position, CastlingFlags] = {
    Position(HOME_ROW[color], side.rook_column): CastlingFlags.rook(color, side)
    for color in Color
    for side in CastlingSide
}

_ROOK_TARGET_COLUMN: dict[CastlingSide, int] = {
    CastlingSide.KINGSIDE: 5,
    CastlingSide.QUEENSIDE: 3,
}


class MoveExecutor:
    """Applies moves to a :class:`Board`.

    :meth:`make_move` trusts the caller to have confirmed the move with
    :class:`MoveValidator` first; it performs no legality check unless
    ``options.verify_moves`` is set.
    """

    __slots__ = ("_board", "_options")

    def __init__(self, board: Board, options: EngineOptions | None = None) -> None:
        self._board = board
        self._options = options if options is not None else EngineOptions()

    # -- Core move operation ------------------------------------------------

    def make_move(self, from_sq: Position, to_sq: Position) -> None:
        board = self._board
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")
        if self._options.verify_moves and not MoveValidator(board).is_valid_move(
            from_sq, to_sq, piece.color
        ):
            raise ValueError(f"Illegal move {from_sq}{to_sq} for {piece.color}")

        col_diff = to_sq.column - from_sq.column
        if piece.piece_type == PieceType.KING and abs(col_diff) == 2:
            self._castle(piece.color, from_sq, to_sq)
        elif (
            piece.piece_type == PieceType.PAWN
            and to_sq == board.en_passant
            and col_diff != 0
        ):
            self._capture_en_passant(piece, from_sq, to_sq)
        else:
            self._relocate(piece, from_sq, to_sq)
            board.history.append(f"{from_sq}{to_sq}")
            board.en_passant = self._double_step_target(piece, from_sq, to_sq)

        board.move_count += 1
        _LOGGER.debug("Applied %s (move %d)", board.history[-1], board.move_count)

    # -- Promotion ----------------------------------------------------------

    def needs_promotion(self, sq: Position) -> bool:
        """Is there a pawn on its last row at *sq*?"""
        piece = self._board[sq]
        if piece is None or piece.piece_type != PieceType.PAWN:
            return False
        return sq.row == HOME_ROW[piece.color.opposite]

    def promote(self, sq: Position, piece_type: PieceType) -> bool:
        """Replace the pawn on *sq* with a new *piece_type* piece."""
        if piece_type not in PROMOTION_TYPES or not self.needs_promotion(sq):
            return False
        board = self._board
        pawn = board[sq]
        assert pawn is not None
        board[sq] = Piece(pawn.color, piece_type)
        if board.history:
            board.history[-1] += f"={piece_type.letter}"
        return True

    # -- Special moves ------------------------------------------------------

    def _castle(self, color: Color, from_sq: Position, to_sq: Position) -> None:
        board = self._board
        side = (
            CastlingSide.KINGSIDE
            if to_sq.column > from_sq.column
            else CastlingSide.QUEENSIDE
        )
        rook_from = Position(from_sq.row, side.rook_column)
        rook_to = Position(from_sq.row, _ROOK_TARGET_COLUMN[side])

        board[to_sq] = board[from_sq]
        board[from_sq] = None
        board[rook_to] = board[rook_from]
        board[rook_from] = None

        board.mark_moved(
            CastlingFlags.king(color)
            | CastlingFlags.rook(color, CastlingSide.KINGSIDE)
            | CastlingFlags.rook(color, CastlingSide.QUEENSIDE)
        )
        board.history.append(side.notation)
        board.en_passant = None

    def _capture_en_passant(
        self, piece: Piece, from_sq: Position, to_sq: Position
    ) -> None:
        board = self._board
        board[to_sq] = piece
        board[from_sq] = None
        # The captured pawn stands one row behind the destination.
        board[Position(to_sq.row - PAWN_DIRECTION[piece.color], to_sq.column)] = None
        board.history.append(f"{from_sq}{to_sq} e.p.")
        board.en_passant = None

    def _relocate(self, piece: Piece, from_sq: Position, to_sq: Position) -> None:
        board = self._board
        board[to_sq] = piece
        board[from_sq] = None

        if piece.piece_type == PieceType.KING:
            board.mark_moved(CastlingFlags.king(piece.color))
        if piece.piece_type == PieceType.ROOK and from_sq in _ROOK_CORNERS:
            board.mark_moved(_ROOK_CORNERS[from_sq])
        # A capture on a rook corner removes that rook for good.
        if to_sq in _ROOK_CORNERS:
            board.mark_moved(_ROOK_CORNERS[to_sq])

    @staticmethod
    def _double_step_target(
        piece: Piece, from_sq: Position, to_sq: Position
    ) -> Position | None:
        if piece.piece_type != PieceType.PAWN:
            return None
        if from_sq.row != PAWN_START_ROW[piece.color]:
            return None
        if abs(to_sq.row - from_sq.row) != 2:
            return None
        return Position((from_sq.row + to_sq.row) // 2, from_sq.column)
