"""Move legality: movement patterns, path clearance, castling and king safety."""

from __future__ import annotations

from typing import TYPE_CHECKING

from consolechess.core.attacks import PAWN_DIRECTION, AttackDetector, is_path_clear
from consolechess.core.enums import CastlingSide, Color, PieceType
from consolechess.core.piece import Piece
from consolechess.core.position import Position

if TYPE_CHECKING:
    from consolechess.core.board import Board


PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
KING_COLUMN = 4


class MoveValidator:
    """Decides whether a (from, to) request is legal for a color.

    Candidate moves are played on the board inside :meth:`Board.simulate`
    and always rolled back before the answer is returned.
    """

    __slots__ = ("_board", "_attacks")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._attacks = AttackDetector(board)

    # -- Public API ---------------------------------------------------------

    def is_valid_move(self, from_sq: Position, to_sq: Position, color: Color) -> bool:
        if not isinstance(from_sq, Position) or not isinstance(to_sq, Position):
            return False
        if from_sq == to_sq:
            return False

        board = self._board
        piece = board[from_sq]
        if piece is None or piece.color != color:
            return False

        target = board[to_sq]
        if target is not None and target.color == color:
            return False

        if not self.matches_pattern(piece, from_sq, to_sq):
            return False

        with board.simulate(from_sq, to_sq):
            leaves_king_in_check = self._attacks.is_in_check(color)
        return not leaves_king_in_check

    def matches_pattern(self, piece: Piece, from_sq: Position, to_sq: Position) -> bool:
        """Movement geometry (and path clearance) for *piece*, ignoring checks."""
        row_diff = abs(to_sq.row - from_sq.row)
        col_diff = abs(to_sq.column - from_sq.column)
        piece_type = piece.piece_type

        if piece_type == PieceType.PAWN:
            return self._pawn_move(piece.color, from_sq, to_sq, col_diff)
        if piece_type == PieceType.ROOK:
            return self._rook_move(from_sq, to_sq, row_diff, col_diff)
        if piece_type == PieceType.KNIGHT:
            return (row_diff, col_diff) in ((2, 1), (1, 2))
        if piece_type == PieceType.BISHOP:
            return self._bishop_move(from_sq, to_sq, row_diff, col_diff)
        if piece_type == PieceType.QUEEN:
            return self._rook_move(
                from_sq, to_sq, row_diff, col_diff
            ) or self._bishop_move(from_sq, to_sq, row_diff, col_diff)
        if piece_type == PieceType.KING:
            if row_diff <= 1 and col_diff <= 1:
                return row_diff + col_diff > 0
            if row_diff == 0 and col_diff == 2:
                return self.can_castle(piece.color, from_sq, to_sq)
        return False

    def can_castle(self, color: Color, from_sq: Position, to_sq: Position) -> bool:
        """Castling preconditions for a king moving two columns."""
        board = self._board
        home = Position(HOME_ROW[color], KING_COLUMN)
        if from_sq != home or to_sq.row != home.row:
            return False

        side = (
            CastlingSide.KINGSIDE
            if to_sq.column > from_sq.column
            else CastlingSide.QUEENSIDE
        )
        if not board.may_castle(color, side):
            return False

        rook_sq = Position(home.row, side.rook_column)
        if board[rook_sq] != Piece(color, PieceType.ROOK):
            return False
        if not is_path_clear(board, home, rook_sq):
            return False

        if self._attacks.is_in_check(color):
            return False

        step = 1 if side == CastlingSide.KINGSIDE else -1
        transit = Position(home.row, home.column + step)
        for king_sq in (transit, to_sq):
            with board.simulate(home, king_sq):
                attacked = self._attacks.is_in_check(color)
            if attacked:
                return False
        return True

    # -- Piece-specific patterns (private) ---------------------------------

    def _pawn_move(
        self, color: Color, from_sq: Position, to_sq: Position, col_diff: int
    ) -> bool:
        board = self._board
        direction = PAWN_DIRECTION[color]
        row_step = to_sq.row - from_sq.row

        if col_diff == 0:
            if not board.is_empty(to_sq):
                return False
            if row_step == direction:
                return True
            if row_step == 2 * direction and from_sq.row == PAWN_START_ROW[color]:
                return board.is_empty(Position(from_sq.row + direction, from_sq.column))
            return False

        if col_diff != 1 or row_step != direction:
            return False
        target = board[to_sq]
        if target is not None:
            return target.color != color
        if to_sq != board.en_passant:
            return False
        victim = board[Position(from_sq.row, to_sq.column)]
        return victim == Piece(color.opposite, PieceType.PAWN)

    def _rook_move(
        self, from_sq: Position, to_sq: Position, row_diff: int, col_diff: int
    ) -> bool:
        if (row_diff == 0) == (col_diff == 0):
            return False
        return is_path_clear(self._board, from_sq, to_sq)

    def _bishop_move(
        self, from_sq: Position, to_sq: Position, row_diff: int, col_diff: int
    ) -> bool:
        if row_diff != col_diff or row_diff == 0:
            return False
        return is_path_clear(self._board, from_sq, to_sq)
