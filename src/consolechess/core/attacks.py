"""Attack detection: is a square attacked, is a king in check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from consolechess.core.enums import Color, PieceType
from consolechess.core.position import ALL_POSITIONS, Position

if TYPE_CHECKING:
    from consolechess.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

# Row step a pawn of the given color advances by.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for sq in ALL_POSITIONS:
        moves: list[Position] = []
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if to_sq is not None:
                moves.append(to_sq)
        targets[sq] = tuple(moves)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for sq in ALL_POSITIONS:
        square_rays: list[tuple[Position, ...]] = []
        for d_row, d_col in directions:
            ray: list[Position] = []
            cur = sq.offset(d_row, d_col)
            while cur is not None:
                ray.append(cur)
                cur = cur.offset(d_row, d_col)
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)


class AttackDetector:
    """Answers attack and check queries against a :class:`Board`.

    This is the hottest path of the engine: every candidate move and every
    castling step ends in an :meth:`is_square_attacked` call.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def find_king(self, color: Color) -> Position | None:
        """Square of *color*'s king (row-major scan), ``None`` if absent."""
        board = self._board
        for sq in ALL_POSITIONS:
            piece = board[sq]
            if (
                piece is not None
                and piece.piece_type == PieceType.KING
                and piece.color == color
            ):
                return sq
        return None

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        A board without a king of *color* reports ``False``.
        """
        king_sq = self.find_king(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Position, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board

        # A pawn attacks diagonally forward, so look one row "behind" sq.
        pawn_row = sq.row - PAWN_DIRECTION[by_color]
        for d_col in (-1, 1):
            if Position.is_valid(pawn_row, sq.column + d_col):
                piece = board[Position(pawn_row, sq.column + d_col)]
                if (
                    piece is not None
                    and piece.color == by_color
                    and piece.piece_type == PieceType.PAWN
                ):
                    return True

        for from_sq in _KNIGHT_TARGETS[sq]:
            piece = board[from_sq]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.KNIGHT
            ):
                return True

        for from_sq in _KING_TARGETS[sq]:
            piece = board[from_sq]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.KING
            ):
                return True

        if self._slider_on_rays(_BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS):
            return True
        return self._slider_on_rays(_ROOK_RAYS[sq], by_color, _STRAIGHT_SLIDERS)

    # -- Helpers ------------------------------------------------------------

    def _slider_on_rays(
        self,
        rays: tuple[tuple[Position, ...], ...],
        by_color: Color,
        sliders: tuple[PieceType, ...],
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in sliders:
                    return True
                break
        return False


def is_path_clear(board: Board, from_sq: Position, to_sq: Position) -> bool:
    """All squares strictly between two aligned squares are empty."""
    row_step = (to_sq.row > from_sq.row) - (to_sq.row < from_sq.row)
    col_step = (to_sq.column > from_sq.column) - (to_sq.column < from_sq.column)
    row = from_sq.row + row_step
    col = from_sq.column + col_step
    while (row, col) != (to_sq.row, to_sq.column):
        if board[Position(row, col)] is not None:
            return False
        row += row_step
        col += col_step
    return True
