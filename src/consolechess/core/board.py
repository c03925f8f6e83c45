"""Board - piece placement on an 8x8 grid plus castling, en-passant and history."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from consolechess.core.enums import CastlingFlags, CastlingSide, Color, PieceType
from consolechess.core.piece import Piece
from consolechess.core.position import ALL_POSITIONS, BOARD_SIZE, Position

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _empty_grid() -> list[list[Piece | None]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


class Board:
    """Mutable 8x8 board, the single owner of all game state.

    Besides piece placement it carries the castling flags, the en-passant
    target, the notated move history and the move counter.  Rule components
    (validator, attack detector, executor) receive the board by reference and
    never keep copies of its state.
    """

    __slots__ = ("_squares", "castling", "en_passant", "history", "move_count")

    def __init__(self) -> None:
        self._squares: list[list[Piece | None]] = _empty_grid()
        self.castling = CastlingFlags.NONE
        self.en_passant: Position | None = None
        self.history: list[str] = []
        self.move_count = 0

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Position) -> Piece | None:
        return self._squares[sq.row][sq.column]

    def __setitem__(self, sq: Position, piece: Piece | None) -> None:
        if piece is not None and not isinstance(piece, Piece):
            raise TypeError(f"Expected Piece or None, got {piece!r}")
        self._squares[sq.row][sq.column] = piece

    def is_empty(self, sq: Position) -> bool:
        return self._squares[sq.row][sq.column] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[tuple[Position, Piece]]:
        """Occupied squares in row-major order, optionally filtered by *color*."""
        found: list[tuple[Position, Piece]] = []
        for sq in ALL_POSITIONS:
            piece = self._squares[sq.row][sq.column]
            if piece is None:
                continue
            if color is None or piece.color == color:
                found.append((sq, piece))
        return found

    def count(self, color: Color, piece_type: PieceType) -> int:
        target = Piece(color, piece_type)
        return sum(1 for _, piece in self.pieces(color) if piece == target)

    @property
    def side_to_move(self) -> Color:
        """White moves on even counters, black on odd ones."""
        return Color.WHITE if self.move_count % 2 == 0 else Color.BLACK

    # -- Castling flags -----------------------------------------------------

    def has_moved(self, flag: CastlingFlags) -> bool:
        return bool(self.castling & flag)

    def mark_moved(self, flag: CastlingFlags) -> None:
        self.castling |= flag

    def may_castle(self, color: Color, side: CastlingSide) -> bool:
        """Whether neither the king nor the *side* rook of *color* has moved."""
        return not (
            self.has_moved(CastlingFlags.king(color))
            or self.has_moved(CastlingFlags.rook(color, side))
        )

    # -- Simulation ---------------------------------------------------------

    @contextmanager
    def simulate(self, from_sq: Position, to_sq: Position) -> Iterator[None]:
        """Temporarily play *from_sq* → *to_sq*, restoring every square on exit.

        The piece lands on *to_sq* (capturing whatever stood there).  A pawn
        stepping diagonally onto the empty en-passant target also lifts the
        pawn it passes.  Flags, history and counters are not touched.
        """
        piece = self[from_sq]
        touched = [from_sq, to_sq]
        victim_sq: Position | None = None
        if (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and to_sq == self.en_passant
            and from_sq.column != to_sq.column
            and self.is_empty(to_sq)
        ):
            victim_sq = Position(from_sq.row, to_sq.column)
            touched.append(victim_sq)

        saved = [(sq, self[sq]) for sq in touched]
        try:
            self[to_sq] = piece
            self[from_sq] = None
            if victim_sq is not None:
                self[victim_sq] = None
            yield
        finally:
            for sq, original in reversed(saved):
                self[sq] = original

    # -- Persistence --------------------------------------------------------

    def save(self) -> str:
        """Serialise the full board state to the save-file text form."""
        from consolechess.core.notation.savefile import dump_board

        return dump_board(self)

    def load(self, text: str) -> bool:
        """Replace the whole state from *text*; ``False`` leaves it untouched."""
        from consolechess.core.notation.savefile import parse_board

        try:
            loaded = parse_board(text)
        except ValueError as exc:
            _LOGGER.warning("Rejected save data: %s", exc)
            return False
        self._replace_with(loaded)
        return True

    def _replace_with(self, other: Board) -> None:
        self._squares = [row.copy() for row in other._squares]
        self.castling = other.castling
        self.en_passant = other.en_passant
        self.history = other.history.copy()
        self.move_count = other.move_count

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._replace_with(self)
        return b

    def clear(self) -> None:
        self._squares = _empty_grid()
        self.castling = CastlingFlags.NONE
        self.en_passant = None
        self.history = []
        self.move_count = 0

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for column, piece_type in enumerate(_BACK_RANK):
            b[Position(0, column)] = Piece(Color.BLACK, piece_type)
            b[Position(1, column)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Position(6, column)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Position(7, column)] = Piece(Color.WHITE, piece_type)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.history == other.history
            and self.move_count == other.move_count
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [str(p) if p else "." for p in self._squares[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
