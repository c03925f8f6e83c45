"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Single upper-case letter, e.g. KNIGHT → 'N'."""
        return _LETTERS[self]

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        try:
            return _FROM_LETTER[letter.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {letter!r}") from None


_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_FROM_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


class CastlingSide(IntEnum):
    """Which rook the king castles with."""

    KINGSIDE = 0
    QUEENSIDE = 1

    @property
    def rook_column(self) -> int:
        return 7 if self == CastlingSide.KINGSIDE else 0

    @property
    def notation(self) -> str:
        return "O-O" if self == CastlingSide.KINGSIDE else "O-O-O"


class CastlingFlags(IntFlag):
    """Bit set of pieces that have left their original squares.

    Bits are only ever added: once a king or rook has moved, castling on the
    affected side stays illegal for the rest of the game.
    """

    NONE = 0
    WHITE_KING_MOVED = 1
    BLACK_KING_MOVED = 2
    WHITE_KINGSIDE_ROOK_MOVED = 4
    WHITE_QUEENSIDE_ROOK_MOVED = 8
    BLACK_KINGSIDE_ROOK_MOVED = 16
    BLACK_QUEENSIDE_ROOK_MOVED = 32

    WHITE_ALL = (
        WHITE_KING_MOVED | WHITE_KINGSIDE_ROOK_MOVED | WHITE_QUEENSIDE_ROOK_MOVED
    )
    BLACK_ALL = (
        BLACK_KING_MOVED | BLACK_KINGSIDE_ROOK_MOVED | BLACK_QUEENSIDE_ROOK_MOVED
    )
    ALL = WHITE_ALL | BLACK_ALL

    @classmethod
    def king(cls, color: Color) -> CastlingFlags:
        return cls.WHITE_KING_MOVED if color == Color.WHITE else cls.BLACK_KING_MOVED

    @classmethod
    def rook(cls, color: Color, side: CastlingSide) -> CastlingFlags:
        return _ROOK_FLAGS[(color, side)]

    @classmethod
    def ordered(cls) -> tuple[CastlingFlags, ...]:
        """The six single flags in persisted order."""
        return _SAVE_ORDER


_ROOK_FLAGS: dict[tuple[Color, CastlingSide], CastlingFlags] = {
    (Color.WHITE, CastlingSide.KINGSIDE): CastlingFlags.WHITE_KINGSIDE_ROOK_MOVED,
    (Color.WHITE, CastlingSide.QUEENSIDE): CastlingFlags.WHITE_QUEENSIDE_ROOK_MOVED,
    (Color.BLACK, CastlingSide.KINGSIDE): CastlingFlags.BLACK_KINGSIDE_ROOK_MOVED,
    (Color.BLACK, CastlingSide.QUEENSIDE): CastlingFlags.BLACK_QUEENSIDE_ROOK_MOVED,
}

_SAVE_ORDER: tuple[CastlingFlags, ...] = (
    CastlingFlags.WHITE_KING_MOVED,
    CastlingFlags.BLACK_KING_MOVED,
    CastlingFlags.WHITE_KINGSIDE_ROOK_MOVED,
    CastlingFlags.WHITE_QUEENSIDE_ROOK_MOVED,
    CastlingFlags.BLACK_KINGSIDE_ROOK_MOVED,
    CastlingFlags.BLACK_QUEENSIDE_ROOK_MOVED,
)


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    CAPTURE = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4


class GameStatus(IntEnum):
    """Situation of the side to move after the opponent's move."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
