"""Position: a square on the board as (row, column) coordinates.

Board layout (row 0 is the black back rank)::

    row 0 → rank 8: a8 b8 ... h8
    ...
    row 7 → rank 1: a1 b1 ... h1
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8
_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable on-board coordinate. Construction fails off the board."""

    row: int
    column: int

    def __post_init__(self) -> None:
        for name in ("row", "column"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int, got {value!r}")
            if not 0 <= value < BOARD_SIZE:
                raise ValueError(f"{name} must be between 0 and 7, got {value}")

    # ── Algebraic notation ───────────────────────────────────────────────

    @classmethod
    def from_algebraic(cls, name: str) -> Position:
        """Parse square name, e.g. 'e4' → Position(4, 4)."""
        if not isinstance(name, str) or len(name) != 2:
            raise ValueError(f"Invalid square name: {name!r}")
        file_char = name[0].lower()
        rank_char = name[1]
        if file_char not in _FILES or rank_char not in _RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(BOARD_SIZE - int(rank_char), _FILES.index(file_char))

    @property
    def file(self) -> str:
        """File letter 'a'-'h'."""
        return _FILES[self.column]

    @property
    def rank(self) -> int:
        """Rank number 1-8."""
        return BOARD_SIZE - self.row

    @property
    def algebraic(self) -> str:
        return f"{self.file}{self.rank}"

    def __str__(self) -> str:
        return self.algebraic

    # ── Geometry ─────────────────────────────────────────────────────────

    @staticmethod
    def is_valid(row: int, column: int) -> bool:
        """Whether (row, column) lies on the board."""
        return 0 <= row < BOARD_SIZE and 0 <= column < BOARD_SIZE

    def offset(self, d_row: int, d_column: int) -> Position | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        row = self.row + d_row
        column = self.column + d_column
        if self.is_valid(row, column):
            return Position(row, column)
        return None


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(row, column) for row in range(BOARD_SIZE) for column in range(BOARD_SIZE)
)


def parse_square(name: str) -> Position:
    """Shorthand for :meth:`Position.from_algebraic`."""
    return Position.from_algebraic(name)


def square_name(position: Position) -> str:
    return position.algebraic


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_POSITIONS[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_POSITIONS[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_POSITIONS[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_POSITIONS[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_POSITIONS[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_POSITIONS[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_POSITIONS[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_POSITIONS[56:64]
