"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from consolechess.core.enums import Color, PieceType


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise TypeError(f"Piece color must be a Color, got {self.color!r}")
        if not isinstance(self.piece_type, PieceType):
            raise TypeError(
                f"Piece type must be a PieceType, got {self.piece_type!r}"
            )

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        letter = self.piece_type.letter
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a FEN letter, e.g. 'N' → white knight."""
        if len(char) != 1 or not char.isalpha():
            raise ValueError(f"Invalid piece character: {char!r}")
        piece_type = PieceType.from_letter(char)
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, piece_type)

    @property
    def token(self) -> str:
        """Save-file token, e.g. ``WHITE_KNIGHT``."""
        return f"{self.color.name}_{self.piece_type.name}"
