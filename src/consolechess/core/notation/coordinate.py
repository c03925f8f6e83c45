"""Coordinate move text such as ``e2e4``."""

from __future__ import annotations

from consolechess.core.position import Position, square_name


def parse_coordinate_move(text: str) -> tuple[Position, Position]:
    """Parse ``e2e4`` (also ``E2-E4`` or ``e2 e4``) into two positions."""
    compact = "".join(text.split()).replace("-", "").lower()
    if len(compact) != 4:
        raise ValueError(f"Invalid move text: {text!r}")
    return Position.from_algebraic(compact[:2]), Position.from_algebraic(compact[2:])


def coordinate_move(from_sq: Position, to_sq: Position) -> str:
    return f"{square_name(from_sq)}{square_name(to_sq)}"
