"""Move descriptor produced by the legal move enumerator."""

from __future__ import annotations

from dataclasses import dataclass

from consolechess.core.enums import MoveFlag, PieceType
from consolechess.core.position import Position


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object describing one legal (from, to) pair."""

    from_sq: Position
    to_sq: Position
    flag: MoveFlag = MoveFlag.NORMAL
    captured: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{self.from_sq}{self.to_sq}"

    @property
    def is_capture(self) -> bool:
        return self.flag in (MoveFlag.CAPTURE, MoveFlag.EN_PASSANT)

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    def describe(self) -> str:
        """Coordinate notation plus annotation, e.g. ``e4d5 (captures pawn)``."""
        base = str(self)
        if self.flag == MoveFlag.CAPTURE and self.captured is not None:
            return f"{base} (captures {self.captured.name.lower()})"
        if self.flag == MoveFlag.EN_PASSANT:
            return f"{base} (en passant)"
        if self.flag == MoveFlag.CASTLE_KINGSIDE:
            return f"{base} (castles kingside)"
        if self.flag == MoveFlag.CASTLE_QUEENSIDE:
            return f"{base} (castles queenside)"
        return base
