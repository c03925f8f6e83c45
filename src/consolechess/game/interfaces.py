"""Game-layer enumerations and the controller interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from consolechess.core.enums import Color, PieceType

if TYPE_CHECKING:
    from consolechess.core.position import Position


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # a pawn reached the last row
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    RESIGNATION = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, from_sq: Position, to_sq: Position) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def promote(self, piece_type: PieceType) -> bool:
        """Choose the piece for a pending promotion."""

    @abstractmethod
    def resign(self, color: Color) -> None:
        """Player of *color* resigns."""
