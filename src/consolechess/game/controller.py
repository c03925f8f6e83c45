"""GameController: the thin orchestrator between a front end and the engine.

Coordinates: GameState, move text parsing, save files.
Emits events via simple callbacks so a console front end / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from consolechess.config import EngineOptions
from consolechess.core.enums import Color, GameResult, GameStatus, PieceType
from consolechess.core.move import Move
from consolechess.core.notation import parse_coordinate_move
from consolechess.core.position import Position
from consolechess.game.interfaces import GameEndReason, GamePhase, IGameController
from consolechess.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
CheckCallback = Callable[[Color], None]  # color in check
PromotionCallback = Callable[[Position], None]  # square awaiting a piece
GameOverCallback = Callable[[GameResult, GameEndReason], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Runs a two-player game: validates moves, switches turns, notifies
    listeners and persists games.

    Thread-safety: methods are designed to be called from a single thread.
    """

    __slots__ = ("_state", "_options", "events")

    def __init__(self, options: EngineOptions | None = None) -> None:
        self._options = options if options is not None else EngineOptions.from_env()
        self._state = GameState(options=self._options)
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def options(self) -> EngineOptions:
        return self._options

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        self._state = GameState(options=self._options)
        self._state.setup(fen)
        _LOGGER.info("New game started (%s to move)", self._state.side_to_move)
        self._emit_phase(self._state.phase)

    def submit(self, text: str) -> bool:
        """Submit a move written as coordinate text, e.g. ``e2e4``."""
        try:
            from_sq, to_sq = parse_coordinate_move(text)
        except ValueError:
            _LOGGER.debug("Unparseable move text %r", text)
            return False
        return self.submit_move(from_sq, to_sq)

    def submit_move(self, from_sq: Position, to_sq: Position) -> bool:
        if self._state.phase == GamePhase.NOT_STARTED:
            return False
        record = self._state.apply_move(from_sq, to_sq)
        if record is None:
            _LOGGER.debug("Rejected move %s%s", from_sq, to_sq)
            return False

        self._emit_move(record)
        if self._state.phase == GamePhase.AWAITING_PROMOTION:
            self._emit_phase(GamePhase.AWAITING_PROMOTION)
            self._emit_promotion_required()
            return True

        self._after_turn()
        return True

    def promote(self, piece_type: PieceType) -> bool:
        if not self._state.promote(piece_type):
            return False
        self._emit_phase(self._state.phase)
        self._after_turn()
        return True

    def resign(self, color: Color) -> None:
        if self._state.is_game_over or self._state.phase == GamePhase.NOT_STARTED:
            return
        self._state.resign(color)
        self._emit_game_over()

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        """Annotated legal moves for the side to move."""
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return []
        return self._state.legal_moves()

    # ── Persistence ──────────────────────────────────────────────────────

    def save_game(self, path: str | Path) -> None:
        """Write the current board to *path* (I/O errors propagate)."""
        target = Path(path)
        target.write_text(self._state.save(), encoding="utf-8")
        _LOGGER.info("Game saved to %s", target)

    def load_game(self, path: str | Path) -> bool:
        """Restore a game from *path*; ``False`` if the file is malformed."""
        source = Path(path)
        try:
            text = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            _LOGGER.warning("Rejected save file %s: %s", source, exc)
            return False
        if not self._state.load(text):
            return False
        _LOGGER.info("Game loaded from %s", source)
        self._emit_phase(self._state.phase)
        if self._state.phase == GamePhase.AWAITING_PROMOTION:
            self._emit_promotion_required()
        if self._state.is_game_over:
            self._emit_game_over()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_turn(self) -> None:
        state = self._state
        if state.is_game_over:
            self._emit_game_over()
            return
        if state.status == GameStatus.CHECK:
            for cb in self.events.on_check:
                cb(state.side_to_move)

    def _emit_move(self, record: MoveRecord) -> None:
        _LOGGER.debug("%s played %s", record.color, record.notation)
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self) -> None:
        state = self._state
        _LOGGER.info("Game over: %s by %s", state.result.name, state.end_reason.name)
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(state.result, state.end_reason)

    def _emit_promotion_required(self) -> None:
        square = self._state.pending_promotion
        assert square is not None
        for cb in self.events.on_promotion_required:
            cb(square)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
