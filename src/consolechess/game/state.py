"""Game state machine: tracks turns, phase transitions and move records."""

from __future__ import annotations

from dataclasses import dataclass, field

from consolechess.config import EngineOptions
from consolechess.core.board import Board
from consolechess.core.enums import Color, GameResult, GameStatus, PieceType
from consolechess.core.executor import MoveExecutor
from consolechess.core.move import Move
from consolechess.core.move_generator import MoveGenerator
from consolechess.core.notation import board_from_fen
from consolechess.core.position import Position
from consolechess.core.rules import Rules
from consolechess.core.validator import MoveValidator
from consolechess.game.interfaces import GameEndReason, GamePhase

_END_REASONS: dict[GameStatus, GameEndReason] = {
    GameStatus.CHECKMATE: GameEndReason.CHECKMATE,
    GameStatus.STALEMATE: GameEndReason.STALEMATE,
}


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    from_sq: Position
    to_sq: Position
    color: Color
    notation: str
    captured: PieceType | None = None
    status: GameStatus = GameStatus.IN_PROGRESS


@dataclass
class GameState:
    """Manages game lifecycle: turn order, phase, result, move records.

    This is a pure data/logic class: no I/O, no UI.
    """

    options: EngineOptions = field(default_factory=EngineOptions)
    board: Board = field(default_factory=Board.initial, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    records: list[MoveRecord] = field(default_factory=list, init=False)
    pending_promotion: Position | None = field(default=None, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game, optionally from a FEN position."""
        self.board = board_from_fen(fen) if fen else Board.initial()
        self.records.clear()
        self._reset_progress()
        self._resume()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, from_sq: Position, to_sq: Position) -> MoveRecord | None:
        """Validate and play a move for the side to move.

        Returns ``None`` (state unchanged) when the move is illegal or the
        game is not awaiting a move.
        """
        if self.phase != GamePhase.AWAITING_MOVE:
            return None
        mover = self.side_to_move
        if not MoveValidator(self.board).is_valid_move(from_sq, to_sq, mover):
            return None

        captured = self._captured_type(from_sq, to_sq)
        executor = MoveExecutor(self.board, self.options)
        executor.make_move(from_sq, to_sq)

        record = MoveRecord(
            from_sq=from_sq,
            to_sq=to_sq,
            color=mover,
            notation=self.board.history[-1],
            captured=captured,
        )
        self.records.append(record)

        if executor.needs_promotion(to_sq):
            self.pending_promotion = to_sq
            self.phase = GamePhase.AWAITING_PROMOTION
            return record

        self._resolve_turn()
        return record

    def promote(self, piece_type: PieceType) -> bool:
        """Finish a pending promotion; the opponent's turn is then resolved."""
        if self.phase != GamePhase.AWAITING_PROMOTION or self.pending_promotion is None:
            return False
        executor = MoveExecutor(self.board, self.options)
        if not executor.promote(self.pending_promotion, piece_type):
            return False
        self.pending_promotion = None
        if self.records:
            self.records[-1].notation = self.board.history[-1]
        self.phase = GamePhase.AWAITING_MOVE
        self._resolve_turn()
        return True

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self.result = (
            GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
        )
        self.end_reason = GameEndReason.RESIGNATION
        self.phase = GamePhase.GAME_OVER

    # ── Persistence ──────────────────────────────────────────────────────

    def save(self) -> str:
        return self.board.save()

    def load(self, text: str) -> bool:
        """Restore a saved board; the game continues from that position."""
        if not self.board.load(text):
            return False
        self.records.clear()
        self._reset_progress()
        self._resume()
        return True

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.board.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return self.board.move_count

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        return MoveGenerator(self.board).generate_legal_moves(self.side_to_move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _reset_progress(self) -> None:
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.status = GameStatus.IN_PROGRESS
        self.pending_promotion = None

    def _resume(self) -> None:
        """Pick up a restored position, including a promotion left unfinished."""
        pending = self._unpromoted_pawn()
        if pending is not None:
            self.pending_promotion = pending
            self.phase = GamePhase.AWAITING_PROMOTION
            return
        self._resolve_turn()

    def _unpromoted_pawn(self) -> Position | None:
        """A pawn of the side that just moved still standing on its last row."""
        executor = MoveExecutor(self.board, self.options)
        for sq, piece in self.board.pieces(self.side_to_move.opposite):
            if piece.piece_type == PieceType.PAWN and executor.needs_promotion(sq):
                return sq
        return None

    def _captured_type(self, from_sq: Position, to_sq: Position) -> PieceType | None:
        board = self.board
        target = board[to_sq]
        if target is not None:
            return target.piece_type
        piece = board[from_sq]
        if (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and to_sq == board.en_passant
            and to_sq.column != from_sq.column
        ):
            return PieceType.PAWN
        return None

    def _resolve_turn(self) -> None:
        """Evaluate the side to move after the opponent's move."""
        side = self.side_to_move
        self.status = Rules.status(self.board, side)
        if self.records:
            self.records[-1].status = self.status
        if self.status.is_terminal:
            self.result = Rules.result_for(self.status, side.opposite)
            self.end_reason = _END_REASONS[self.status]
            self.phase = GamePhase.GAME_OVER
