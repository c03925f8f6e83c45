"""Tests for GameState."""

from consolechess.config import EngineOptions
from consolechess.core.enums import Color, GameResult, GameStatus, PieceType
from consolechess.core.piece import Piece
from consolechess.core.position import D5, E2, E4, E5, parse_square
from consolechess.game.interfaces import GameEndReason, GamePhase
from consolechess.game.state import GameState

PROMOTION_FEN = "k7/4P3/8/8/8/8/8/4K3 w - - 0 1"


def _started(fen: str | None = None) -> GameState:
    gs = GameState()
    gs.setup(fen)
    return gs


def _apply(gs: GameState, *moves: str) -> None:
    for text in moves:
        assert gs.apply_move(parse_square(text[:2]), parse_square(text[2:])) is not None, text


class TestGameStateSetup:
    def test_board_is_available_before_setup(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.NOT_STARTED
        assert gs.side_to_move == Color.WHITE

    def test_setup_default(self) -> None:
        gs = _started()
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0

    def test_setup_custom_fen(self) -> None:
        gs = _started("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1")
        assert gs.side_to_move == Color.BLACK

    def test_setup_resets(self) -> None:
        gs = _started()
        _apply(gs, "e2e4")
        assert gs.ply_count == 1
        gs.setup()
        assert gs.ply_count == 0
        assert gs.records == []
        assert gs.side_to_move == Color.WHITE

    def test_default_options(self) -> None:
        assert GameState().options == EngineOptions()


class TestApplyMove:
    def test_not_started_rejects(self) -> None:
        gs = GameState()
        assert gs.apply_move(E2, E4) is None
        assert gs.ply_count == 0

    def test_record(self) -> None:
        gs = _started()
        record = gs.apply_move(E2, E4)
        assert record is not None
        assert record.color == Color.WHITE
        assert record.notation == "e2e4"
        assert record.captured is None
        assert record.status == GameStatus.IN_PROGRESS
        assert gs.side_to_move == Color.BLACK

    def test_illegal_rejected(self) -> None:
        gs = _started()
        assert gs.apply_move(E2, E5) is None
        assert gs.side_to_move == Color.WHITE
        assert gs.records == []

    def test_wrong_side_rejected(self) -> None:
        gs = _started()
        assert gs.apply_move(parse_square("e7"), parse_square("e5")) is None

    def test_capture_recorded(self) -> None:
        gs = _started()
        _apply(gs, "e2e4", "d7d5")
        record = gs.apply_move(E4, D5)
        assert record is not None
        assert record.captured == PieceType.PAWN

    def test_en_passant_recorded(self) -> None:
        gs = _started()
        _apply(gs, "e2e4", "a7a6", "e4e5", "d7d5")
        record = gs.apply_move(E5, parse_square("d6"))
        assert record is not None
        assert record.captured == PieceType.PAWN
        assert record.notation == "e5d6 e.p."

    def test_check_status(self) -> None:
        gs = _started("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        _apply(gs, "a1a8")
        assert gs.status == GameStatus.CHECK
        assert gs.records[-1].status == GameStatus.CHECK
        assert gs.phase == GamePhase.AWAITING_MOVE

    def test_legal_moves(self) -> None:
        gs = _started()
        assert len(gs.legal_moves()) == 20


class TestGameOver:
    def test_fools_mate(self) -> None:
        gs = _started()
        _apply(gs, "f2f3", "e7e5", "g2g4", "d8h4")
        assert gs.is_game_over
        assert gs.status == GameStatus.CHECKMATE
        assert gs.result == GameResult.BLACK_WINS
        assert gs.end_reason == GameEndReason.CHECKMATE
        assert gs.apply_move(E2, E4) is None

    def test_stalemate(self) -> None:
        gs = _started("7k/8/5K2/6Q1/8/8/8/8 w - - 0 1")
        _apply(gs, "g5g6")
        assert gs.is_game_over
        assert gs.result == GameResult.DRAW
        assert gs.end_reason == GameEndReason.STALEMATE

    def test_resign(self) -> None:
        gs = _started()
        gs.resign(Color.WHITE)
        assert gs.is_game_over
        assert gs.result == GameResult.BLACK_WINS
        assert gs.end_reason == GameEndReason.RESIGNATION


class TestPromotion:
    def test_awaiting_promotion(self) -> None:
        gs = _started(PROMOTION_FEN)
        _apply(gs, "e7e8")
        assert gs.phase == GamePhase.AWAITING_PROMOTION
        assert gs.pending_promotion == parse_square("e8")
        assert gs.apply_move(parse_square("a8"), parse_square("a7")) is None

    def test_promote_to_queen(self) -> None:
        gs = _started(PROMOTION_FEN)
        _apply(gs, "e7e8")
        assert gs.promote(PieceType.QUEEN)
        assert gs.board[parse_square("e8")] == Piece(Color.WHITE, PieceType.QUEEN)
        assert gs.records[-1].notation == "e7e8=Q"
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.status == GameStatus.CHECK
        assert gs.side_to_move == Color.BLACK

    def test_invalid_choice_keeps_pending(self) -> None:
        gs = _started(PROMOTION_FEN)
        _apply(gs, "e7e8")
        assert not gs.promote(PieceType.KING)
        assert gs.phase == GamePhase.AWAITING_PROMOTION

    def test_promote_without_pending(self) -> None:
        gs = _started()
        assert not gs.promote(PieceType.QUEEN)


class TestPersistence:
    def test_save_load_round_trip(self) -> None:
        gs = _started()
        _apply(gs, "e2e4", "e7e5")
        text = gs.save()
        other = _started()
        assert other.load(text)
        assert other.board == gs.board
        assert other.side_to_move == Color.WHITE
        assert other.phase == GamePhase.AWAITING_MOVE

    def test_load_failure_keeps_game(self) -> None:
        gs = _started()
        _apply(gs, "e2e4")
        before = gs.board.copy()
        assert not gs.load("garbage")
        assert gs.board == before
        assert len(gs.records) == 1

    def test_load_finished_position(self) -> None:
        gs = _started()
        _apply(gs, "f2f3", "e7e5", "g2g4", "d8h4")
        other = _started()
        assert other.load(gs.save())
        assert other.is_game_over
        assert other.result == GameResult.BLACK_WINS

    def test_load_mid_promotion(self) -> None:
        gs = _started("7k/P7/8/8/8/8/8/K7 w - - 0 1")
        _apply(gs, "a7a8")
        other = _started()
        assert other.load(gs.save())
        assert other.phase == GamePhase.AWAITING_PROMOTION
        assert other.pending_promotion == parse_square("a8")
        assert other.promote(PieceType.QUEEN)
        assert other.board[parse_square("a8")] == Piece(Color.WHITE, PieceType.QUEEN)
        assert other.status == GameStatus.CHECK
        assert other.phase == GamePhase.AWAITING_MOVE
