"""Tests for Board."""

import pytest

from consolechess.core.board import Board
from consolechess.core.enums import CastlingFlags, CastlingSide, Color, PieceType
from consolechess.core.piece import Piece
from consolechess.core.position import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, B8, C8, D8, E8, F8, G8, H8,
    D4, D5, E2, E4, E5,
    Position,
)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawn_rows(self) -> None:
        board = Board.initial()
        assert board.count(Color.WHITE, PieceType.PAWN) == 8
        assert board.count(Color.BLACK, PieceType.PAWN) == 8
        assert all(sq.row == 6 for sq, p in board.pieces(Color.WHITE) if p.piece_type == PieceType.PAWN)
        assert all(sq.row == 1 for sq, p in board.pieces(Color.BLACK) if p.piece_type == PieceType.PAWN)

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for row in range(2, 6):
            for column in range(8):
                assert board[Position(row, column)] is None

    def test_fresh_state(self) -> None:
        board = Board.initial()
        assert board.castling == CastlingFlags.NONE
        assert board.en_passant is None
        assert board.history == []
        assert board.move_count == 0
        assert board.side_to_move == Color.WHITE


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)

    def test_set_rejects_non_piece(self) -> None:
        board = Board()
        with pytest.raises(TypeError):
            board[E4] = "P"  # type: ignore[assignment]

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        copy.history.append("e1e2")
        assert board != copy
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board.history == []

    def test_pieces_row_major(self) -> None:
        board = Board.initial()
        white = board.pieces(Color.WHITE)
        assert len(white) == 16
        assert white[0][0] == Position(6, 0)
        assert white[-1][0] == H1
        assert len(board.pieces()) == 32

    def test_clear(self) -> None:
        board = Board.initial()
        board.mark_moved(CastlingFlags.WHITE_KING_MOVED)
        board.move_count = 5
        board.clear()
        assert board.pieces() == []
        assert board.castling == CastlingFlags.NONE
        assert board.move_count == 0

    def test_side_to_move_follows_counter(self) -> None:
        board = Board.initial()
        board.move_count = 3
        assert board.side_to_move == Color.BLACK

    def test_repr_not_empty(self) -> None:
        text = repr(Board.initial())
        assert "K" in text
        assert "a b c d e f g h" in text
        assert text.splitlines()[0].startswith("8 r n b q k")


class TestCastlingFlags:
    def test_may_castle_initially(self) -> None:
        board = Board.initial()
        for color in Color:
            for side in CastlingSide:
                assert board.may_castle(color, side)

    def test_rook_flag_blocks_one_side(self) -> None:
        board = Board.initial()
        board.mark_moved(CastlingFlags.rook(Color.WHITE, CastlingSide.KINGSIDE))
        assert not board.may_castle(Color.WHITE, CastlingSide.KINGSIDE)
        assert board.may_castle(Color.WHITE, CastlingSide.QUEENSIDE)
        assert board.may_castle(Color.BLACK, CastlingSide.KINGSIDE)

    def test_king_flag_blocks_both_sides(self) -> None:
        board = Board.initial()
        board.mark_moved(CastlingFlags.king(Color.BLACK))
        assert not board.may_castle(Color.BLACK, CastlingSide.KINGSIDE)
        assert not board.may_castle(Color.BLACK, CastlingSide.QUEENSIDE)

    def test_ordered_flags(self) -> None:
        assert CastlingFlags.ordered() == (
            CastlingFlags.WHITE_KING_MOVED,
            CastlingFlags.BLACK_KING_MOVED,
            CastlingFlags.WHITE_KINGSIDE_ROOK_MOVED,
            CastlingFlags.WHITE_QUEENSIDE_ROOK_MOVED,
            CastlingFlags.BLACK_KINGSIDE_ROOK_MOVED,
            CastlingFlags.BLACK_QUEENSIDE_ROOK_MOVED,
        )


class TestSimulate:
    def test_restores_after_block(self) -> None:
        board = Board.initial()
        before = board.copy()
        with board.simulate(E2, E4):
            assert board[E4] == Piece(Color.WHITE, PieceType.PAWN)
            assert board[E2] is None
        assert board == before

    def test_restores_captured_piece(self) -> None:
        board = Board()
        board[E4] = Piece(Color.WHITE, PieceType.PAWN)
        board[D5] = Piece(Color.BLACK, PieceType.KNIGHT)
        with board.simulate(E4, D5):
            assert board[D5] == Piece(Color.WHITE, PieceType.PAWN)
        assert board[D5] == Piece(Color.BLACK, PieceType.KNIGHT)
        assert board[E4] == Piece(Color.WHITE, PieceType.PAWN)

    def test_restores_on_exception(self) -> None:
        board = Board.initial()
        before = board.copy()
        with pytest.raises(RuntimeError):
            with board.simulate(E2, E4):
                raise RuntimeError("boom")
        assert board == before

    def test_en_passant_victim_lifted_and_restored(self) -> None:
        board = Board()
        board[E5] = Piece(Color.WHITE, PieceType.PAWN)
        board[D5] = Piece(Color.BLACK, PieceType.PAWN)
        board.en_passant = Position(2, 3)  # d6
        with board.simulate(E5, Position(2, 3)):
            assert board[D5] is None
        assert board[D5] == Piece(Color.BLACK, PieceType.PAWN)
        assert board[E5] == Piece(Color.WHITE, PieceType.PAWN)
        assert board.is_empty(Position(2, 3))

    def test_simulate_does_not_touch_state(self) -> None:
        board = Board.initial()
        with board.simulate(E2, E4):
            pass
        assert board.move_count == 0
        assert board.history == []
        assert board.en_passant is None
        assert board[D4] is None
