"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from consolechess.core import Board, Color, MoveGenerator, MoveValidator, parse_square

    board = Board.initial()
    ok = MoveValidator(board).is_valid_move(parse_square("e2"), parse_square("e4"), Color.WHITE)
    for move in MoveGenerator(board).generate_legal_moves(Color.WHITE):
        print(move.describe())
"""

from consolechess.core.attacks import AttackDetector
from consolechess.core.board import Board
from consolechess.core.enums import (
    CastlingFlags,
    CastlingSide,
    Color,
    GameResult,
    GameStatus,
    MoveFlag,
    PieceType,
)
from consolechess.core.executor import PROMOTION_TYPES, MoveExecutor
from consolechess.core.move import Move
from consolechess.core.move_generator import MoveGenerator
from consolechess.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    parse_coordinate_move,
)
from consolechess.core.piece import Piece
from consolechess.core.position import ALL_POSITIONS, Position, parse_square, square_name
from consolechess.core.rules import Rules
from consolechess.core.validator import MoveValidator

__all__ = [
    # Enums / flags
    "CastlingFlags",
    "CastlingSide",
    "Color",
    "GameResult",
    "GameStatus",
    "MoveFlag",
    "PieceType",
    # Coordinates
    "ALL_POSITIONS",
    "Position",
    "parse_square",
    "square_name",
    # Domain objects
    "AttackDetector",
    "Board",
    "Move",
    "MoveExecutor",
    "MoveGenerator",
    "MoveValidator",
    "PROMOTION_TYPES",
    "Piece",
    "Rules",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "parse_coordinate_move",
]
