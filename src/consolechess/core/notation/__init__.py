"""Notation package: save files, FEN and coordinate move text."""

from consolechess.core.notation.coordinate import coordinate_move, parse_coordinate_move
from consolechess.core.notation.fen import STARTING_FEN, board_from_fen, board_to_fen
from consolechess.core.notation.savefile import (
    DecodedPiece,
    DecodeStatus,
    decode_piece_token,
    dump_board,
    parse_board,
)

__all__ = [
    "STARTING_FEN",
    "DecodeStatus",
    "DecodedPiece",
    "board_from_fen",
    "board_to_fen",
    "coordinate_move",
    "decode_piece_token",
    "dump_board",
    "parse_board",
    "parse_coordinate_move",
]
