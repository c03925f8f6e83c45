"""FEN parsing and serialization."""

from __future__ import annotations

from consolechess.core.board import Board
from consolechess.core.enums import CastlingFlags, CastlingSide, Color
from consolechess.core.piece import Piece
from consolechess.core.position import BOARD_SIZE, Position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, tuple[Color, CastlingSide]] = {
    "K": (Color.WHITE, CastlingSide.KINGSIDE),
    "Q": (Color.WHITE, CastlingSide.QUEENSIDE),
    "k": (Color.BLACK, CastlingSide.KINGSIDE),
    "q": (Color.BLACK, CastlingSide.QUEENSIDE),
}


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`.

    A castling right missing from the FEN marks the matching rook as moved.
    The side-to-move and full-move fields become the board's move counter.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement (first rank listed is row 0)
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        column = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                column += step
            else:
                if column >= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Position(row, column)] = Piece.from_char(ch)
                column += 1
            if column > BOARD_SIZE:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if column != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    available: set[tuple[Color, CastlingSide]] = set()
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or right in available:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            available.add(right)
    for color, castling_side in _CASTLING_CHARS.values():
        if (color, castling_side) not in available:
            board.mark_moved(CastlingFlags.rook(color, castling_side))

    # 4. En passant
    if ep_part != "-":
        ep = Position.from_algebraic(ep_part)
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        board.en_passant = ep

    # 5-6. Clocks (halfmove is validated but not tracked)
    if len(parts) > 4 and int(parts[4]) < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    fullmove = int(parts[5]) if len(parts) > 5 else 1
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    board.move_count = 2 * (fullmove - 1) + (1 if side == Color.BLACK else 0)
    return board


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN (halfmove clock is always 0)."""
    # 1. Board
    rows: list[str] = []
    for row in range(BOARD_SIZE):
        empty = 0
        text = ""
        for column in range(BOARD_SIZE):
            piece = board[Position(row, column)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = ""
    for ch, (color, castling_side) in _CASTLING_CHARS.items():
        if board.may_castle(color, castling_side):
            castling_str += ch
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = str(board.en_passant) if board.en_passant is not None else "-"

    fullmove = board.move_count // 2 + 1
    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {fullmove}"
