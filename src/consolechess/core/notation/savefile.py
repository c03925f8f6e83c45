"""Save-file text format: parsing and serialization of a full :class:`Board`.

Layout::

    [board]
    a8:BLACK_ROOK b8:BLACK_KNIGHT ...
    [castling]
    false false false false false false
    [en_passant]
    none
    [history]
    e2e4
    [move_count]
    1

Older files wrote colors title-cased (``White``) and piece types as single
letters (``K``); both are still accepted on load.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from consolechess.core.board import Board
from consolechess.core.enums import CastlingFlags, Color, PieceType
from consolechess.core.piece import Piece
from consolechess.core.position import BOARD_SIZE, Position

SECTION_BOARD = "board"
SECTION_CASTLING = "castling"
SECTION_EN_PASSANT = "en_passant"
SECTION_HISTORY = "history"
SECTION_MOVE_COUNT = "move_count"

_SECTIONS = (
    SECTION_BOARD,
    SECTION_CASTLING,
    SECTION_EN_PASSANT,
    SECTION_HISTORY,
    SECTION_MOVE_COUNT,
)
_REQUIRED = frozenset({SECTION_BOARD, SECTION_CASTLING, SECTION_MOVE_COUNT})

_LEGACY_COLORS: dict[str, Color] = {"White": Color.WHITE, "Black": Color.BLACK}
_BOOLEANS: dict[str, bool] = {"true": True, "false": False}


class DecodeStatus(IntEnum):
    """Outcome of decoding one piece token."""

    CURRENT = 0
    LEGACY = 1
    INVALID = 2


@dataclass(frozen=True, slots=True)
class DecodedPiece:
    """Tagged result of :func:`decode_piece_token`."""

    status: DecodeStatus
    piece: Piece | None = None

    @property
    def ok(self) -> bool:
        return self.status != DecodeStatus.INVALID


_INVALID = DecodedPiece(DecodeStatus.INVALID)


def decode_piece_token(token: str) -> DecodedPiece:
    """Decode ``<COLOR>_<TYPE>`` in either the current or the legacy spelling."""
    color_part, sep, type_part = token.partition("_")
    if not sep:
        return _INVALID

    legacy = False
    if color_part in Color.__members__:
        color = Color[color_part]
    elif color_part in _LEGACY_COLORS:
        color = _LEGACY_COLORS[color_part]
        legacy = True
    else:
        return _INVALID

    if type_part in PieceType.__members__:
        piece_type = PieceType[type_part]
    elif len(type_part) == 1 and type_part.isupper():
        try:
            piece_type = PieceType.from_letter(type_part)
        except ValueError:
            return _INVALID
        legacy = True
    else:
        return _INVALID

    status = DecodeStatus.LEGACY if legacy else DecodeStatus.CURRENT
    return DecodedPiece(status, Piece(color, piece_type))


# ── Serialisation ────────────────────────────────────────────────────────────


def dump_board(board: Board) -> str:
    """Serialise *board* to save-file text."""
    lines = [f"[{SECTION_BOARD}]"]
    for row in range(BOARD_SIZE):
        tokens = [
            f"{Position(row, column)}:{piece.token}"
            for column in range(BOARD_SIZE)
            if (piece := board[Position(row, column)]) is not None
        ]
        if tokens:
            lines.append(" ".join(tokens))

    lines.append(f"[{SECTION_CASTLING}]")
    lines.append(
        " ".join(
            "true" if board.has_moved(flag) else "false"
            for flag in CastlingFlags.ordered()
        )
    )

    lines.append(f"[{SECTION_EN_PASSANT}]")
    lines.append(str(board.en_passant) if board.en_passant is not None else "none")

    lines.append(f"[{SECTION_HISTORY}]")
    lines.extend(board.history)

    lines.append(f"[{SECTION_MOVE_COUNT}]")
    lines.append(str(board.move_count))
    return "\n".join(lines) + "\n"


# ── Parsing ──────────────────────────────────────────────────────────────────


def parse_board(text: str) -> Board:
    """Build a new :class:`Board` from save-file text.

    Raises ``ValueError`` on any malformed input; nothing is shared with an
    existing board, so a failed parse cannot leave partial state behind.
    """
    sections = _split_sections(text)
    missing = _REQUIRED - sections.keys()
    if missing:
        raise ValueError(f"Missing section(s): {', '.join(sorted(missing))}")

    board = Board()
    _parse_pieces(board, sections[SECTION_BOARD])
    board.castling = _parse_castling(sections[SECTION_CASTLING])
    board.en_passant = _parse_en_passant(sections.get(SECTION_EN_PASSANT, []))
    board.history = sections.get(SECTION_HISTORY, [])
    board.move_count = _parse_move_count(sections[SECTION_MOVE_COUNT])

    for color in Color:
        kings = board.count(color, PieceType.KING)
        if kings != 1:
            raise ValueError(f"Expected one {color} king, found {kings}")
    return board


def _split_sections(text: str) -> dict[str, list[str]]:
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("[") and line.endswith("]"):
            name = line[1:-1].strip().lower()
            if name not in _SECTIONS:
                raise ValueError(f"Unknown section: {line!r}")
            if name in sections:
                raise ValueError(f"Duplicate section: {line!r}")
            current = sections[name] = []
            continue
        if current is None:
            raise ValueError(f"Data before first section: {line!r}")
        current.append(line)
    return sections


def _parse_pieces(board: Board, lines: list[str]) -> None:
    for line in lines:
        for token in line.split():
            square_text, sep, piece_text = token.partition(":")
            if not sep:
                raise ValueError(f"Invalid board token: {token!r}")
            sq = Position.from_algebraic(square_text)
            decoded = decode_piece_token(piece_text)
            if not decoded.ok:
                raise ValueError(f"Invalid piece token: {piece_text!r}")
            if board[sq] is not None:
                raise ValueError(f"Square listed twice: {square_text}")
            board[sq] = decoded.piece


def _parse_castling(lines: list[str]) -> CastlingFlags:
    values = " ".join(lines).split()
    flags = CastlingFlags.ordered()
    if len(values) != len(flags):
        raise ValueError(f"Expected {len(flags)} castling flags, got {len(values)}")
    castling = CastlingFlags.NONE
    for flag, value in zip(flags, values):
        try:
            moved = _BOOLEANS[value.lower()]
        except KeyError:
            raise ValueError(f"Invalid castling flag: {value!r}") from None
        if moved:
            castling |= flag
    return castling


def _parse_en_passant(lines: list[str]) -> Position | None:
    if not lines:
        return None
    if len(lines) != 1:
        raise ValueError("En-passant section must hold a single value")
    value = lines[0]
    if value.lower() == "none":
        return None
    sq = Position.from_algebraic(value)
    if sq.row not in (2, 5):
        raise ValueError(f"Invalid en-passant square: {value!r}")
    return sq


def _parse_move_count(lines: list[str]) -> int:
    if len(lines) != 1 or not lines[0].isdigit():
        raise ValueError(f"Invalid move counter: {lines!r}")
    return int(lines[0])
