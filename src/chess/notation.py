"""Move notation records for the move list shown by the UI (formatting/numbering is the UI's business)."""

from src.chess.moves import AcceptedMove
from src.chess.pieces import PIECE_TO_FEN
from src.core.shared_types import CastleSide, PieceType

CASTLING_NOTATION: dict[CastleSide, str] = {
    CastleSide.KING_SIDE: "O-O",
    CastleSide.QUEEN_SIDE: "O-O-O",
}


def to_notation(accepted: AcceptedMove) -> str:
    """
    Short algebraic-style record of a move

    examples:
    * "e4": pawn push
    * "Nxe5": knight takes on e5
    * "exd6": pawn takes (en passant included)
    * "e8=Q": promotion (always to a queen)
    * "O-O" / "O-O-O": castling
    """
    move = accepted.move
    if move.castle_side is not None:
        return CASTLING_NOTATION[move.castle_side]

    piece = accepted.moving_piece
    is_pawn = piece.type == PieceType.PAWN
    is_capture = accepted.captured_piece is not None or move.en_passant

    if is_pawn:
        # pawn captures name the file they came from, like in standard notation
        prefix = move.from_square.to_algebraic()[0] if is_capture else ""
    else:
        prefix = PIECE_TO_FEN[piece.type].upper()

    capture = "x" if is_capture else ""
    promotion = "=Q" if accepted.promotes else ""
    return f"{prefix}{capture}{move.to_square.to_algebraic()}{promotion}"
