"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class CastleSide(StrEnum):
    KING_SIDE = "king side"
    QUEEN_SIDE = "queen side"


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


class Phase(StrEnum):
    """Where the Game is in its selection cycle (driven by the UI layer)."""

    AWAITING_SELECTION = "awaiting selection"
    PIECE_SELECTED = "piece selected"
    GAME_OVER = "game over"
