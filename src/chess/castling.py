"""Castling rules: which squares king and rook travel between, and when castling is allowed."""

from dataclasses import dataclass
from typing import Self

from src.chess.board import Board
from src.chess.check import in_check, square_attacked
from src.chess.moves import Move
from src.chess.square import Square
from src.core.shared_types import CastleSide, Color, PieceType


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    def squares_between(self) -> list[Square]:
        """Squares strictly between king and rook. These must all be empty."""
        step = 1 if self.rook_from.col > self.king_from.col else -1
        return [
            Square(self.king_from.row, col)
            for col in range(self.king_from.col + step, self.rook_from.col, step)
        ]

    def king_path(self) -> list[Square]:
        """Start, transit and end square of the king. None of these may be attacked."""
        step = 1 if self.king_to.col > self.king_from.col else -1
        return [
            Square(self.king_from.row, col)
            for col in range(self.king_from.col, self.king_to.col + step, step)
        ]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastleSide], CastlingSquares] = {
    (Color.WHITE, CastleSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastleSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastleSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastleSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


def can_castle(board: Board, color: Color, side: CastleSide) -> bool:
    """
    **you are allowed to castle if**

    * The king and the rook are still on their starting squares and neither has moved.
    * Every square in between them is empty.
    * No square the king passes through (start and end included) is under attack.
    """
    rule = CASTLING_RULES[(color, side)]
    king = board.piece(rule.king_from)
    rook = board.piece(rule.rook_from)
    if king is None or king.type != PieceType.KING or king.color != color:
        return False
    if rook is None or rook.type != PieceType.ROOK or rook.color != color:
        return False
    if king.has_moved or rook.has_moved:
        return False

    if not all(board.is_empty(square) for square in rule.squares_between()):
        return False

    opponent = color.opponent
    return not any(
        square_attacked(board, square, opponent) for square in rule.king_path()
    )


def castling_moves(board: Board, square: Square) -> list[Move]:
    """Castling moves available to the king standing on `square` (you cannot castle out of check)."""
    king = board.piece(square)
    if king is None or king.type != PieceType.KING or king.has_moved:
        return []
    if in_check(board, king.color):
        return []

    moves: list[Move] = []
    for side in CastleSide:
        rule = CASTLING_RULES[(king.color, side)]
        if rule.king_from == square and can_castle(board, king.color, side):
            moves.append(Move(square, rule.king_to, castle_side=side))
    return moves
