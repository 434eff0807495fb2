"""
Check oracle: is a square attacked, is a king in check?

Built on the attack-only movement rules of moves.py, which never generate castling moves.
"""

from src.chess.board import Board
from src.chess.moves import candidate_moves
from src.chess.square import Square
from src.core.shared_types import Color, PieceType


def locate_king(board: Board, color: Color) -> Square:
    """Exactly one king per color while a game is active. Anything else is a bug in the codec or applier."""
    kings = board.locate_pieces(PieceType.KING, color)
    assert len(kings) == 1, f"Expected exactly one {color} king, found {len(kings)}"
    return kings[0]


def square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """True if any piece of `by_color` threatens `square`"""
    for attacker_square in board.locate_color(by_color):
        attacks = candidate_moves(board, attacker_square, attack_only=True)
        if any(move.to_square == square for move in attacks):
            return True
    return False


def in_check(board: Board, color: Color) -> bool:
    king_square = locate_king(board, color)
    return square_attacked(board, king_square, color.opponent)
