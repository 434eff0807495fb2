"""
The move generator: pseudo-legal moves for the piece on a square.

Combines the per-piece movement rules with castling. Attack-only generation returns before
castling is even considered: castling eligibility asks the check oracle, and the check oracle
relies on attack-only generation, so the two must never meet.
"""

from src.chess.board import Board
from src.chess.castling import castling_moves
from src.chess.moves import Move, candidate_moves
from src.chess.square import Square
from src.core.shared_types import PieceType


def pseudo_moves(board: Board, square: Square, attack_only: bool = False) -> list[Move]:
    moves = candidate_moves(board, square, attack_only)
    if attack_only:
        return moves

    piece = board.piece(square)
    if piece is not None and piece.type == PieceType.KING:
        moves.extend(castling_moves(board, square))
    return moves
