"""
The legality filter: pseudo-legal moves minus those that leave your own king in check.

Plan per candidate move:
1. Simulate the move on a copy of the board
2. Determine if the mover's king is in check on the new board
3. Throw the copy away
"""

from src.chess.applier import simulate
from src.chess.board import Board
from src.chess.check import in_check
from src.chess.generator import pseudo_moves
from src.chess.moves import Move
from src.chess.square import Square
from src.core.shared_types import Color


def is_putting_yourself_in_check(board: Board, move: Move, color: Color) -> bool:
    """Return True if the move puts (or leaves) the king of `color` in check"""
    return in_check(simulate(board, move), color)


def legal_moves(board: Board, square: Square) -> list[Move]:
    piece = board.piece(square)
    if piece is None:
        return []
    return [
        move
        for move in pseudo_moves(board, square, attack_only=False)
        if not is_putting_yourself_in_check(board, move, piece.color)
    ]


def all_legal_moves(board: Board, color: Color) -> list[Move]:
    moves: list[Move] = []
    for square in board.locate_color(color):
        moves.extend(legal_moves(board, square))
    return moves


def any_legal_move(board: Board, color: Color) -> bool:
    """Stops at the first piece that has somewhere to go"""
    return any(legal_moves(board, square) for square in board.locate_color(color))
