"""
The move applier: updates a board to reflect a chosen move.

`apply_move` mutates the board it is given. `simulate` works on a fresh copy and leaves the
original untouched, which is what the legality filter relies on.
"""

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES
from src.chess.moves import AcceptedMove, Move
from src.core.shared_types import PieceType


def apply_move(board: Board, move: Move) -> AcceptedMove:
    """
    Call for the proper updates of the Board's position
    ---

    1. If en passant: remove the pawn standing next to the capturing pawn
    2. Relocate the piece (marks it as moved)
    3. If castling: relocate the rook as well (also marked as moved)
    4. Pawn reaching the farthest rank: becomes a queen in place (stays marked as moved)
    5. The en passant target only survives a double push

    Returns a snapshot of what moved and what got captured, for the bookkeeping done by the Game.
    """
    accepted = AcceptedMove.from_move_and_board(move, board)
    color = accepted.moving_piece.color

    if move.en_passant:
        board.remove_piece(move.en_passant_capture_square)

    board.relocate(move.from_square, move.to_square)

    if move.castle_side is not None:
        rule = CASTLING_RULES[(color, move.castle_side)]
        board.relocate(rule.rook_from, rule.rook_to)

    if accepted.promotes:
        promoted_pawn = board.piece(move.to_square)
        assert promoted_pawn is not None
        promoted_pawn.promote_to(PieceType.QUEEN)

    board.en_passant_target = move.skipped_square if move.double_push else None
    return accepted


def simulate(board: Board, move: Move) -> Board:
    """Return the board as it would look after the move. The board passed in is not modified."""
    new_board = board.copy()
    apply_move(new_board, move)
    return new_board
