"""Unit tests for /src/chess/moves.py"""

import pytest

from src.chess.board import Board
from src.chess.fen import EMPTY_LAYOUT
from src.chess.moves import (
    AcceptedMove,
    Move,
    candidate_bishop_moves,
    candidate_king_moves,
    candidate_knight_moves,
    candidate_moves,
    candidate_pawn_moves,
    candidate_queen_moves,
    candidate_rook_moves,
    en_passant_moves,
    raycasting_move,
    single_step_move,
)
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.shared_types import Color, PieceType


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def destinations(moves: list[Move]) -> set[str]:
    return {move.to_square.to_algebraic() for move in moves}


# -- MOVE DESCRIPTOR ---
def test_move_to_uci() -> None:
    assert Move(sq("e2"), sq("e4")).to_uci() == "e2e4"


def test_skipped_square() -> None:
    assert Move(sq("e2"), sq("e4"), double_push=True).skipped_square == sq("e3")
    assert Move(sq("d7"), sq("d5"), double_push=True).skipped_square == sq("d6")


def test_en_passant_capture_square() -> None:
    """The pawn taken en passant is 'behind' the target square: same file as the target, same rank as the capturer"""
    move = Move(sq("e5"), sq("d6"), capture=True, en_passant=True)
    assert move.en_passant_capture_square == sq("d5")


# --- MOVEMENT RULES ---
def test_raycasting_move_empty_board(board_with_pieces) -> None:
    """On an empty board, movements should only be restricted by board dimensions"""
    board = board_with_pieces({"a5": "R"})
    horizontal = [(0, 1), (0, -1)]
    moves = raycasting_move(sq("a5"), board, horizontal)
    assert destinations(moves) == {"b5", "c5", "d5", "e5", "f5", "g5", "h5"}
    assert not any(move.capture for move in moves)


def test_raycasting_move_w_enemy_blocker(board_with_pieces) -> None:
    """When running into enemy piece, still include it (as a capture) and stop"""
    board = board_with_pieces({"d2": "R", "d5": "p"})
    vertical = [(1, 0), (-1, 0)]
    moves = raycasting_move(sq("d2"), board, vertical)
    assert {move.to_uci() for move in moves} == {"d2d1", "d2d3", "d2d4", "d2d5"}
    captures = [move for move in moves if move.capture]
    assert [move.to_square for move in captures] == [sq("d5")]


def test_raycasting_move_w_own_blocker(board_with_pieces) -> None:
    """Running into your own piece: stop before that square"""
    board = board_with_pieces({"d2": "R", "d5": "P"})
    vertical = [(1, 0), (-1, 0)]
    moves = raycasting_move(sq("d2"), board, vertical)
    assert {move.to_uci() for move in moves} == {"d2d1", "d2d3", "d2d4"}


def test_single_step_move_skips_allies(board_with_pieces) -> None:
    board = board_with_pieces({"d4": "K", "d5": "P", "e5": "p"})
    moves = single_step_move(sq("d4"), board, [(-1, 0), (-1, 1), (1, 0)])
    assert destinations(moves) == {"e5", "d3"}
    assert [move.capture for move in moves if move.to_square == sq("e5")] == [True]


@pytest.mark.parametrize(
    "fen_char, rule, square_name, expected_count",
    [
        ("N", candidate_knight_moves, "d4", 8),
        ("N", candidate_knight_moves, "a1", 2),
        ("N", candidate_knight_moves, "h5", 4),
        ("B", candidate_bishop_moves, "d4", 13),
        ("B", candidate_bishop_moves, "a1", 7),
        ("R", candidate_rook_moves, "d4", 14),
        ("R", candidate_rook_moves, "h8", 14),
        ("Q", candidate_queen_moves, "d4", 27),
        ("Q", candidate_queen_moves, "a1", 21),
        ("K", candidate_king_moves, "d4", 8),
        ("K", candidate_king_moves, "a1", 3),
        ("K", candidate_king_moves, "e1", 5),
    ],
)
def test_number_of_moves_on_empty_board(
    board_with_pieces, fen_char: str, rule, square_name: str, expected_count: int
) -> None:
    board = board_with_pieces({square_name: fen_char})
    moves = rule(sq(square_name), board, False)
    assert len(moves) == expected_count
    assert len(set(moves)) == expected_count


def test_knight_jumps_over_pieces(starting_board: Board) -> None:
    moves = candidate_knight_moves(sq("g1"), starting_board, False)
    assert destinations(moves) == {"f3", "h3"}


def test_sliding_pieces_blocked_in_starting_position(starting_board: Board) -> None:
    for square_name in ["a1", "c1", "d1", "f1", "h1"]:
        assert candidate_moves(starting_board, sq(square_name), False) == []


# --- PAWNS ---
@pytest.mark.parametrize(
    "fen_char, square_name, expected",
    [
        ("P", "e2", {"e3", "e4"}),
        ("p", "e7", {"e6", "e5"}),
        ("P", "e3", {"e4"}),
        ("p", "e6", {"e5"}),
    ],
)
def test_pawn_pushes(board_with_pieces, fen_char: str, square_name: str, expected: set[str]) -> None:
    """Two squares only from the starting rank"""
    board = board_with_pieces({square_name: fen_char})
    moves = candidate_pawn_moves(sq(square_name), board, False)
    assert destinations(moves) == expected


def test_double_push_is_flagged(board_with_pieces) -> None:
    board = board_with_pieces({"e2": "P"})
    moves = candidate_pawn_moves(sq("e2"), board, False)
    flagged = [move for move in moves if move.double_push]
    assert [move.to_square for move in flagged] == [sq("e4")]


def test_pawn_blocked_in_front(board_with_pieces) -> None:
    """A piece directly in front also blocks the double push"""
    board = board_with_pieces({"e2": "P", "e3": "n"})
    assert candidate_pawn_moves(sq("e2"), board, False) == []


def test_pawn_double_push_blocked(board_with_pieces) -> None:
    board = board_with_pieces({"e2": "P", "e4": "n"})
    moves = candidate_pawn_moves(sq("e2"), board, False)
    assert destinations(moves) == {"e3"}


def test_pawn_captures(board_with_pieces) -> None:
    """Diagonal captures only onto enemy pieces"""
    board = board_with_pieces({"e4": "P", "d5": "p", "f5": "N", "e5": "p"})
    moves = candidate_pawn_moves(sq("e4"), board, False)
    assert destinations(moves) == {"d5"}
    assert all(move.capture for move in moves)


def test_black_pawn_captures(board_with_pieces) -> None:
    board = board_with_pieces({"e5": "p", "d4": "P", "f4": "P"})
    moves = candidate_pawn_moves(sq("e5"), board, False)
    assert destinations(moves) == {"e4", "d4", "f4"}


def test_pawn_attack_only(board_with_pieces) -> None:
    """No pushes. Both diagonals count as attacked, occupied or not"""
    board = board_with_pieces({"e2": "P", "f3": "p"})
    moves = candidate_pawn_moves(sq("e2"), board, True)
    assert destinations(moves) == {"d3", "f3"}
    assert not any(move.double_push for move in moves)


def test_pawn_attack_only_edge_of_board(board_with_pieces) -> None:
    board = board_with_pieces({"a2": "P", "h7": "p"})
    assert destinations(candidate_pawn_moves(sq("a2"), board, True)) == {"b3"}
    assert destinations(candidate_pawn_moves(sq("h7"), board, True)) == {"g6"}


# --- EN PASSANT ---
def test_en_passant_move(board_with_pieces) -> None:
    """Black just played d7-d5 next to the white pawn on e5"""
    board = board_with_pieces({"e5": "P", "d5": "p"})
    board.en_passant_target = sq("d6")
    moves = en_passant_moves(sq("e5"), board)
    assert moves == [Move(sq("e5"), sq("d6"), capture=True, en_passant=True)]
    assert Move(sq("e5"), sq("d6"), capture=True, en_passant=True) in candidate_pawn_moves(
        sq("e5"), board, False
    )


def test_black_en_passant_move(board_with_pieces) -> None:
    """White just played c2-c4 next to the black pawn on b4"""
    board = board_with_pieces({"b4": "p", "c4": "P"})
    board.en_passant_target = sq("c3")
    moves = en_passant_moves(sq("b4"), board)
    assert moves == [Move(sq("b4"), sq("c3"), capture=True, en_passant=True)]


@pytest.mark.parametrize(
    "pawn_square, target",
    [
        ("e4", "d5"),  # wrong rank for the capturing pawn
        ("e5", "b6"),  # target not on an adjacent file
        ("e5", "e6"),  # target straight ahead
    ],
)
def test_no_en_passant(board_with_pieces, pawn_square: str, target: str) -> None:
    board = board_with_pieces({pawn_square: "P"})
    board.en_passant_target = sq(target)
    assert en_passant_moves(sq(pawn_square), board) == []


def test_no_en_passant_without_target(board_with_pieces) -> None:
    board = board_with_pieces({"e5": "P", "d5": "p"})
    assert en_passant_moves(sq("e5"), board) == []


def test_attack_only_skips_en_passant(board_with_pieces) -> None:
    board = board_with_pieces({"e5": "P", "d5": "p"})
    board.en_passant_target = sq("d6")
    moves = candidate_pawn_moves(sq("e5"), board, True)
    assert not any(move.en_passant for move in moves)


# --- DISPATCH ---
def test_candidate_moves_on_empty_square() -> None:
    board = Board.from_fen(EMPTY_LAYOUT)
    assert candidate_moves(board, sq("d4"), False) == []


def test_starting_position_candidate_moves(starting_board: Board) -> None:
    """20 moves for white: 16 pawn moves + 4 knight moves"""
    moves = [
        move
        for square in starting_board.locate_color(Color.WHITE)
        for move in candidate_moves(starting_board, square, False)
    ]
    assert len(moves) == 20


# --- ACCEPTED MOVE ---
def test_accepted_move_snapshot(board_with_pieces) -> None:
    board = board_with_pieces({"d4": "Q", "d7": "r"})
    move = Move(sq("d4"), sq("d7"), capture=True)
    accepted = AcceptedMove.from_move_and_board(move, board)
    assert accepted.moving_piece == Piece(PieceType.QUEEN, Color.WHITE)
    assert accepted.captured_piece == Piece(PieceType.ROOK, Color.BLACK)
    assert not accepted.promotes

    # the snapshot does not follow later changes of the board
    board.relocate(sq("d4"), sq("d7"))
    assert not accepted.moving_piece.has_moved


def test_accepted_move_en_passant(board_with_pieces) -> None:
    board = board_with_pieces({"e5": "P", "d5": "p"})
    move = Move(sq("e5"), sq("d6"), capture=True, en_passant=True)
    accepted = AcceptedMove.from_move_and_board(move, board)
    assert accepted.captured_piece == Piece(PieceType.PAWN, Color.BLACK)


@pytest.mark.parametrize(
    "fen_char, from_name, to_name, promotes",
    [
        ("P", "a7", "a8", True),
        ("p", "h2", "h1", True),
        ("P", "a6", "a7", False),
        ("R", "a7", "a8", False),
    ],
)
def test_accepted_move_promotion(
    board_with_pieces, fen_char: str, from_name: str, to_name: str, promotes: bool
) -> None:
    board = board_with_pieces({from_name: fen_char})
    accepted = AcceptedMove.from_move_and_board(Move(sq(from_name), sq(to_name)), board)
    assert accepted.promotes == promotes
