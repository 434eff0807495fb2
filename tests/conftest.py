"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.fen import EMPTY_LAYOUT, STARTING_LAYOUT
from src.chess.game import Game
from src.chess.pieces import Piece
from src.chess.square import Square

BoardFactory = Callable[[dict[str, str]], Board]


@pytest.fixture
def board_with_pieces() -> BoardFactory:
    """Call the inner function with a mapping of square name -> FEN character, ex. {"e1": "K", "e8": "k"}"""

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.from_fen(EMPTY_LAYOUT)
        for square_name, fen_char in pieces.items():
            board.place_piece(Piece.from_fen(fen_char), Square.from_algebraic(square_name))
        return board

    return _create_board


@pytest.fixture
def starting_board() -> Board:
    return Board.from_fen(STARTING_LAYOUT)


@pytest.fixture
def castling_board(board_with_pieces: BoardFactory) -> Board:
    """Create a board with only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return board_with_pieces(
        {"e1": "K", "a1": "R", "h1": "R", "e8": "k", "a8": "r", "h8": "r"}
    )


@pytest.fixture
def new_game() -> Game:
    return Game.new_game()


def _click(game: Game, square_name: str) -> None:
    square = Square.from_algebraic(square_name)
    game.select_square(square.row, square.col)


@pytest.fixture
def click() -> Callable[[Game, str], None]:
    """What the UI layer does after hit-testing the pointer against the board"""
    return _click


@pytest.fixture
def play() -> Callable[..., None]:
    """Play moves written as from/to square names, ex. play(game, "e2e4", "e7e5")"""

    def _play(game: Game, *moves: str) -> None:
        for move in moves:
            _click(game, move[:2])
            _click(game, move[2:4])

    return _play
