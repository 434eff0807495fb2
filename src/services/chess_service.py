"""Orchestration of communication from the UI layer to the Game (and the reverse direction)."""

import logging
from typing import Optional

from src.api.models import (
    GameResponse,
    NewGameRequest,
    PieceView,
    SelectSquareRequest,
    SquareView,
)
from src.chess.game import Game
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.shared_types import Color

_LOGGER = logging.getLogger(__name__)


class ChessService:
    """Owns the single in-memory Game and translates UI events into Game calls."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game if game is not None else Game.new_game()

    # -- UI event handlers ---
    def select_square(self, request: SelectSquareRequest) -> GameResponse:
        self.game.select_square(request.row, request.col)
        return self.get_state()

    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Restart. A custom starting layout replaces the game entirely, otherwise the current layout is reused."""
        if request.starting_layout is not None:
            _LOGGER.info("Starting a new game from custom layout")
            self.game = Game.new_game(request.starting_layout)
        else:
            self.game.request_new_game()
        return self.get_state()

    def undo(self) -> GameResponse:
        self.game.request_undo()
        return self.get_state()

    def get_state(self) -> GameResponse:
        """Current game state, for the renderer to draw."""
        return self._create_game_response(self.game)

    # -- Internal helpers --
    def _create_game_response(self, game: Game) -> GameResponse:
        return GameResponse(
            board=self._board_view(game),
            layout=game.board.to_fen(),
            turn=game.turn,
            status=game.status,
            winner=game.winner,
            phase=game.phase,
            selected=self._square_view(game.selected) if game.selected else None,
            legal_destinations=[
                self._square_view(square) for square in game.legal_destinations
            ],
            captured_by_white=list(game.captured[Color.WHITE]),
            captured_by_black=list(game.captured[Color.BLACK]),
            move_history=list(game.move_log),
            can_undo=game.can_undo,
        )

    def _board_view(self, game: Game) -> list[list[Optional[PieceView]]]:
        rows: list[list[Optional[PieceView]]] = []
        for row in range(BOARD_DIMENSIONS[0]):
            cells: list[Optional[PieceView]] = []
            for col in range(BOARD_DIMENSIONS[1]):
                piece = game.board.piece(Square(row, col))
                cells.append(
                    PieceView(type=piece.type, color=piece.color, icon=piece.icon)
                    if piece is not None
                    else None
                )
            rows.append(cells)
        return rows

    def _square_view(self, square: Square) -> SquareView:
        return SquareView(row=square.row, col=square.col, name=square.to_algebraic())
