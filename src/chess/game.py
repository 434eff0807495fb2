"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is the sole owner of the board, the turn, the captured pieces and the undo history, and it reacts to the
events the UI layer sends in: selecting a square, asking for a new game, asking to undo the last move.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.applier import apply_move
from src.chess.board import Board
from src.chess.check import in_check
from src.chess.fen import (
    STARTING_LAYOUT,
    describe_layout_error,
    is_playable_layout,
    placement_field,
)
from src.chess.legality import any_legal_move, legal_moves
from src.chess.moves import AcceptedMove, Move
from src.chess.notation import to_notation
from src.chess.square import Square
from src.core.exceptions import MalformedLayoutError
from src.core.shared_types import Color, Phase, Status

_LOGGER = logging.getLogger(__name__)

TERMINAL_STATUSES = (Status.CHECKMATE, Status.STALEMATE)


def empty_captures() -> dict[Color, list[str]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class Snapshot:
    """History entry: full deep copy of everything a move changes. Pushed before every confirmed move."""

    board: Board
    turn: Color
    captured: dict[Color, list[str]]
    move_log: list[str]


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    turn: Color
    # pieces captured BY a color (icons, for display only)
    captured: dict[Color, list[str]] = field(default_factory=empty_captures)
    move_log: list[str] = field(default_factory=list)
    history: list[Snapshot] = field(default_factory=list)
    status: Status = Status.IN_PROGRESS
    selected: Optional[Square] = None
    selected_moves: list[Move] = field(default_factory=list)
    starting_layout: str = STARTING_LAYOUT

    @classmethod
    def new_game(cls, starting_layout: str = STARTING_LAYOUT) -> Self:
        """
        White always moves first.
        Raises MalformedLayoutError for a bogus layout, or one without exactly one king per color (no game gets created).
        """
        board = Board.from_fen(starting_layout)
        layout = placement_field(starting_layout)
        if not is_playable_layout(layout):
            raise MalformedLayoutError(
                f"Cannot start a game from {layout!r}: {describe_layout_error(layout)}"
            )
        game = cls(board=board, turn=Color.WHITE, starting_layout=starting_layout)
        game._update_game_status()
        _LOGGER.info("New game started from layout %s", board.to_fen())
        return game

    # --- QUERIES FOR THE UI LAYER ---
    @property
    def phase(self) -> Phase:
        if self.status in TERMINAL_STATUSES:
            return Phase.GAME_OVER
        if self.selected is not None:
            return Phase.PIECE_SELECTED
        return Phase.AWAITING_SELECTION

    @property
    def is_over(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def winner(self) -> Optional[Color]:
        """
        Only decisive for checkmate.
        The side to move just got mated, so the opponent must be the winner
        """
        if self.status != Status.CHECKMATE:
            return None
        return self.turn.opponent

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    @property
    def legal_destinations(self) -> list[Square]:
        """Destinations of the currently selected piece (empty if nothing selected)"""
        return [move.to_square for move in self.selected_moves]

    def in_check(self, color: Color) -> bool:
        return in_check(self.board, color)

    def any_legal_move(self, color: Color) -> bool:
        return any_legal_move(self.board, color)

    # --- EVENTS FROM THE UI LAYER ---
    def select_square(self, row: int, col: int) -> None:
        """
        Drive the selection cycle
        ----

        * own piece -> (re)select it and compute its legal moves (possibly none)
        * one of the selected piece's destinations -> play the move
        * anything else -> drop the selection

        Ignored when the game is over or the coordinates fall off the board.
        """
        square = Square(row, col)
        if self.is_over or not square.is_within_bounds():
            _LOGGER.debug("Ignoring selection of (%d, %d)", row, col)
            return

        if self.board.is_ally(square, self.turn):
            self._select(square)
            return

        if self.selected is None:
            return

        move = self._find_selected_move(square)
        if move is None:
            self._clear_selection()
            return

        self._confirm_move(move)

    def request_undo(self) -> None:
        """Take back the last move. A no-op without history."""
        if not self.can_undo:
            return

        self._restore(self.history.pop())
        self._clear_selection()
        # the restored position was one where the side to move still had a move to play
        self._update_game_status()
        _LOGGER.info("Undo: %s to move", self.turn)

    def request_new_game(self) -> None:
        """Reset to the starting layout this game was created with"""
        self.board = Board.from_fen(self.starting_layout)
        self.turn = Color.WHITE
        self.captured = empty_captures()
        self.move_log = []
        self.history = []
        self._clear_selection()
        self._update_game_status()
        _LOGGER.info("New game started from layout %s", self.board.to_fen())

    # -- PRIVATE HELPERS ---
    def _select(self, square: Square) -> None:
        self.selected = square
        self.selected_moves = legal_moves(self.board, square)
        _LOGGER.debug(
            "Selected %s: %d legal moves",
            square.to_algebraic(),
            len(self.selected_moves),
        )

    def _clear_selection(self) -> None:
        self.selected = None
        self.selected_moves = []

    def _find_selected_move(self, square: Square) -> Optional[Move]:
        return next(
            (move for move in self.selected_moves if move.to_square == square), None
        )

    def _confirm_move(self, move: Move) -> None:
        """
        Play a move
        -----

        1. push a history snapshot (state before the move)
        2. update the board
        3. capture bookkeeping + move log
        4. hand the turn to the opponent
        5. update game status (checkmate / stalemate / check)
        """
        self.history.append(self._snapshot())

        accepted = apply_move(self.board, move)
        self._record_capture(accepted)
        notation = to_notation(accepted)
        self.move_log.append(notation)
        _LOGGER.info("%s played %s", self.turn, notation)

        self.turn = self.turn.opponent
        self._clear_selection()
        self._update_game_status()

    def _record_capture(self, accepted: AcceptedMove) -> None:
        """Covers direct captures and en passant alike"""
        if accepted.captured_piece is None:
            return
        capturer = accepted.moving_piece.color
        self.captured[capturer].append(accepted.captured_piece.icon)

    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE the turn has already been handed over: the side to move is the one that might be mated.
        """
        checked = self.in_check(self.turn)
        if not self.any_legal_move(self.turn):
            self.status = Status.CHECKMATE if checked else Status.STALEMATE
            _LOGGER.info("Game over: %s (%s to move)", self.status, self.turn)
            return

        self.status = Status.CHECK if checked else Status.IN_PROGRESS

    def _snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board.copy(),
            turn=self.turn,
            captured={color: list(icons) for color, icons in self.captured.items()},
            move_log=list(self.move_log),
        )

    def _restore(self, snapshot: Snapshot) -> None:
        self.board = snapshot.board
        self.turn = snapshot.turn
        self.captured = snapshot.captured
        self.move_log = snapshot.move_log
