"""Requests and Response models exchanged with the UI layer"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.fen import describe_layout_error, is_playable_layout, placement_field
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Phase, PieceType, Status


# --- REQUEST MODELS ---
class SelectSquareRequest(BaseModel):
    """Coordinates come from the board hit-testing. Off-board values are accepted and ignored by the Game."""

    row: int
    col: int


class NewGameRequest(BaseModel):
    starting_layout: Optional[str] = None

    @field_validator("starting_layout")
    @classmethod
    def validate_starting_layout(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        layout = placement_field(value)
        if not is_playable_layout(layout):
            raise InvalidRequestError(
                f"Cannot use {value!r} as starting layout: {describe_layout_error(layout)}"
            )
        return layout


# --- RESPONSE MODELS ---
class SquareView(BaseModel):
    row: int
    col: int
    name: str


class PieceView(BaseModel):
    type: PieceType
    color: Color
    icon: str


class GameResponse(BaseModel):
    """Read-only view of everything the rendering layer needs"""

    board: list[list[Optional[PieceView]]]
    layout: str
    turn: Color
    status: Status
    winner: Optional[Color]
    phase: Phase
    selected: Optional[SquareView]
    legal_destinations: list[SquareView]
    captured_by_white: list[str]
    captured_by_black: list[str]
    move_history: list[str]
    can_undo: bool
