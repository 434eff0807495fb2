"""The Board Model: which piece stands where, plus the square that can be taken en passant."""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.fen import describe_layout_error, is_valid_layout, placement_field
from src.chess.pieces import Piece
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import MalformedLayoutError
from src.core.shared_types import Color, PieceType


@dataclass
class Board:
    position: dict[Square, Optional[Piece]]
    # The square a pawn skipped over on the immediately preceding double push (if any)
    en_passant_target: Optional[Square] = field(default=None)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using a given FEN string.

        That is, we supply the first part of the FEN string that denotes the board position
        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        Every piece starts with `has_moved=False` and there is no en passant target.
        """
        layout = placement_field(fen_str)
        if not is_valid_layout(layout):
            raise MalformedLayoutError(
                f"Cannot interpret {layout!r} as a board layout: {describe_layout_error(layout)}"
            )

        position: dict[Square, Optional[Piece]] = {
            square: None for square in all_squares()
        }
        for row, fen_one_rank in enumerate(layout.split("/")):
            col = 0
            for character in fen_one_rank:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    position[Square(row, col)] = Piece.from_fen(character)
                    col += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
        return cls(position)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def copy(self) -> Self:
        """Fully independent copy (pieces included), used for simulations and history snapshots."""
        return deepcopy(self)

    # --- ACCESSORS ---
    def piece(self, square: Square) -> Optional[Piece]:
        """Out-of-bounds squares simply hold no piece"""
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return square.is_within_bounds() and self.piece(square) is None

    def is_ally(self, square: Square, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color == color

    def is_enemy(self, square: Square, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color != color

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.type == piece_type and piece.color == color
        ]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        ]

    # --- MUTATIONS ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        removed = self.position[square]
        self.position[square] = None
        return removed

    def relocate(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Move whatever stands on `from_square` to `to_square`, marking it as moved. Returns what stood on `to_square`."""
        piece_that_moved = self.position[from_square]
        assert piece_that_moved is not None, f"No piece on {from_square.to_algebraic()}"
        replaced = self.position[to_square]
        self.position[from_square] = None
        self.position[to_square] = piece_that_moved
        piece_that_moved.mark_moved()
        return replaced
