"""
Position codec helpers: the piece placement part of a FEN string.

Only the placement field is consumed. A game always starts with White to move,
and castling rights are inferred from the `has_moved` flags of kings and rooks.
"""

from src.chess.pieces import FEN_TO_PIECE
from src.chess.square import BOARD_DIMENSIONS

STARTING_LAYOUT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_LAYOUT = "/".join(["8"] * BOARD_DIMENSIONS[0])


def placement_field(fen: str) -> str:
    """A full FEN string is accepted as well: everything after the first space is ignored."""
    return fen.strip().split(" ")[0]


def _is_empty_run(character: str) -> bool:
    """Only ASCII digits count: `"²".isdigit()` is True as well, but `int` refuses it."""
    return character.isascii() and character.isdigit()


def _is_piece_code(character: str) -> bool:
    """Only ASCII letters count: the Kelvin sign lowercases to "k"."""
    return character.isascii() and character.lower() in FEN_TO_PIECE


def is_valid_layout(layout: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_rows, num_cols = BOARD_DIMENSIONS
    rank_fens = layout.split("/")
    if len(rank_fens) != num_rows:
        return False

    for rank_fen in rank_fens:
        col_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if _is_empty_run(character):
                col_count += int(character)
            elif _is_piece_code(character):
                col_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if col_count != num_cols:
            return False
    return True


def is_playable_layout(layout: str) -> bool:
    """A layout a game can start from: well formed, and exactly one king of each color."""
    return is_valid_layout(layout) and layout.count("K") == 1 and layout.count("k") == 1


def describe_layout_error(layout: str) -> str:
    """Human readable reason for rejecting a layout (assumes `is_playable_layout` returned False)."""
    num_rows, num_cols = BOARD_DIMENSIONS
    rank_fens = layout.split("/")
    if len(rank_fens) != num_rows:
        return f"expected {num_rows} ranks, got {len(rank_fens)}"

    for rank_idx, rank_fen in enumerate(rank_fens):
        col_count = 0
        for character in rank_fen:
            if _is_empty_run(character):
                col_count += int(character)
            elif _is_piece_code(character):
                col_count += 1
            else:
                return f"unrecognized character {character!r} in rank {num_rows - rank_idx}"
        if col_count != num_cols:
            return f"rank {num_rows - rank_idx} covers {col_count} columns instead of {num_cols}"

    for king, color in (("K", "white"), ("k", "black")):
        if layout.count(king) != 1:
            return f"expected exactly one {color} king, got {layout.count(king)}"
    return "unknown layout error"
