"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the pseudo-legal move sets for each piece type.

Every rule takes an `attack_only` flag. In attack-only mode a rule only returns the squares the piece
threatens: no pawn pushes, no en passant. Castling is never produced here at all (see generator.py),
which is what allows the check oracle to build on these rules without recursing into castling.

Legality is checked later (see legality.py)
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Piece
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.shared_types import CastleSide, Color, PieceType


class Board(Protocol):
    """Just the parts the movement strategies need"""

    en_passant_target: Optional[Square]

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...
    def is_ally(self, square: Square, color: Color) -> bool: ...
    def is_enemy(self, square: Square, color: Color) -> bool: ...


Vector = tuple[int, int]

# white moves UP the board (towards row 0), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
# the row a pawn must stand on to be able to take en passant
EN_PASSANT_ROW: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_DIMENSIONS[0] - 1}

KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = [
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]


@dataclass(frozen=True)
class Move:
    """
    Move descriptor produced by the generator and consumed by the applier.

    Promotion is implicit: any pawn move landing on the farthest rank becomes a queen.
    """

    from_square: Square
    to_square: Square
    capture: bool = False
    double_push: bool = False
    en_passant: bool = False
    castle_side: Optional[CastleSide] = None

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def en_passant_capture_square(self) -> Square:
        """The pawn taken en passant stands next to the capturing pawn, on the destination file."""
        return Square(self.from_square.row, self.to_square.col)

    @property
    def skipped_square(self) -> Square:
        """The square a double pushing pawn jumps over"""
        return Square(
            (self.from_square.row + self.to_square.row) // 2, self.from_square.col
        )


@dataclass
class AcceptedMove:
    """Snapshot of the moving piece and whatever it captures, taken before the board is updated."""

    move: Move
    moving_piece: Piece
    captured_piece: Optional[Piece]
    promotes: bool

    @classmethod
    def from_move_and_board(cls, move: Move, board: Board) -> Self:
        moving_piece = board.piece(move.from_square)
        assert moving_piece is not None, f"No piece to move on {move.from_square}"

        if move.en_passant:
            captured_piece = board.piece(move.en_passant_capture_square)
        else:
            captured_piece = board.piece(move.to_square)

        promotes = (
            moving_piece.type == PieceType.PAWN
            and move.to_square.row == PROMOTION_ROW[moving_piece.color]
        )
        return cls(
            move=move,
            moving_piece=Piece(
                moving_piece.type, moving_piece.color, moving_piece.has_moved
            ),
            captured_piece=(
                Piece(captured_piece.type, captured_piece.color, captured_piece.has_moved)
                if captured_piece is not None
                else None
            ),
            promotes=promotes,
        )


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. A blocking enemy piece yields one final capture, a blocking ally yields nothing.
    """
    piece = board.piece(square)
    assert piece is not None
    player_color = piece.color

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            if not board.is_empty(target_square):
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if board.is_enemy(target_square, player_color):
                    moves.append(Move(square, target_square, capture=True))
                break

            moves.append(Move(square, target_square))
            target_square = target_square.offset(d_row, d_col)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    piece = board.piece(square)
    assert piece is not None
    player_color = piece.color

    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        if not board.is_ally(target_square, player_color):
            capture = board.is_enemy(target_square, player_color)
            moves.append(Move(square, target_square, capture=capture))

    return moves


def candidate_pawn_moves(square: Square, board: Board, attack_only: bool) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank)
    - takes diagonally (also en passant)

    In attack-only mode the pawn threatens both forward diagonals, whether or not anything stands there.
    """
    pawn = board.piece(square)
    assert pawn is not None
    color = pawn.color
    direction = PAWN_DIRECTION[color]

    if attack_only:
        return [
            Move(square, target, capture=board.is_enemy(target, color))
            for target in (square.offset(direction, -1), square.offset(direction, 1))
            if target.is_within_bounds()
        ]

    moves: list[Move] = []
    one_step = square.offset(direction, 0)
    if board.is_empty(one_step):
        moves.append(Move(square, one_step))
        two_steps = square.offset(2 * direction, 0)
        if square.row == PAWN_START_ROW[color] and board.is_empty(two_steps):
            moves.append(Move(square, two_steps, double_push=True))

    for d_col in (-1, 1):
        target_square = square.offset(direction, d_col)
        if board.is_enemy(target_square, color):
            moves.append(Move(square, target_square, capture=True))

    moves.extend(en_passant_moves(square, board))
    return moves


def en_passant_moves(square: Square, board: Board) -> list[Move]:
    """
    The en passant target is the square the opponent's pawn skipped over on its double push.
    Your pawn can take onto it when standing next to that pawn, i.e. diagonally behind the target.
    """
    target = board.en_passant_target
    pawn = board.piece(square)
    if target is None or pawn is None:
        return []

    color = pawn.color
    if square.row != EN_PASSANT_ROW[color]:
        return []

    is_diagonally_in_front = (target.row == square.row + PAWN_DIRECTION[color]) and (
        abs(target.col - square.col) == 1
    )
    if not is_diagonally_in_front:
        return []
    return [Move(square, target, capture=True, en_passant=True)]


def candidate_knight_moves(square: Square, board: Board, attack_only: bool) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board, attack_only: bool) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board, attack_only: bool) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board, attack_only: bool) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, board, DIAGONALS + STRAIGHTS)


def candidate_king_moves(square: Square, board: Board, attack_only: bool) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled in castling.py).
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board, bool], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(board: Board, square: Square, attack_only: bool) -> list[Move]:
    """Per-piece movement rules for whatever stands on `square`. Never includes castling."""
    piece = board.piece(square)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(square, board, attack_only)
