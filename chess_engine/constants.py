"""
Engine constants: piece values, piece-square tables, and search parameters.

All numeric constants used throughout the engine are defined here so that
the evaluator, move orderer and search never introduce their own magic
numbers. The values are hand-tuned; they are grouped into an immutable
EvalWeights bundle so that a caller can experiment with different tuning
without touching shared module state.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
Scores are always integers and always in the absolute White frame:
positive favours White, negative favours Black.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
# Both kings are always on the board, so this term cancels in the material
# sum. It only matters for move ordering, where it makes the king the most
# expensive attacker.
KING_VALUE: int = 20_000

PIECE_VALUES: Mapping[int, int] = MappingProxyType({
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
})

# ---------------------------------------------------------------------------
# Piece-square tables
# ---------------------------------------------------------------------------
# Each table is laid out the way a diagram is printed: index 0 is a8,
# index 7 is h8, index 63 is h1. White reads the table in this row order,
# Black reads it with the rows mirrored, since "forward" points the other
# way for Black. Files are never mirrored.

PST_PAWN: tuple[int, ...] = (
     0,  0,  0,  0,  0,  0,  0,  0,
    50, 50, 50, 50, 50, 50, 50, 50,
    10, 10, 20, 30, 30, 20, 10, 10,
     5,  5, 10, 25, 25, 10,  5,  5,
     0,  0,  0, 20, 20,  0,  0,  0,
     5, -5,-10,  0,  0,-10, -5,  5,
     5, 10, 10,-20,-20, 10, 10,  5,
     0,  0,  0,  0,  0,  0,  0,  0,
)

PST_KNIGHT: tuple[int, ...] = (
    -50,-40,-30,-30,-30,-30,-40,-50,
    -40,-20,  0,  0,  0,  0,-20,-40,
    -30,  0, 10, 15, 15, 10,  0,-30,
    -30,  5, 15, 20, 20, 15,  5,-30,
    -30,  0, 15, 20, 20, 15,  0,-30,
    -30,  5, 10, 15, 15, 10,  5,-30,
    -40,-20,  0,  5,  5,  0,-20,-40,
    -50,-40,-30,-30,-30,-30,-40,-50,
)

PST_BISHOP: tuple[int, ...] = (
    -20,-10,-10,-10,-10,-10,-10,-20,
    -10,  0,  0,  0,  0,  0,  0,-10,
    -10,  0, 10, 10, 10, 10,  0,-10,
    -10,  5,  5, 10, 10,  5,  5,-10,
    -10,  0,  5, 10, 10,  5,  0,-10,
    -10,  5,  5,  5,  5,  5,  5,-10,
    -10,  5,  0,  0,  0,  0,  5,-10,
    -20,-10,-10,-10,-10,-10,-10,-20,
)

PST_ROOK: tuple[int, ...] = (
     0,  0,  0,  0,  0,  0,  0,  0,
     5, 10, 10, 10, 10, 10, 10,  5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
     0,  0,  0,  5,  5,  0,  0,  0,
)

PST_QUEEN: tuple[int, ...] = (
    -20,-10,-10, -5, -5,-10,-10,-20,
    -10,  0,  0,  0,  0,  0,  0,-10,
    -10,  0,  5,  5,  5,  5,  0,-10,
     -5,  0,  5,  5,  5,  5,  0, -5,
      0,  0,  5,  5,  5,  5,  0, -5,
    -10,  5,  5,  5,  5,  5,  0,-10,
    -10,  0,  5,  0,  0,  0,  0,-10,
    -20,-10,-10, -5, -5,-10,-10,-20,
)

PST_KING: tuple[int, ...] = (
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -20,-30,-30,-40,-40,-30,-30,-20,
    -10,-20,-20,-20,-20,-20,-20,-10,
     20, 20,  0,  0,  0,  0, 20, 20,
     20, 30, 10,  0,  0, 10, 30, 20,
)

PST: Mapping[int, tuple[int, ...]] = MappingProxyType({
    chess.PAWN:   PST_PAWN,
    chess.KNIGHT: PST_KNIGHT,
    chess.BISHOP: PST_BISHOP,
    chess.ROOK:   PST_ROOK,
    chess.QUEEN:  PST_QUEEN,
    chess.KING:   PST_KING,
})

# ---------------------------------------------------------------------------
# Evaluation and ordering weights
# ---------------------------------------------------------------------------

# Centipawns per legal move available to the side to move.
MOBILITY_WEIGHT: int = 2

# Ordering bonus for a move that gives check.
CHECK_BONUS: int = 50

# Victim multiplier in the capture ordering score (10 * victim - attacker).
CAPTURE_VICTIM_MULTIPLIER: int = 10

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# CHECKMATE_SCORE must exceed any reachable material + positional sum.
# The largest possible material imbalance is well under 20,000 cp.

CHECKMATE_SCORE: int = 99_999
DRAW_SCORE: int = 0


# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# Depth used when the caller does not supply one.
DEFAULT_DEPTH: int = 3

# Hard ceiling on requested depth. There is no clock in the search, so this
# is the only bound on worst-case latency.
MAX_DEPTH: int = 3

# Search window bounds. The search adds the remaining depth to a mate score
# so that shorter mates rank higher; INF sits above the largest such value,
# so even a mate is a strict improvement over the initial best-so-far sentinel.
INF: int = CHECKMATE_SCORE + MAX_DEPTH + 1

# Inner nodes with more legal moves than this are ordered before searching.
# The root is always ordered.
ORDERING_THRESHOLD: int = 10


@dataclass(frozen=True)
class EvalWeights:
    """
    Immutable bundle of the evaluator and orderer tuning constants.

    The defaults are the literal hand-tuned values above. They have no
    documented derivation, so they are treated as configuration: tests and
    experiments may pass their own EvalWeights without affecting anyone
    else holding DEFAULT_WEIGHTS.

    Attributes:
        piece_values:     Centipawn value per python-chess piece type.
        pst:              Piece-square table per piece type, a8-first layout.
        mobility_weight:  Centipawns per legal move of the side to move.
        check_bonus:      Ordering bonus for checking moves.
        victim_multiplier: Victim weight in the capture ordering score.
    """

    piece_values: Mapping[int, int] = field(default_factory=lambda: PIECE_VALUES)
    pst: Mapping[int, tuple[int, ...]] = field(default_factory=lambda: PST)
    mobility_weight: int = MOBILITY_WEIGHT
    check_bonus: int = CHECK_BONUS
    victim_multiplier: int = CAPTURE_VICTIM_MULTIPLIER


DEFAULT_WEIGHTS = EvalWeights()
