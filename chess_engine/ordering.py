"""
Move ordering for alpha-beta pruning.

Alpha-beta visits fewer nodes when the best move is searched first, because
a strong early result narrows the window and lets later siblings be cut off.
Ordering is purely a performance optimization: whatever the order, the search
returns the same value.

Each move is scored by tentatively playing it:
    - captures:   10 * victim_value - attacker_value, so PxQ (8900) sorts far
                  ahead of QxP (100). Any capture of a non-pawn by a cheaper
                  piece outranks every quiet move.
    - promotions: + value of the promoted-to piece.
    - checks:     + CHECK_BONUS if the opponent is in check after the move.

Quiet, non-checking moves score 0 and keep their generation order (sorted()
is stable).
"""

from typing import Iterable

import chess

from chess_engine.constants import DEFAULT_WEIGHTS, EvalWeights
from chess_engine.position import Position


def score_move(position: Position, move: chess.Move, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    """
    Heuristic ordering score for one legal move.

    The move is applied and undone through Position.applied(), so the
    position is unchanged when this returns.
    """
    values = weights.piece_values
    score = 0

    victim = position.captured_piece_type(move)
    if victim is not None:
        attacker = position.moving_piece_type(move)
        score += weights.victim_multiplier * values[victim] - values[attacker]

    if move.promotion is not None:
        score += values[move.promotion]

    with position.applied(move):
        if position.is_check():
            score += weights.check_bonus

    return score


def order_moves(
    position: Position,
    moves: Iterable[chess.Move],
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> list[chess.Move]:
    """
    Return the moves sorted from highest to lowest ordering score.

    The result is a permutation of the input: no move is added, dropped or
    altered. Ties keep their input order.

    Args:
        position: Position the moves are legal in. Restored before return.
        moves:    Legal moves to order.
        weights:  Tuning constants for piece values and the check bonus.

    Returns:
        New list of the same moves, best candidates first.
    """
    scored = [(score_move(position, move, weights), move) for move in moves]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [move for _, move in scored]
