"""
Static evaluation: material + piece-square tables + mobility.

A chess engine needs to assign a numeric score to any board position so the
search can compare moves. This evaluator is deliberately simple: it is the
sum of three terms.

1. Material: a fixed centipawn value per piece. Both kings carry 20,000 cp,
   which cancels out because kings are never captured.
2. Position: a bonus or penalty from a per-piece 8x8 table. Knights are
   rewarded for central squares, pawns for advancing, the king for staying
   behind its castled pawn shield.
3. Mobility: two centipawns per legal move available to the side to move.
   Only the mover's moves are counted, so this term flips sign from ply to
   ply; it nudges the search toward active positions rather than measuring
   anything precise.

Unlike a negamax evaluator, the score is always in the absolute White frame:
positive means White is better, regardless of whose turn it is. The search
maximizes at White nodes and minimizes at Black nodes.

Terminal positions are recognized here, so callers never have to classify a
position before asking for its score:
    - checkmate: -CHECKMATE_SCORE if White is mated, +CHECKMATE_SCORE if Black is
    - stalemate, insufficient material, threefold repetition, fifty-move rule: 0
"""

import chess

from chess_engine.constants import CHECKMATE_SCORE, DEFAULT_WEIGHTS, DRAW_SCORE, EvalWeights
from chess_engine.position import Outcome, Position


def evaluate(position: Position | chess.Board, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    """
    Centipawn evaluation in the White frame.

    The square indexing convention for PST lookup:
        - White piece on square sq: index sq ^ 56. PST index 0 is a8 but
          python-chess square 0 is a1; XOR with 56 flips the rank.
        - Black piece on square sq: index sq directly, which is the same
          table read with its rows mirrored.

    Args:
        position: The position to score. Not modified. A bare chess.Board
                  is accepted and wrapped.
        weights:  Tuning constants. Defaults to the hand-tuned values.

    Returns:
        Centipawn score, positive = White is ahead. Exactly DRAW_SCORE for a
        recognized draw and +/-CHECKMATE_SCORE for checkmate.

    Example:
        >>> evaluate(chess.Board())  # symmetric start, White to move: 20 moves * 2
        40
    """
    position = Position.coerce(position)
    board = position.board

    mobility = position.legal_move_count()
    if mobility == 0:
        if board.is_check():
            # The side to move is mated; that side's frame is large-negative.
            return -CHECKMATE_SCORE if board.turn == chess.WHITE else CHECKMATE_SCORE
        return DRAW_SCORE
    if position.rule_draw() is not Outcome.ONGOING:
        return DRAW_SCORE

    piece_values = weights.piece_values
    pst = weights.pst
    score = 0
    for sq, piece in board.piece_map().items():
        pt = piece.piece_type
        if piece.color == chess.WHITE:
            score += piece_values[pt] + pst[pt][sq ^ 56]
        else:
            score -= piece_values[pt] + pst[pt][sq]

    mobility_score = mobility * weights.mobility_weight
    score += mobility_score if board.turn == chess.WHITE else -mobility_score
    return score
