"""
Search entry point: fixed-depth minimax with alpha-beta pruning.

This module defines the interface that the protocol layers (interface/uci.py
and web/app.py) depend on. best_move() is the orchestration-facing call:
given a position and a depth, return one move or None.

The search is classic two-sided minimax in the absolute White frame rather
than negamax: White nodes maximize the evaluation, Black nodes minimize it.
Alpha is the best value the maximizer can already guarantee elsewhere in the
tree, beta the best the minimizer can. A node stops examining siblings the
moment alpha >= beta.

There is deliberately nothing else: no transposition table, no quiescence,
no iterative deepening and no clock. Depth is clamped to MAX_DEPTH instead,
which is the only bound on latency.

Make/unmake:
    Every node mutates the single shared board and restores it. All pushes go
    through Position.applied(), whose finally-clause pops the move even when a
    cutoff breaks out of the loop, so no exit path can leave the board
    corrupted for the siblings or the caller.
"""

import logging
import time
from dataclasses import dataclass

import chess

from chess_engine.constants import (
    DEFAULT_DEPTH,
    DEFAULT_WEIGHTS,
    INF,
    MAX_DEPTH,
    ORDERING_THRESHOLD,
    EvalWeights,
)
from chess_engine.evaluate import evaluate
from chess_engine.ordering import order_moves
from chess_engine.position import Position

_log = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """
    Counters accumulated over one search.

    Attributes:
        nodes:   Number of alphabeta() calls, i.e. positions visited below
                 the root. Compare at a fixed depth to measure pruning.
        cutoffs: Number of times a node stopped examining its siblings
                 because alpha >= beta.
    """

    nodes: int = 0
    cutoffs: int = 0


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of a root search.

    Attributes:
        move:       Best move for the side to move, or None if the position
                    has no legal moves.
        score:      Value of that move in the White frame. When there is no
                    move, the static evaluation of the terminal position.
        depth:      Depth actually searched, after clamping.
        nodes:      Positions visited below the root.
        cutoffs:    Sibling cutoffs taken.
        elapsed_ms: Wall-clock time spent, for logging only.
    """

    move: chess.Move | None
    score: int
    depth: int
    nodes: int = 0
    cutoffs: int = 0
    elapsed_ms: int = 0


def clamp_depth(depth: int | None) -> int:
    """Resolve a caller-supplied depth: None means DEFAULT_DEPTH, then clamp to [1, MAX_DEPTH]."""
    if depth is None:
        depth = DEFAULT_DEPTH
    return max(1, min(int(depth), MAX_DEPTH))


def alphabeta(
    position: Position,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    stats: SearchStats | None = None,
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> int:
    """
    Minimax value of a subtree, pruned with an (alpha, beta) window.

    Pruning only removes branches that cannot change the result: leaf values
    come straight from the static evaluator and pass unmodified through max()
    and min(), so the value returned equals the value an unpruned minimax
    search would compute over the same tree.

    Checkmate leaves found before the horizon score CHECKMATE_SCORE plus the
    remaining depth, in the winner's direction, so a mate in one outranks a
    mate in two even though the evaluator reports both with the same sentinel.

    Args:
        position:   Current position. Mutated during the call and always
                    restored before it returns.
        depth:      Remaining depth in plies. At 0 the static evaluation is
                    returned.
        alpha:      Best value the maximizer can already guarantee.
        beta:       Best value the minimizer can already guarantee.
        maximizing: True at White-to-move nodes in normal play. Passed in
                    rather than derived from the board, and flipped on every
                    recursive call.
        stats:      Optional counters, updated in place.
        weights:    Evaluation and ordering tuning constants.

    Returns:
        Subtree value in the White frame.

    Ordering:
        Nodes with more than ORDERING_THRESHOLD legal moves are ordered with
        order_moves(); smaller nodes are searched in generation order, where
        the cost of ordering outweighs the extra cutoffs.
    """
    if stats is not None:
        stats.nodes += 1

    if depth <= 0:
        return evaluate(position, weights)

    moves = position.legal_moves()
    # No moves means checkmate or stalemate; a rule draw still has moves.
    if not moves or position.rule_draw().is_draw:
        value = evaluate(position, weights)
        if not moves and position.is_check():
            # A mate reached with more depth left is closer to the root.
            value += depth if value > 0 else -depth
        return value
    if len(moves) > ORDERING_THRESHOLD:
        moves = order_moves(position, moves, weights)

    if maximizing:
        best = -INF
        for move in moves:
            with position.applied(move):
                score = alphabeta(position, depth - 1, alpha, beta, False, stats, weights)
            best = max(best, score)
            alpha = max(alpha, best)
            if alpha >= beta:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return best

    best = INF
    for move in moves:
        with position.applied(move):
            score = alphabeta(position, depth - 1, alpha, beta, True, stats, weights)
        best = min(best, score)
        beta = min(beta, best)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break
    return best


def search_root(
    position: Position | chess.Board,
    depth: int | None = None,
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> SearchResult:
    """
    Evaluate every root move and return the best one for the side to move.

    White maximizes, Black minimizes. Each root move gets a fresh full
    window, so every root score is exact and the comparison between them is
    fair. The best move is seeded with the first ordered candidate and only
    replaced on a strict improvement; equal later candidates never displace
    an earlier one, which makes the result deterministic for a given
    position and depth.

    Args:
        position: The position to search. Restored before return. A bare
                  chess.Board is accepted and wrapped.
        depth:    Requested depth in plies. None means DEFAULT_DEPTH; any
                  value is clamped to [1, MAX_DEPTH].
        weights:  Evaluation and ordering tuning constants.

    Returns:
        SearchResult. result.move is None only when there are no legal moves.
    """
    position = Position.coerce(position)
    depth = clamp_depth(depth)
    stats = SearchStats()
    start = time.monotonic()

    moves = order_moves(position, position.legal_moves(), weights)
    if not moves:
        # Terminal position: not an error, just nothing to play.
        return SearchResult(move=None, score=evaluate(position, weights), depth=depth)

    maximizing = position.side_to_move == chess.WHITE
    chosen = moves[0]
    best_score = -INF if maximizing else INF

    for move in moves:
        with position.applied(move):
            score = alphabeta(position, depth - 1, -INF, INF, not maximizing, stats, weights)
        if (maximizing and score > best_score) or (not maximizing and score < best_score):
            best_score = score
            chosen = move

    elapsed_ms = int((time.monotonic() - start) * 1000)
    _log.debug(
        "search depth=%d move=%s score=%d nodes=%d cutoffs=%d time=%dms",
        depth,
        chosen.uci(),
        best_score,
        stats.nodes,
        stats.cutoffs,
        elapsed_ms,
    )
    return SearchResult(
        move=chosen,
        score=best_score,
        depth=depth,
        nodes=stats.nodes,
        cutoffs=stats.cutoffs,
        elapsed_ms=elapsed_ms,
    )


def best_move(position: Position | chess.Board, depth: int | None = None) -> chess.Move | None:
    """Return the best move for the side to move, or None if there is none."""
    return search_root(position, depth).move


def get_best_move(
    board: chess.Board,
    depth: int | None = None,
) -> tuple[chess.Move | None, int, int, int]:
    """
    Tuple form of search_root() for the protocol adapters.

    Returns:
        (move, score_cp, depth, nodes). score_cp is in the White frame.
    """
    result = search_root(board, depth)
    return (result.move, result.score, result.depth, result.nodes)
