#!/usr/bin/env python3
"""
Benchmark: measure nodes, cutoffs and time per move at a fixed depth.

Run before and after any change to move ordering or evaluation to quantify
its effect. At the same depth, a lower node count means more effective
pruning; the chosen move and score should not change unless the evaluation
itself changed.

Usage: python -m tools.bench [depth]
"""
import sys

import chess

from chess_engine.constants import MAX_DEPTH
from chess_engine.search import search_root

# Fixed positions spanning opening, middlegame, and endgame.
# Same positions for every comparison.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Complex mid",  "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Pawn ending",  "6k1/ppp2ppp/8/3p4/3P4/8/PPP2PPP/6K1 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, depth: int = MAX_DEPTH) -> dict:
    """Search one position and return its metrics.

    Args:
        label: Human-readable position name for display.
        fen:   Position to search.
        depth: Search depth in plies (clamped by the engine).

    Returns:
        Dict with keys: label, move, depth, score, nodes, cutoffs, time_ms.
    """
    result = search_root(chess.Board(fen), depth)
    return {
        "label": label,
        "move": result.move.uci() if result.move else "(none)",
        "depth": result.depth,
        "score": result.score,
        "nodes": result.nodes,
        "cutoffs": result.cutoffs,
        "time_ms": result.elapsed_ms,
    }


def main(argv: list[str] | None = None) -> None:
    """Run all benchmark positions and print a summary table."""
    argv = sys.argv[1:] if argv is None else argv
    depth = int(argv[0]) if argv else MAX_DEPTH

    print(f"Chess engine benchmark, depth {depth}")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Depth':>5} {'Score':>6} "
        f"{'Nodes':>8} {'Cutoffs':>8} {'Time(ms)':>9}"
    )
    print("-" * 68)

    results = []
    for label, fen in POSITIONS:
        r = run_position(label, fen, depth)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<7} {r['depth']:>5} {r['score']:>6} "
            f"{r['nodes']:>8,} {r['cutoffs']:>8,} {r['time_ms']:>9,}"
        )

    total_nodes = sum(r["nodes"] for r in results)
    total_time = sum(r["time_ms"] for r in results)
    print("-" * 68)
    print(f"{'TOTAL':<14} {'':<7} {'':<5} {'':<6} {total_nodes:>8,} {'':>8} {total_time:>9,}")


if __name__ == "__main__":
    main()
