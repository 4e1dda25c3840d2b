"""
Chess engine package.

This package picks a move for one side of a chess game using fixed-depth
minimax with alpha-beta pruning, heuristic move ordering, and a hand-tuned
static evaluation. python-chess supplies the rules; nothing here re-derives
legality.

Modules:
    constants — Piece values, piece-square tables, weights and search limits
    position  — Adapter over chess.Board: moves, make/unmake, terminal states
    evaluate  — Static evaluation (material + PST + mobility), White frame
    ordering  — Capture/promotion/check move ordering
    search    — Alpha-beta search and best-move selection
    settings  — Environment-driven deployment settings
    errors    — Exception types
"""

from chess_engine.errors import EngineError, GameNotFoundError, GameOverError, IllegalMoveError
from chess_engine.position import MoveRecord, Outcome, Position
from chess_engine.search import SearchResult, best_move, search_root

__all__ = [
    "EngineError",
    "GameNotFoundError",
    "GameOverError",
    "IllegalMoveError",
    "MoveRecord",
    "Outcome",
    "Position",
    "SearchResult",
    "best_move",
    "search_root",
]
