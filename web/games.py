"""
In-memory game sessions.

Each session is one Position keyed by a string id. A single lock guards the
map and every game in it, because FastAPI runs sync handlers in a thread
pool and two requests may touch the same game. The engine search itself runs
on a copy of the game outside the lock, so a slow search never blocks other
sessions.
"""

import threading
import uuid

import chess

from chess_engine.errors import GameNotFoundError, GameOverError, IllegalMoveError
from chess_engine.position import MoveRecord, Position
from chess_engine.search import SearchResult, search_root


class GameStore:
    """Thread-safe map of game id to Position."""

    def __init__(self) -> None:
        self._games: dict[str, Position] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

    def create(self, game_id: str | None = None, fen: str | None = None) -> str:
        """
        Start a new game and return its id.

        An existing game under the same id is replaced. Raises ValueError for
        a malformed FEN.
        """
        position = Position(fen=fen)
        game_id = game_id or uuid.uuid4().hex
        with self._lock:
            self._games[game_id] = position
        return game_id

    def delete(self, game_id: str) -> None:
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFoundError(game_id)

    def _get(self, game_id: str) -> Position:
        # Caller holds the lock.
        try:
            return self._games[game_id]
        except KeyError:
            raise GameNotFoundError(game_id) from None

    def legal_moves(self, game_id: str) -> list[str]:
        with self._lock:
            position = self._get(game_id)
            board = position.board
            return [board.san(move) for move in position.legal_moves()]

    def make_move(self, game_id: str, text: str) -> MoveRecord:
        """Apply a move given in SAN, falling back to UCI."""
        with self._lock:
            position = self._get(game_id)
            try:
                return position.apply_san(text)
            except IllegalMoveError:
                return position.apply_uci(text)

    def undo(self, game_id: str) -> chess.Move:
        with self._lock:
            return self._get(game_id).undo()

    def best_move(
        self,
        game_id: str,
        depth: int | None = None,
        play: bool = False,
    ) -> tuple[SearchResult, str, str]:
        """
        Search the game and return (result, san, fen).

        fen is the position after the move when play is True, otherwise the
        position that was searched.

        The search runs on a copy; the stored game only changes when play is
        True and the game has not moved on meanwhile.

        Raises:
            GameNotFoundError: Unknown id.
            GameOverError:     The game has no legal moves.
        """
        with self._lock:
            snapshot = self._get(game_id).copy()
        result = search_root(snapshot, depth)
        if result.move is None:
            raise GameOverError(f"Game {game_id} is over: {snapshot.outcome().value}")
        san = snapshot.board.san(result.move)
        if play:
            with self._lock:
                position = self._get(game_id)
                if position.fen() != snapshot.fen():
                    raise IllegalMoveError(f"Game {game_id} changed during search")
                position.apply(result.move)
                return result, san, position.fen()
        return result, san, snapshot.fen()

    def state(self, game_id: str) -> dict:
        """Board summary: FEN, ASCII diagram, turn, outcome and SAN legal moves."""
        with self._lock:
            position = self._get(game_id)
            board = position.board
            return {
                "game_id": game_id,
                "fen": position.fen(),
                "ascii": str(board),
                "turn": "white" if board.turn == chess.WHITE else "black",
                "outcome": position.outcome().value,
                "in_check": position.is_check(),
                "legal_moves": [board.san(move) for move in position.legal_moves()],
            }
