"""
FastAPI web application for the chess engine.

Two ways to use the engine over HTTP:

- Sessions (/api/games/...): create a game, read its board and legal moves,
  play moves in SAN or UCI, undo, and ask the engine for its best move. This
  is the surface an orchestrator uses to run engine-vs-anything games.
- Stateless (POST /api/move): send a FEN, get the engine's move back.

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like search.
- Depth is the only tunable. It is clamped to MAX_DEPTH because the search
  has no time cutoff.
- Scores are centipawns in the White frame: positive = White is ahead.
"""

import logging

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from chess_engine.errors import GameNotFoundError, GameOverError, IllegalMoveError
from chess_engine.search import clamp_depth, search_root
from chess_engine.settings import Settings
from web.games import GameStore

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

settings = Settings.from_env()

logging.basicConfig(level=settings.log_level)
_log = logging.getLogger(__name__)

app = FastAPI(title="Chess Engine", version="1.0.0")
store = GameStore()


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


def _clamp_depth(v: int | None) -> int | None:
    return None if v is None else clamp_depth(v)


class NewGameRequest(BaseModel):
    """
    Fields:
        game_id: Optional caller-chosen id. A random id is generated if
                 omitted; an existing game under this id is replaced.
        fen:     Optional starting position. Defaults to the standard start.
    """

    game_id: str | None = None
    fen: str | None = None


class MoveRequest(BaseModel):
    """A move in SAN ("Nf3") or UCI ("g1f3") notation."""

    move: str


class BestMoveRequest(BaseModel):
    """
    Fields:
        depth: Search depth in plies, clamped to [1, MAX_DEPTH]. Omit to use
               the configured default.
        play:  Apply the engine's move to the game before returning.
    """

    depth: int | None = None
    play: bool = False

    @field_validator("depth")
    @classmethod
    def clamp_request_depth(cls, v: int | None) -> int | None:
        """Clamp depth to the search ceiling."""
        return _clamp_depth(v)


class PositionRequest(BaseModel):
    """
    Fields:
        fen:   Full FEN string of the position to search.
        depth: Search depth in plies, clamped to [1, MAX_DEPTH].
    """

    fen: str
    depth: int | None = None

    @field_validator("depth")
    @classmethod
    def clamp_request_depth(cls, v: int | None) -> int | None:
        """Clamp depth to the search ceiling."""
        return _clamp_depth(v)


class EngineMoveResponse(BaseModel):
    """
    Engine reply.

    Fields:
        move:  Best move in UCI notation (e.g. "e2e4", "e7e8q").
        san:   The same move in SAN.
        fen:   FEN after the move when it was played, otherwise the FEN searched.
        score: Evaluation in centipawns, White frame.
        depth: Depth searched.
        nodes: Positions visited.
    """

    move: str
    san: str
    fen: str
    score: int
    depth: int
    nodes: int


# ---------------------------------------------------------------------------
# Session routes
# ---------------------------------------------------------------------------


def _state_or_404(game_id: str) -> dict:
    try:
        return store.state(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/api/games")
def create_game(request: NewGameRequest = NewGameRequest()) -> dict:
    """Create a game and return its state."""
    try:
        game_id = store.create(request.game_id, request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc
    _log.info("New game %s", game_id)
    return _state_or_404(game_id)


@app.get("/api/games/{game_id}")
def get_game(game_id: str) -> dict:
    return _state_or_404(game_id)


@app.get("/api/games/{game_id}/legal-moves")
def get_legal_moves(game_id: str) -> dict:
    try:
        moves = store.legal_moves(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"game_id": game_id, "legal_moves": moves}


@app.post("/api/games/{game_id}/moves")
def make_move(game_id: str, request: MoveRequest) -> dict:
    """
    Play a move for the side to move.

    Raises:
        HTTPException 400: Unparsable or illegal move.
        HTTPException 404: Unknown game.
    """
    try:
        record = store.make_move(game_id, request.move)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except IllegalMoveError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"played": record.san, "uci": record.move.uci(), **_state_or_404(game_id)}


@app.post("/api/games/{game_id}/undo")
def undo_move(game_id: str) -> dict:
    try:
        store.undo(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except IllegalMoveError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _state_or_404(game_id)


@app.delete("/api/games/{game_id}")
def delete_game(game_id: str) -> dict:
    try:
        store.delete(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"game_id": game_id, "deleted": True}


@app.post("/api/games/{game_id}/best-move", response_model=EngineMoveResponse)
def game_best_move(game_id: str, request: BestMoveRequest = BestMoveRequest()) -> EngineMoveResponse:
    """
    Ask the engine for the side to move's best move.

    Raises:
        HTTPException 404: Unknown game.
        HTTPException 409: The game is over, or it changed while the engine
                           was searching with play=true.
    """
    depth = request.depth or settings.default_depth
    try:
        result, san, fen = store.best_move(game_id, depth, play=request.play)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (GameOverError, IllegalMoveError) as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    _log.info(
        "Game=%s move=%s score=%d depth=%d nodes=%d time=%dms",
        game_id,
        result.move.uci(),
        result.score,
        result.depth,
        result.nodes,
        result.elapsed_ms,
    )
    return EngineMoveResponse(
        move=result.move.uci(),
        san=san,
        fen=fen,
        score=result.score,
        depth=result.depth,
        nodes=result.nodes,
    )


# ---------------------------------------------------------------------------
# Stateless route
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=EngineMoveResponse)
def api_move(request: PositionRequest) -> EngineMoveResponse:
    """
    Compute the engine's best move for a FEN and return it applied.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: The search failed unexpectedly.
    """
    try:
        board = chess.Board(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    try:
        result = search_root(board, request.depth or settings.default_depth)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        raise HTTPException(status_code=400, detail=f"Game is already over: {board.result()}")

    _log.info(
        "Move=%s score=%d depth=%d nodes=%d fen=%s",
        result.move.uci(),
        result.score,
        result.depth,
        result.nodes,
        request.fen[:40],
    )

    san = board.san(result.move)
    board.push(result.move)
    return EngineMoveResponse(
        move=result.move.uci(),
        san=san,
        fen=board.fen(),
        score=result.score,
        depth=result.depth,
        nodes=result.nodes,
    )
