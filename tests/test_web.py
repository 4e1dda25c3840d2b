import chess
import pytest
from fastapi.testclient import TestClient

from chess_engine.errors import GameNotFoundError, GameOverError, IllegalMoveError
import web.games
from web.app import BestMoveRequest, PositionRequest, app, store
from web.games import GameStore

from conftest import FENS


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _new_game(client: TestClient, **body) -> dict:
    r = client.post("/api/games", json=body)
    assert r.status_code == 200
    return r.json()


# ---------------------------------------------------------------------------
# GameStore
# ---------------------------------------------------------------------------


def test_store_create_generates_ids():
    games = GameStore()
    first = games.create()
    second = games.create()
    assert first != second
    assert len(games) == 2


def test_store_create_with_same_id_replaces_game():
    games = GameStore()
    games.create("g1")
    games.make_move("g1", "e4")
    games.create("g1")
    assert games.state("g1")["fen"] == chess.STARTING_FEN
    assert len(games) == 1


def test_store_accepts_san_or_uci():
    games = GameStore()
    games.create("g")
    assert games.make_move("g", "e4").san == "e4"
    assert games.make_move("g", "e7e5").san == "e5"
    with pytest.raises(IllegalMoveError):
        games.make_move("g", "Ke3")


def test_store_unknown_game():
    games = GameStore()
    with pytest.raises(GameNotFoundError):
        games.legal_moves("missing")
    with pytest.raises(GameNotFoundError):
        games.delete("missing")


def test_store_best_move_searches_a_copy():
    games = GameStore()
    games.create("g", FENS["white_mates_in_one"])
    result, san, fen = games.best_move("g", 1)
    assert san == "Rd8#"
    assert fen == FENS["white_mates_in_one"]
    assert result.move == chess.Move.from_uci("d1d8")
    assert games.state("g")["fen"] == FENS["white_mates_in_one"]


def test_store_best_move_can_play():
    games = GameStore()
    games.create("g", FENS["white_mates_in_one"])
    _, _, fen = games.best_move("g", 1, play=True)
    assert games.state("g")["outcome"] == "checkmate"
    assert fen == games.state("g")["fen"]
    with pytest.raises(GameOverError):
        games.best_move("g", 1)


# ---------------------------------------------------------------------------
# Session routes
# ---------------------------------------------------------------------------


def test_create_game_and_get_state(client):
    body = _new_game(client)
    assert body["fen"] == chess.STARTING_FEN
    assert body["turn"] == "white"
    assert body["outcome"] == "ongoing"
    assert len(body["legal_moves"]) == 20

    r = client.get(f"/api/games/{body['game_id']}")
    assert r.status_code == 200
    assert r.json()["game_id"] == body["game_id"]


def test_create_game_with_bad_fen_is_400(client):
    r = client.post("/api/games", json={"fen": "not a fen"})
    assert r.status_code == 400


def test_unknown_game_is_404(client):
    assert client.get("/api/games/does-not-exist").status_code == 404
    assert client.get("/api/games/does-not-exist/legal-moves").status_code == 404
    assert client.post("/api/games/does-not-exist/moves", json={"move": "e4"}).status_code == 404
    assert client.post("/api/games/does-not-exist/best-move", json={}).status_code == 404


def test_legal_moves_are_san(client):
    game_id = _new_game(client, game_id="legal")["game_id"]
    r = client.get(f"/api/games/{game_id}/legal-moves")
    assert r.status_code == 200
    assert "Nf3" in r.json()["legal_moves"]


def test_play_moves_and_undo(client):
    game_id = _new_game(client)["game_id"]

    r = client.post(f"/api/games/{game_id}/moves", json={"move": "e4"})
    assert r.status_code == 200
    assert r.json()["played"] == "e4"
    assert r.json()["uci"] == "e2e4"
    assert r.json()["turn"] == "black"

    r = client.post(f"/api/games/{game_id}/moves", json={"move": "Qh5"})
    assert r.status_code == 400

    r = client.post(f"/api/games/{game_id}/undo")
    assert r.status_code == 200
    assert r.json()["fen"] == chess.STARTING_FEN

    r = client.post(f"/api/games/{game_id}/undo")
    assert r.status_code == 400


def test_best_move_for_session(client):
    game_id = _new_game(client, fen=FENS["white_mates_in_one"])["game_id"]
    r = client.post(f"/api/games/{game_id}/best-move", json={"depth": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["move"] == "d1d8"
    assert body["san"] == "Rd8#"
    assert body["depth"] == 1
    assert body["fen"] == FENS["white_mates_in_one"]


def test_best_move_play_applies_move(client):
    game_id = _new_game(client, fen=FENS["pawn_takes_queen"])["game_id"]
    r = client.post(f"/api/games/{game_id}/best-move", json={"depth": 1, "play": True})
    assert r.status_code == 200
    assert r.json()["move"] == "e4d5"
    assert client.get(f"/api/games/{game_id}").json()["turn"] == "black"


def test_game_deleted_during_search_still_answers(client, monkeypatch):
    game_id = _new_game(client, fen=FENS["white_mates_in_one"])["game_id"]
    real_search = web.games.search_root

    def search_then_delete(position, depth=None):
        store.delete(game_id)
        return real_search(position, depth)

    monkeypatch.setattr(web.games, "search_root", search_then_delete)
    r = client.post(f"/api/games/{game_id}/best-move", json={"depth": 1})
    assert r.status_code == 200
    assert r.json()["move"] == "d1d8"
    assert r.json()["fen"] == FENS["white_mates_in_one"]


def test_deleted_game_cannot_play_searched_move(client, monkeypatch):
    game_id = _new_game(client, fen=FENS["white_mates_in_one"])["game_id"]
    real_search = web.games.search_root

    def search_then_delete(position, depth=None):
        store.delete(game_id)
        return real_search(position, depth)

    monkeypatch.setattr(web.games, "search_root", search_then_delete)
    r = client.post(f"/api/games/{game_id}/best-move", json={"depth": 1, "play": True})
    assert r.status_code == 404


def test_best_move_depth_is_clamped(client):
    game_id = _new_game(client, fen=FENS["rook_ending"])["game_id"]
    r = client.post(f"/api/games/{game_id}/best-move", json={"depth": 50})
    assert r.status_code == 200
    assert r.json()["depth"] == 3


def test_best_move_on_finished_game_is_409(client):
    game_id = _new_game(client, fen=FENS["stalemate"])["game_id"]
    r = client.post(f"/api/games/{game_id}/best-move", json={"depth": 1})
    assert r.status_code == 409


def test_delete_game(client):
    game_id = _new_game(client)["game_id"]
    assert client.delete(f"/api/games/{game_id}").status_code == 200
    assert client.delete(f"/api/games/{game_id}").status_code == 404
    with pytest.raises(GameNotFoundError):
        store.state(game_id)


# ---------------------------------------------------------------------------
# Stateless route
# ---------------------------------------------------------------------------


def test_api_move_returns_applied_move(client):
    r = client.post("/api/move", json={"fen": FENS["black_mates_in_one"], "depth": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["move"] == "d8d1"
    assert body["score"] == -99_999
    assert chess.Board(body["fen"]).is_checkmate()


def test_api_move_bad_fen_is_400(client):
    assert client.post("/api/move", json={"fen": "garbage"}).status_code == 400


def test_api_move_finished_game_is_400(client):
    r = client.post("/api/move", json={"fen": FENS["white_mated"], "depth": 1})
    assert r.status_code == 400
    assert "over" in r.json()["detail"]


def test_request_depth_uses_search_clamp():
    assert BestMoveRequest(depth=0).depth == 1
    assert BestMoveRequest(depth=9).depth == 3
    assert BestMoveRequest().depth is None
    assert PositionRequest(fen=chess.STARTING_FEN, depth=-2).depth == 1
