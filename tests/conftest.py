import chess
import pytest

from chess_engine.position import Position

# Named positions shared across test modules.
FENS = {
    "start": chess.STARTING_FEN,
    # 1.f3 e5 2.g4 Qh4#: White is checkmated.
    "white_mated": "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
    # Queen and king box in the black king: Black is checkmated.
    "black_mated": "7k/6Q1/6K1/8/8/8/8/8 b - - 0 1",
    # Black to move, not in check, no legal moves.
    "stalemate": "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1",
    "bare_kings": "8/8/8/8/8/8/8/4K2k w - - 0 1",
    "fifty_moves": "7k/8/8/8/8/8/8/R6K w - - 100 80",
    # Back-rank mates in one: Rd8# for White, Rd1# for Black.
    "white_mates_in_one": "6k1/5ppp/8/8/8/8/5PPP/3R2K1 w - - 0 1",
    "black_mates_in_one": "3r2k1/5ppp/8/8/8/8/5PPP/6K1 b - - 0 1",
    # Rd8# mates at once; axb3 wins the queen but only mates later.
    "mate_or_queen": "7k/8/6K1/1p6/2B5/1q6/P7/3R4 w - - 0 1",
    # White pawn on e4 can take the queen on d5.
    "pawn_takes_queen": "4k3/8/8/3q4/4P3/8/8/4K3 w - - 0 1",
    "en_passant": "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
    "castling": "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1",
    "promotion": "8/P6k/8/8/8/8/8/4K3 w - - 0 1",
    "italian": "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3",
    "rook_ending": "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1",
}


@pytest.fixture
def start() -> Position:
    return Position()


@pytest.fixture
def position_for():
    """Factory: position_for("stalemate") -> fresh Position."""
    def _make(name: str) -> Position:
        return Position(fen=FENS[name])
    return _make
