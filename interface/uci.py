"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that allows chess GUIs and testing
tools (like cutechess-cli) to communicate with chess engines. The engine
reads commands from stdin and writes responses to stdout. All output lines
must be flushed immediately; GUI programs read line by line.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, position, go, stop, quit
    Engine → GUI: id name, id author, uciok, readyok, info, bestmove

Search model:
    The engine searches to a fixed depth and has no clock and no
    cancellation, so "go" runs the search synchronously and replies before
    the next command is read. Time-control tokens (wtime, movetime, ...) are
    accepted and ignored; only "depth N" is honoured, clamped to MAX_DEPTH.
    "stop" is a no-op because a search is never running when it arrives.

Critical rule: NEVER print to stdout except for valid UCI responses.
Debug output goes to stderr.
"""

import sys
import time
from typing import Callable, TextIO

import chess

from chess_engine.search import clamp_depth, search_root


def _send(line: str) -> None:
    """Write a UCI response line to stdout and flush immediately."""
    print(line, flush=True)


def _log(message: str) -> None:
    """
    Write a debug/error message to stderr.

    In UCI mode, stdout is reserved for valid protocol messages; anything
    else sent there corrupts the protocol.
    """
    print(message, file=sys.stderr, flush=True)


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board: The current position, updated by "position" commands.
        send:  Output callback, one protocol line per call. Defaults to
               stdout; tests pass a list's append.
    """

    def __init__(self, send: Callable[[str], None] = _send) -> None:
        self.board: chess.Board = chess.Board()
        self.send = send

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine. There are no configurable options."""
        self.send("id name ChessEngine-AlphaBeta")
        self.send("id author Chess Engine Project")
        self.send("uciok")

    def handle_isready(self) -> None:
        self.send("readyok")

    def handle_ucinewgame(self) -> None:
        self.board = chess.Board()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos
            position startpos moves e2e4 e7e5 ...
            position fen <FEN>
            position fen <FEN> moves e2e4 e7e5 ...

        An illegal move in the list stops the replay at the last legal
        position; a malformed FEN leaves the previous position in place.

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return

        if tokens[0] == "startpos":
            board = chess.Board()
            move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
        elif tokens[0] == "fen":
            # FEN strings have 6 space-separated fields; find where "moves" appears
            if "moves" in tokens:
                moves_idx = tokens.index("moves")
                fen = " ".join(tokens[1:moves_idx])
                move_tokens = tokens[moves_idx + 1:]
            else:
                fen = " ".join(tokens[1:])
                move_tokens = []
            try:
                board = chess.Board(fen)
            except ValueError as e:
                _log(f"uci: invalid FEN in position command: {e}")
                return
        else:
            _log(f"uci: unknown position type: {tokens[0]}")
            return

        # Replay the move list so repetition detection sees the history.
        for uci_move in move_tokens:
            try:
                move = chess.Move.from_uci(uci_move)
            except ValueError:
                move = None
            if move is None or move not in board.legal_moves:
                _log(f"uci: illegal move in position command: {uci_move}")
                break
            board.push(move)

        self.board = board

    def handle_go(self, tokens: list[str]) -> None:
        """
        Search the current position and reply with info and bestmove.

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        depth = self._parse_go_depth(tokens)
        start = time.monotonic()
        result = search_root(self.board, depth)
        elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

        if result.move is None:
            # No legal moves: checkmate or stalemate. UCI still requires a reply.
            self.send("bestmove (none)")
            return

        # UCI scores are from the engine's point of view, ours are White-frame.
        score = result.score if self.board.turn == chess.WHITE else -result.score
        nps = max(1, result.nodes * 1000 // elapsed_ms)
        self.send(
            f"info depth {result.depth} score cp {score} "
            f"nodes {result.nodes} nps {nps} time {elapsed_ms}"
        )
        self.send(f"bestmove {result.move.uci()}")

    def _parse_go_depth(self, tokens: list[str]) -> int:
        """Return the clamped "depth N" value, or the default depth."""
        if "depth" in tokens:
            idx = tokens.index("depth")
            try:
                return clamp_depth(int(tokens[idx + 1]))
            except (ValueError, IndexError):
                _log(f"uci: bad depth in go command: {' '.join(tokens)}")
        return clamp_depth(None)


def run_uci_loop(stream: TextIO | None = None, handler: UciHandler | None = None) -> None:
    """
    Main UCI protocol loop.

    Reads lines from the stream (stdin by default) and dispatches each
    command to the handler. Returns on "quit" or end of input.

    Each command is wrapped in a try/except so that a bug in one handler
    does not crash the engine; errors go to stderr and the loop continues.
    """
    handler = handler or UciHandler()
    stream = stream or sys.stdin

    for raw_line in stream:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        if command == "quit":
            return

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                pass
            else:
                # Unknown commands are ignored per the UCI specification.
                _log(f"uci: ignoring unknown command: {command!r}")

        except Exception as e:
            _log(f"uci: unhandled error for command {command!r}: {e}")


if __name__ == "__main__":
    run_uci_loop()
