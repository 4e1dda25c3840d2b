"""
Position adapter: the engine's only window onto the rules engine.

The search core never re-derives legality. Move generation, move
application and undo, and every terminal-state query go through this
wrapper around python-chess. Search and move ordering mutate one shared
board in place (make/unmake) instead of copying it per branch; the
applied() context manager is the single way they do so, which guarantees
that every push is matched by exactly one pop on every exit path,
including early returns after an alpha-beta cutoff.

A "recognized draw" here is stalemate, insufficient material, threefold
repetition or the fifty-move rule. python-chess only ends the game
automatically on fivefold repetition and the seventy-five-move rule, so
the claimable draws are checked explicitly.
"""

from __future__ import annotations

import enum
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import chess

from chess_engine.errors import IllegalMoveError


class Outcome(enum.Enum):
    """Terminal-state classification of a position."""

    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    REPETITION = "repetition"
    INSUFFICIENT_MATERIAL = "insufficient_material"
    MOVE_RULE = "fifty_move_rule"

    @property
    def is_draw(self) -> bool:
        return self not in (Outcome.ONGOING, Outcome.CHECKMATE)


@dataclass(frozen=True)
class MoveRecord:
    """
    Result of applying a move through the notation-level entry points.

    Attributes:
        move:       The applied move.
        san:        Standard algebraic notation, computed before the push.
        piece_type: Type of the piece that moved.
        captured:   Type of the captured piece, or None. En passant
                    reports a pawn even though the target square was empty.
        promotion:  Promotion piece type, or None.
    """

    move: chess.Move
    san: str
    piece_type: int
    captured: int | None
    promotion: int | None


class Position:
    """
    Mutable game state owned by exactly one caller at a time.

    Wraps a chess.Board. When a board is passed in it is shared, not copied,
    so the caller sees every persistent move applied through the adapter.
    Search leaves it exactly as it found it.
    """

    def __init__(self, board: chess.Board | None = None, fen: str | None = None) -> None:
        if board is not None and fen is not None:
            raise ValueError("pass either a board or a FEN, not both")
        if board is None:
            # chess.Board raises ValueError on a malformed FEN.
            board = chess.Board(fen) if fen is not None else chess.Board()
        self._board = board

    @classmethod
    def coerce(cls, position: Position | chess.Board) -> Position:
        """Wrap a bare board; pass a Position through unchanged."""
        if isinstance(position, Position):
            return position
        return cls(board=position)

    @property
    def board(self) -> chess.Board:
        return self._board

    @property
    def side_to_move(self) -> chess.Color:
        return self._board.turn

    def fen(self) -> str:
        return self._board.fen()

    def copy(self) -> Position:
        """Independent copy, move stack included (repetition detection needs it)."""
        return Position(board=self._board.copy(stack=True))

    # -----------------------------------------------------------------------
    # Moves
    # -----------------------------------------------------------------------

    def legal_moves(self) -> list[chess.Move]:
        return list(self._board.legal_moves)

    def legal_move_count(self) -> int:
        return self._board.legal_moves.count()

    def apply(self, move: chess.Move) -> None:
        """Push a move. Raises IllegalMoveError if it is not legal here."""
        if not self._board.is_legal(move):
            raise IllegalMoveError(f"Illegal move: {move.uci()} in {self._board.fen()}")
        self._board.push(move)

    def undo(self) -> chess.Move:
        """Pop and return the last move."""
        if not self._board.move_stack:
            raise IllegalMoveError("No move to undo")
        return self._board.pop()

    @contextmanager
    def applied(self, move: chess.Move) -> Iterator[Position]:
        """
        Apply a move for the duration of a with-block.

        The move is undone when the block exits, however it exits. Moves
        passed here must come from legal_moves(); legality is not re-checked,
        since this sits on the hot path of the search.

        Example:
            >>> pos = Position()
            >>> with pos.applied(chess.Move.from_uci("e2e4")):
            ...     pos.side_to_move == chess.BLACK
            True
        """
        self._board.push(move)
        try:
            yield self
        finally:
            self._board.pop()

    def apply_san(self, text: str) -> MoveRecord:
        """Parse and apply a move written in SAN, e.g. "Nf3" or "exd5"."""
        try:
            move = self._board.parse_san(text)
        except ValueError as exc:
            raise IllegalMoveError(f"Invalid move: {text}") from exc
        return self._apply_recorded(move)

    def apply_uci(self, text: str) -> MoveRecord:
        """Parse and apply a move written in UCI, e.g. "e2e4" or "e7e8q"."""
        try:
            move = self._board.parse_uci(text)
        except ValueError as exc:
            raise IllegalMoveError(f"Invalid move: {text}") from exc
        return self._apply_recorded(move)

    def _apply_recorded(self, move: chess.Move) -> MoveRecord:
        record = MoveRecord(
            move=move,
            san=self._board.san(move),
            piece_type=self.moving_piece_type(move),
            captured=self.captured_piece_type(move),
            promotion=move.promotion,
        )
        self.apply(move)
        return record

    # -----------------------------------------------------------------------
    # Piece lookups
    # -----------------------------------------------------------------------

    def moving_piece_type(self, move: chess.Move) -> int:
        piece_type = self._board.piece_type_at(move.from_square)
        if piece_type is None:
            raise IllegalMoveError(f"No piece on {chess.square_name(move.from_square)}")
        return piece_type

    def captured_piece_type(self, move: chess.Move) -> int | None:
        """Type of the piece the move removes, or None for a quiet move."""
        if self._board.is_en_passant(move):
            return chess.PAWN
        if not self._board.is_capture(move):
            return None
        return self._board.piece_type_at(move.to_square)

    # -----------------------------------------------------------------------
    # Terminal-state queries
    # -----------------------------------------------------------------------

    def is_check(self) -> bool:
        return self._board.is_check()

    def is_checkmate(self) -> bool:
        return self._board.is_checkmate()

    def is_stalemate(self) -> bool:
        return self._board.is_stalemate()

    def is_draw(self) -> bool:
        return self.outcome().is_draw

    def is_terminal(self) -> bool:
        return self.outcome() is not Outcome.ONGOING

    def outcome(self) -> Outcome:
        # Checkmate takes precedence over the move rule and repetition.
        if not any(self._board.generate_legal_moves()):
            return Outcome.CHECKMATE if self._board.is_check() else Outcome.STALEMATE
        return self.rule_draw()

    def rule_draw(self) -> Outcome:
        """
        Draws that do not depend on the side to move being stuck.

        Assumes the side to move has at least one legal move; returns
        Outcome.ONGOING when none of the rule-based draws apply.
        """
        board = self._board
        if board.is_insufficient_material():
            return Outcome.INSUFFICIENT_MATERIAL
        if board.is_fifty_moves():
            return Outcome.MOVE_RULE
        if board.is_repetition(3):
            return Outcome.REPETITION
        return Outcome.ONGOING

    def snapshot(self) -> tuple:
        """
        Every comparable field of the position.

        The FEN carries placement, side to move, castling rights, the
        en-passant square and both move counters. The move stack is included
        too since repetition detection depends on it.
        """
        board = self._board
        return (
            board.fen(en_passant="fen"),
            board.castling_rights,
            board.ep_square,
            board.halfmove_clock,
            board.fullmove_number,
            tuple(board.move_stack),
        )

    def __str__(self) -> str:
        return str(self._board)

    def __repr__(self) -> str:
        return f"Position({self._board.fen()!r})"
