"""Exception types raised by the engine and its session layer."""


class EngineError(Exception):
    """Base class for every error raised by this package."""


class IllegalMoveError(EngineError, ValueError):
    """A move could not be parsed, is not legal here, or there is nothing to undo."""


class GameNotFoundError(EngineError, KeyError):
    """No game session exists under the requested id."""

    def __init__(self, game_id: str) -> None:
        super().__init__(game_id)
        self.game_id = game_id

    def __str__(self) -> str:
        return f"Game not found: {self.game_id}"


class GameOverError(EngineError):
    """A move was requested for a game that has already ended."""
