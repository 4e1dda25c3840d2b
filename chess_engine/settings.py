"""
Runtime settings for the protocol layers.

Tuning constants live in chess_engine.constants. This module only holds the
knobs an operator sets per deployment, read from the environment:

    CHESS_ENGINE_DEPTH       default search depth (clamped to MAX_DEPTH)
    CHESS_ENGINE_LOG_LEVEL   logging level name for the web service
"""

import os
from typing import Mapping

from pydantic import BaseModel, field_validator

from chess_engine.constants import DEFAULT_DEPTH, MAX_DEPTH


class Settings(BaseModel):
    """
    Deployment settings.

    Fields:
        default_depth: Depth used when a request does not name one. Values
                       above MAX_DEPTH are clamped; values below 1 are rejected.
        log_level:     Standard logging level name, e.g. "INFO" or "DEBUG".
    """

    default_depth: int = DEFAULT_DEPTH
    log_level: str = "INFO"

    @field_validator("default_depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Reject non-positive depths; clamp the rest to the search ceiling."""
        if v < 1:
            raise ValueError("default_depth must be at least 1")
        return min(v, MAX_DEPTH)

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables; unset keys keep their defaults."""
        environ = os.environ if environ is None else environ
        values: dict[str, str] = {}
        if "CHESS_ENGINE_DEPTH" in environ:
            values["default_depth"] = environ["CHESS_ENGINE_DEPTH"]
        if "CHESS_ENGINE_LOG_LEVEL" in environ:
            values["log_level"] = environ["CHESS_ENGINE_LOG_LEVEL"]
        return cls(**values)
