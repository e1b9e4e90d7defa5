"""Exception hierarchy for the snake simulation."""

from __future__ import annotations


class RetroSnakeError(Exception):
    """Base class for all package errors."""


class InvalidConfigError(RetroSnakeError, ValueError):
    """Raised when an engine configuration cannot produce a playable game."""


class GridFullError(RetroSnakeError, ValueError):
    """Raised when food cannot be placed because the snake fills the grid."""
