"""
Exceptions used across layers.

The engine never raises for expected game conditions (illegal move, game over): those are returned as a rejection.
The exceptions below signal programming errors / malformed input caught at a boundary, or are raised by the service
layer to its own callers.
"""


class ChessError(Exception):
    """Base class for all errors raised by this package."""


class InvalidSquareError(ChessError, ValueError):
    """A coordinate outside the board or a malformed square name."""


class InvalidFENError(ChessError, ValueError):
    """The piece placement string cannot be interpreted."""


class InvalidRequestError(ChessError):
    """Request data failed validation at the service boundary."""


class GameError(ChessError):
    """Base class for errors the service layer raises about a specific game."""


class GameNotFoundError(GameError):
    """No game registered under the requested id."""


class IllegalMoveError(GameError):
    """The engine rejected the move."""


class GameOverError(GameError):
    """The game already reached checkmate or stalemate."""


class NothingToUndoError(GameError):
    """Undo was requested before any move was made."""
