"""
Exceptions shared by the domain, service and api layers.

NOTE: Square/move related errors are normally answered with a benign value (False, [], None).
They only get raised by the explicit validation helpers, so that callers can report *why* a move got refused.
"""


class GameError(Exception):
    """Base class for everything the chess backend raises on purpose."""


# --- MOVE VALIDATION ---
class InvalidSquareError(GameError):
    """Square lies outside of the board (or could not be parsed)."""


class NoPieceAtSourceError(GameError):
    """Nothing to move on the requested starting square."""


class IllegalMoveError(GameError):
    """Destination is not in the legal move set of the piece."""


class NotYourTurnError(GameError):
    """The piece belongs to the player that is not to move."""


# --- STATE INTERCHANGE ---
class MalformedEncodingTokenError(GameError):
    """A token in an exported game could not be parsed. Indicates corrupted input."""

    def __init__(self, token: str, detail: str = "") -> None:
        self.token = token
        message = f"Cannot interpret token {token!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# --- OUTER LAYERS ---
class InvalidRequestError(GameError):
    """Raised by request model validators. Deliberately not a ValueError, so pydantic does not wrap it."""


class RepositoryError(GameError):
    """Game record could not be found / stored."""
