class GameError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidConfigurationError(GameError, ValueError):
    pass


class ValidationError(GameError, ValueError):
    pass


class GameOverError(ValidationError):
    pass


class GameNotFoundError(GameError, LookupError):
    status_code = 404


class TurnViolationError(GameError, ValueError):
    pass


class IllegalMoveError(GameError, ValueError):
    pass


class NoValidMovesError(RuntimeError):
    """Raised when a move is requested on a board with no empty cell."""
