"""Custom exceptions. Everything the engine raises on purpose derives from GameError."""


class GameError(Exception):
    """Base class for all errors raised by the chess engine."""


class MalformedLayoutError(GameError):
    """The board layout string does not describe a valid 8x8 placement of pieces."""


class InvalidRequestError(GameError):
    """A request coming in from the UI layer could not be interpreted."""
