"""Exception types shared across the Wine API."""


class WineApiError(Exception):
    """Base class for errors raised by the Wine API core."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
