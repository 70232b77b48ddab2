"""Errors raised by the scheduling core."""


class InvalidDayError(ValueError):
    """A day number was negative."""


class CardNotFoundError(LookupError):
    """The card is not present in any bucket."""

    def __init__(self, message: str = "Card not found"):
        super().__init__(message)
