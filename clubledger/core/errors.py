"""
Domain errors raised by services and translated into HTTP responses by the app exception handler.
"""


class ClubLedgerError(Exception):
    """Base class for domain errors. `title` is the short notification heading."""

    title = "Operation failed"

    def __init__(self, message: str, title: str | None = None):
        super().__init__(message)
        self.message = message
        if title:
            self.title = title


class NotFoundError(ClubLedgerError):
    title = "Not found"


class DuplicateIngredientError(ClubLedgerError):
    title = "Duplicate ingredient"


class IngredientInUseError(ClubLedgerError):
    title = "Ingredient in use"


STATUS_CODES = {
    NotFoundError: 404,
    DuplicateIngredientError: 400,
    IngredientInUseError: 409,
}


def status_code_for(exc: ClubLedgerError) -> int:
    for error_type, code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return code
    return 400
