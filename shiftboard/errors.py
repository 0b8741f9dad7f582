"""Error taxonomy shared by the store, the API and the client."""

from __future__ import annotations


class ShiftboardError(Exception):
    """Base class for expected, request-local failures."""


class NotFound(ShiftboardError):
    def __init__(self, shift_id: int) -> None:
        super().__init__(f"Shift {shift_id} not found.")
        self.shift_id = shift_id


class ValidationFailed(ShiftboardError):
    """A candidate record violated one or more field rules.

    ``errors`` holds full, human readable messages in field order, e.g.
    ``"End time must be after start time"``.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors) or "Validation failed.")
        self.errors = list(errors)


class TransportFailure(ShiftboardError):
    """The API could not be reached or answered with an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
