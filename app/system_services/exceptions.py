# app/system_services/exceptions.py
"""
Booking engine errors.
Each carries the HTTP status the request boundary answers with.
"""


class BookingError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFormatError(BookingError):
    status_code = 400


class PastDateError(BookingError):
    status_code = 400

    def __init__(self, message: str = "Cannot book appointments for past dates."):
        super().__init__(message)


class SlotUnavailableError(BookingError):
    status_code = 400

    def __init__(self, message: str = "Selected slot is not available"):
        super().__init__(message)


class InvalidTransitionError(BookingError):
    status_code = 400


class NotFoundError(BookingError):
    """Missing record, or a record the caller may not touch in its current state."""
    status_code = 404
