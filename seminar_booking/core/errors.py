"""Error kinds raised by the booking core.

Services raise these; the HTTP layer turns them into a status code and a
``{"error": ..., "kind": ...}`` body. Nothing here is retried.
"""


class BookingError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class ValidationError(BookingError):
    """Malformed input: time format, purpose length, past date, end <= start."""

    kind = "validation"
    status_code = 400


class NotFoundError(BookingError):
    kind = "not_found"
    status_code = 404


class ForbiddenError(BookingError):
    """Role or ownership rule violated."""

    kind = "forbidden"
    status_code = 403


class ConflictError(BookingError):
    """The request would break a uniqueness or no-overlap rule in stored data."""

    kind = "conflict"
    status_code = 409


class PersistenceError(BookingError):
    kind = "persistence"
    status_code = 500


class AuthenticationError(BookingError):
    kind = "unauthorized"
    status_code = 401


SLOT_TAKEN = "This time slot is already booked or conflicts with an existing booking"
