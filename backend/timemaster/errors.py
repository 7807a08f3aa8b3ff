"""Error taxonomy shared by the stores, services and routers.

Each error carries the HTTP status it maps to; ``timemaster.main`` renders
them as ``{"error": message}``.
"""


class TimeMasterError(Exception):
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(TimeMasterError):
    """Missing or malformed required fields."""

    status_code = 400


class Unauthorized(TimeMasterError):
    """Missing, invalid or expired credential, or a failed login."""

    status_code = 401


class NotFound(TimeMasterError):
    """Unknown resource id within the caller's scope."""

    status_code = 404


class Conflict(TimeMasterError):
    """Duplicate email at registration."""

    status_code = 409


class InternalFault(TimeMasterError):
    """Storage could not complete the operation."""

    status_code = 500
