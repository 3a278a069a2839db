"""Application exceptions.

Each exception carries the HTTP status the API layer reports it with.
"""


class DevAgendaError(Exception):
    """Base exception for application errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DevAgendaError):
    """Missing or invalid input."""

    status_code = 400


class AuthenticationError(DevAgendaError):
    """No caller identity on the request."""

    status_code = 401


class NotFoundError(DevAgendaError):
    """Requested entity is absent or not owned by the caller."""

    status_code = 404


class UpstreamError(DevAgendaError):
    """GitHub or database failure."""

    status_code = 500
