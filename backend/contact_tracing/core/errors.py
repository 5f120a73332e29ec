"""Error taxonomy shared by the services, stores and HTTP layer.

Every error carries the HTTP status the API answers with, so routes can
simply let them propagate to the handlers registered in ``main.py``.
"""


class ContactTracingError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(ContactTracingError):
    """Caller supplied a missing or out-of-domain value."""

    status_code = 400


class Unauthorized(ContactTracingError):
    """No usable bearer token on the request."""

    status_code = 401


class Forbidden(ContactTracingError):
    status_code = 403


class NotFound(ContactTracingError):
    status_code = 404


class Conflict(ContactTracingError):
    status_code = 409


class DependencyFailure(ContactTracingError):
    """A store collaborator could not complete its operation.

    The message is logged but never shown to callers, who get a generic
    ``server error``.
    """

    status_code = 500
