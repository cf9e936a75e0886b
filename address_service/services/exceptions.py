"""Errors raised by the address service."""


class AddressServiceError(Exception):
    """Base class for service errors carrying a static client-facing message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InternalServerError(AddressServiceError):
    """Unexpected store failure. The message never reveals the cause."""

    status_code = 500


class NotFoundError(AddressServiceError):
    """A mutation targeted no existing row."""

    status_code = 404
