"""Custom HTTP exceptions for the Fanout API.

Each exception maps to a specific HTTP status code and error code.
Global exception handlers in api/main.py convert these to ErrorResponse.
"""


class FanoutError(Exception):
    """Base exception for all Fanout errors."""

    status_code: int = 500
    code: str = "internal_error"
    message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None, detail: dict[str, object] | None = None):
        self.message = message or self.__class__.message
        self.detail = detail
        super().__init__(self.message)


class UnauthorisedError(FanoutError):
    status_code = 401
    code = "unauthorised"
    message = "Authentication required."


class ValidationError(FanoutError):
    status_code = 422
    code = "unprocessable_entity"
    message = "Request could not be processed."


class InvalidEventNameError(ValidationError):
    code = "invalid_event_name"
    message = "Event names must not contain line breaks."
