"""Error taxonomy and JSON error responses for the quote endpoint.

Input errors map to 400 and are raised before any side effect. Persistence
errors never leave the submission handler. Notification errors are the only
failure a valid submission can surface, always as a generic 500.
"""

from typing import List, Optional

from fastapi import Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quote_intake.core.logger import get_logger
from quote_intake.models.quote_response import ErrorResponse

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed. Use POST."
INVALID_JSON_MESSAGE = "Invalid JSON body."
NOTIFICATION_FAILED_MESSAGE = "Failed to send notification email. Please try again later."


class QuoteIntakeError(Exception):
    """Base exception for quote intake errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# -------------------------------------------------------------------
# Client input (400)
# -------------------------------------------------------------------
class ClientInputError(QuoteIntakeError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors


class InvalidJSONError(ClientInputError):
    def __init__(self):
        super().__init__(INVALID_JSON_MESSAGE)


class QuoteValidationError(ClientInputError):
    """Carries every validation failure; the first one is the headline."""

    def __init__(self, errors: List[str]):
        if not errors:
            raise ValueError("QuoteValidationError requires at least one error")
        super().__init__(errors[0], list(errors))


# -------------------------------------------------------------------
# Side effects
# -------------------------------------------------------------------
class PersistenceError(QuoteIntakeError):
    """Insert into the quotes table failed. Logged and swallowed by the handler."""


class NotificationError(QuoteIntakeError):
    """Notification email could not be sent. Fatal to the request."""


class NotificationConfigError(NotificationError):
    """Missing sender/recipient/api key, or an unsupported provider."""


class NotificationTransportError(NotificationError):
    """Provider answered non-2xx or could not be reached."""


# -------------------------------------------------------------------
# Responses
# -------------------------------------------------------------------
def cors_json_response(status_code: int, body: ErrorResponse | dict) -> JSONResponse:
    if isinstance(body, ErrorResponse):
        body = body.model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)


async def client_input_error_handler(request: Request, exc: ClientInputError) -> JSONResponse:
    return cors_json_response(
        exc.status_code,
        ErrorResponse(error=exc.message, errors=exc.errors),
    )


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != status.HTTP_405_METHOD_NOT_ALLOWED:
        return await http_exception_handler(request, exc)

    logger.warning(f"Rejected {request.method} {request.url.path}: method not allowed")
    return cors_json_response(
        status.HTTP_405_METHOD_NOT_ALLOWED,
        ErrorResponse(error=METHOD_NOT_ALLOWED_MESSAGE),
    )
