import json
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from quote_intake.core.config import Settings, get_settings
from quote_intake.core.exceptions import (
    CORS_HEADERS,
    NOTIFICATION_FAILED_MESSAGE,
    InvalidJSONError,
    QuoteValidationError,
    cors_json_response,
)
from quote_intake.core.logger import get_logger
from quote_intake.models.quote_request import SubmissionMetadata
from quote_intake.models.quote_response import ErrorResponse, QuoteSubmittedResponse
from quote_intake.services.email_service import QuoteMailer, get_quote_mailer
from quote_intake.services.quote_store import QuoteStore, get_quote_store
from quote_intake.services.submission_service import (
    client_ip_from_headers,
    submit_quote,
    utc_timestamp,
)
from quote_intake.services.validation import validate_quote_payload

quote_router = APIRouter(prefix="/api", tags=["Quote"])

logger = get_logger(__name__)


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


@quote_router.options("/quote", status_code=status.HTTP_204_NO_CONTENT)
async def quote_preflight():
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)


@quote_router.post("/quote", response_model=QuoteSubmittedResponse)
async def create_quote(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: Optional[QuoteStore] = Depends(get_quote_store),
    mailer: QuoteMailer = Depends(get_quote_mailer),
):
    try:
        payload = json.loads(await request.body(), parse_constant=_reject_constant)
    except ValueError:
        logger.warning("Rejected quote request with malformed JSON body")
        raise InvalidJSONError()

    try:
        quote = validate_quote_payload(payload)
    except QuoteValidationError as e:
        logger.warning(f"Rejected quote request: {e.errors}")
        raise

    metadata = SubmissionMetadata(
        submitted_at=utc_timestamp(),
        ip_address=client_ip_from_headers(request.headers),
    )
    logger.info(f"Quote request from {quote.email} ({metadata.ip_address or 'unknown ip'})")

    try:
        await submit_quote(quote, metadata, store, mailer)
    except Exception as e:
        logger.error(f"Failed to send quote notification for {quote.email}: {e}")
        return cors_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error=NOTIFICATION_FAILED_MESSAGE,
                details=str(e) if settings.DEBUG_EMAIL_ERRORS else None,
            ),
        )

    return cors_json_response(status.HTTP_200_OK, QuoteSubmittedResponse().model_dump())
