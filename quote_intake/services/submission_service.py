from datetime import datetime, timezone
from typing import Mapping, Optional

from quote_intake.core.logger import get_logger
from quote_intake.models.quote_request import QuoteRequest, SubmissionMetadata
from quote_intake.services.email_service import QuoteMailer
from quote_intake.services.quote_store import QuoteStore

logger = get_logger(__name__)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix, e.g. 2026-10-19T08:15:30.123Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def client_ip_from_headers(headers: Mapping[str, str]) -> Optional[str]:
    """Best-effort client IP from proxy headers; None when no header carries one."""
    cf_ip = (headers.get("cf-connecting-ip") or "").strip()
    if cf_ip:
        return cf_ip

    forwarded = (headers.get("x-forwarded-for") or "").split(",")[0].strip()
    if forwarded:
        return forwarded

    return (headers.get("x-real-ip") or "").strip() or None


async def submit_quote(
    quote: QuoteRequest,
    metadata: SubmissionMetadata,
    store: Optional[QuoteStore],
    mailer: QuoteMailer,
) -> None:
    """
    Store the quote (best-effort), then send the notification email (required).

    Store failures are logged and dropped; the email is the record of truth.
    Notification failures propagate to the caller.
    """
    if store is None:
        logger.debug("No database configured, quote not stored")
    else:
        try:
            await store.save(quote, metadata)
        except Exception as e:
            logger.exception(f"Database storage error for quote from {quote.email}: {e}")

    await mailer.send_quote(quote, metadata.submitted_at)
    logger.info(f"Quote notification sent for {quote.email} ({', '.join(quote.freight_type)})")
