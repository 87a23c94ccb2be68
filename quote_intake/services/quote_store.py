import json
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quote_intake.core import database
from quote_intake.core.exceptions import PersistenceError
from quote_intake.core.logger import get_logger
from quote_intake.models.quote_record import QuoteRecord
from quote_intake.models.quote_request import QuoteRequest, SubmissionMetadata

logger = get_logger(__name__)


def build_quote_record(quote: QuoteRequest, metadata: SubmissionMetadata) -> QuoteRecord:
    return QuoteRecord(
        name=quote.name,
        email=quote.email,
        phone=quote.phone,
        company=quote.company,
        pickup=quote.pickup,
        delivery=quote.delivery,
        # Compact form, e.g. ["Frozen","Chilled"]
        freight_type=json.dumps(quote.freight_type, separators=(",", ":"), ensure_ascii=False),
        ip_address=metadata.ip_address,
        submitted_at=metadata.submitted_at,
    )


class QuoteStore:
    """Appends quote submissions to the quotes table. One insert per call, no retry."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def save(self, quote: QuoteRequest, metadata: SubmissionMetadata) -> int:
        record = build_quote_record(quote, metadata)
        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to store quote from {quote.email}: {e}") from e

        logger.info(f"Stored quote {record.id} from {quote.email}")
        return record.id


def get_quote_store() -> Optional[QuoteStore]:
    if database.async_session is None:
        return None
    return QuoteStore(database.async_session)
