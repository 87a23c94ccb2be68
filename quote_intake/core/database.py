"""Database engine, session factory and declarative base.

Persistence is optional: with no DATABASE_URL configured there is no engine
and quote submissions are not stored.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from quote_intake.core.config import settings
from quote_intake.core.logger import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def create_session_factory(
    database_url: str, echo: bool = False
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(database_url, echo=echo)
    return engine, async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine: Optional[AsyncEngine] = None
async_session: Optional[async_sessionmaker[AsyncSession]] = None

if settings.DATABASE_URL:
    engine, async_session = create_session_factory(
        settings.DATABASE_URL, echo=settings.DATABASE_ECHO
    )


async def init_models(bind: Optional[AsyncEngine] = None) -> None:
    """Create the quotes table if it does not exist yet."""
    # Registers QuoteRecord on Base.metadata
    from quote_intake.models.quote_record import QuoteRecord  # noqa: F401

    bind = bind or engine
    if bind is None:
        return
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
