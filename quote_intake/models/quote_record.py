"""QuoteRecord: one stored quote form submission (append-only)."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quote_intake.core.database import Base


class QuoteRecord(Base):
    __tablename__ = "quotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255))
    pickup: Mapped[str] = mapped_column(Text, nullable=False)
    delivery: Mapped[str] = mapped_column(Text, nullable=False)
    freight_type: Mapped[str] = mapped_column(Text, nullable=False)  # JSON array string
    ip_address: Mapped[str | None] = mapped_column(String(64))
    submitted_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO-8601
