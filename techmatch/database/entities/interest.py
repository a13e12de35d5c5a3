"""
Interest ORM Model
==================

An expression of interest from a buyer in a patent. Maps to the
``interests`` table. ``buyer_name`` / ``buyer_email`` are captured from the
buyer's session at creation time so sellers can see who wrote without a join.
"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import TEXT, VARCHAR, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from techmatch.database.config.connection_engine import declarativeBase

INTEREST_STATUSES = ("pending", "accepted", "rejected")


class Interest(declarativeBase):
    """ORM model for the `interests` table."""

    __tablename__ = "interests"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    patent_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("patents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    buyer_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    buyer_name: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    buyer_email: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    message: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    status: Mapped[str] = mapped_column(VARCHAR(32), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(
        self,
        patent_id: UUID,
        buyer_id: UUID,
        buyer_name: str | None,
        buyer_email: str | None,
        message: str | None,
        status: str = "pending",
        interest_id: UUID | None = None,
        created_at: datetime | None = None,
    ):
        self.id = interest_id or uuid.uuid4()
        self.patent_id = patent_id
        self.buyer_id = buyer_id
        self.buyer_name = buyer_name
        self.buyer_email = buyer_email
        self.message = message
        self.status = status
        self.created_at = created_at or datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"Interest: id:{self.id}, patent: {self.patent_id}, buyer: {self.buyer_id}"
