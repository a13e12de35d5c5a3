"""
Message ORM Model
=================

A direct message between two users, optionally about a patent. Maps to the
``messages`` table.

Key features
~~~~~~~~~~~~
- ``sender_id`` / ``receiver_id`` identify the two parties; the receiver is
  stored as given (no existence check)
- Optional ``patent_id`` reference
- ``is_read`` flag, flipped only by the receiver
"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import TEXT, VARCHAR, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from techmatch.database.config.connection_engine import declarativeBase


class Message(declarativeBase):
    """
    ORM model for the `messages` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    sender_id : UUID
        Author of the message.
    receiver_id : UUID
        Recipient of the message.
    patent_id : UUID | None
        Patent the conversation is about.
    subject : str | None
        Subject line.
    content : str | None
        Message body.
    is_read : bool
        Whether the receiver has read the message.
    created_at : datetime
        Send timestamp (UTC).
    """

    __tablename__ = "messages"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    """Primary key. UUID of the message."""

    sender_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    """Id of the sending user."""

    receiver_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    """Id of the receiving user."""

    patent_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("patents.id", ondelete="SET NULL"), nullable=True
    )
    """Optional patent reference."""

    subject: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    """Subject line."""

    content: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    """Body of the message."""

    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    """Read flag, only the receiver may set it."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    """Timestamp when the message was sent."""

    def __init__(
        self,
        sender_id: UUID,
        receiver_id: UUID,
        subject: str | None,
        content: str | None,
        patent_id: UUID | None = None,
        is_read: bool = False,
        message_id: UUID | None = None,
        created_at: datetime | None = None,
    ):
        self.id = message_id or uuid.uuid4()
        self.sender_id = sender_id
        self.receiver_id = receiver_id
        self.patent_id = patent_id
        self.subject = subject
        self.content = content
        self.is_read = is_read
        self.created_at = created_at or datetime.now(timezone.utc)

    def __str__(self) -> str:
        return (
            f"Message: id:{self.id}, "
            f"from: {self.sender_id}, "
            f"to: {self.receiver_id}, "
            f"read: {self.is_read}"
        )
