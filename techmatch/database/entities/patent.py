"""
Patent ORM Model
================

The ``Patent`` ORM model represents a patent listing offered on the
marketplace. It maps to the ``patents`` table.

Lifecycle
~~~~~~~~~
- Created by its owner with ``status="available"`` and ``approval_status="pending"``.
- ``approval_status`` moves to ``approved`` / ``rejected`` only through admin actions.
- Mutable fields (title, description, problem, usage, advantage, category,
  patent_number, price, status) change only through the owner.
- Public listings show only ``approval_status == "approved"`` rows.

``owner_id`` is nullable for legacy rows imported without an owner.
"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import TEXT, VARCHAR, DateTime, Float, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from techmatch.database.config.connection_engine import declarativeBase
from techmatch.database.entities.user import User

AVAILABILITY_STATUSES = ("available", "negotiation")
APPROVAL_STATUSES = ("pending", "approved", "rejected")


class Patent(declarativeBase):
    """
    ORM model for the `patents` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    title, description, problem, usage, advantage : str | None
        Listing text fields.
    category : str | None
        Technology category slug.
    patent_number : str | None
        Official patent / application number.
    price : float
        Asking price, never negative.
    status : str
        Availability (``available`` or ``negotiation``).
    approval_status : str
        Review state (``pending``, ``approved``, ``rejected``).
    owner_id : UUID | None
        Owning user; null only for legacy rows.
    owner_name : str | None
        Owner display name captured at creation.
    image : str | None
        Relative URL of the uploaded image (``/uploads/<file>``).
    created_at : datetime
        Creation timestamp (UTC).
    """

    __tablename__ = "patents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    description: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    problem: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    usage: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    advantage: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    category: Mapped[str | None] = mapped_column(VARCHAR(64), nullable=True, index=True)
    patent_number: Mapped[str | None] = mapped_column(VARCHAR(64), nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(VARCHAR(32), nullable=False, default="available")
    approval_status: Mapped[str] = mapped_column(VARCHAR(32), nullable=False, default="pending", index=True)
    owner_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    owner_name: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    image: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    owner: Mapped[User | None] = relationship(User, lazy="select")
    """Owning user row, used by the admin review listing."""

    def __init__(
        self,
        title: str | None,
        description: str | None,
        category: str | None,
        price: float,
        owner_id: UUID | None,
        owner_name: str | None = None,
        problem: str | None = None,
        usage: str | None = None,
        advantage: str | None = None,
        patent_number: str | None = None,
        image: str | None = None,
        status: str = "available",
        approval_status: str = "pending",
        patent_id: UUID | None = None,
        created_at: datetime | None = None,
    ):
        self.id = patent_id or uuid.uuid4()
        self.title = title
        self.description = description
        self.problem = problem
        self.usage = usage
        self.advantage = advantage
        self.category = category
        self.patent_number = patent_number
        self.price = price
        self.status = status
        self.approval_status = approval_status
        self.owner_id = owner_id
        self.owner_name = owner_name
        self.image = image
        self.created_at = created_at or datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"Patent: id:{self.id}, title: {self.title}, approval: {self.approval_status}"
