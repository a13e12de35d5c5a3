"""
User ORM Model
==============

The ``User`` ORM model represents a registered marketplace account. It maps to
the ``users`` table.

Key features
~~~~~~~~~~~~
- UUID primary key (``id``)
- Unique email used as the login identifier
- bcrypt password hash (never the plaintext)
- Role: ``buyer``, ``seller`` or ``admin``
- Optional organization (company / university / lab)
"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import TEXT, VARCHAR, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from techmatch.database.config.connection_engine import declarativeBase

ADMIN_ROLE = "admin"
USER_ROLES = ("buyer", "seller", ADMIN_ROLE)
"""Roles accepted at registration."""


class User(declarativeBase):
    """
    ORM model for the `users` table.

    Attributes
    ----------
    id : UUID
        Primary key.
    email : str
        Unique email address (login identifier).
    password : str
        bcrypt hash of the user's password.
    name : str
        Display name.
    role : str
        One of ``USER_ROLES``.
    organization : str | None
        Affiliation shown to counterparties and admins.
    created_at : datetime
        Registration timestamp (UTC).
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    """Primary key. UUID of the user."""

    email: Mapped[str] = mapped_column(VARCHAR(255), nullable=False, unique=True, index=True)
    """Email address of the user (unique)."""

    password: Mapped[str] = mapped_column(TEXT, nullable=False)
    """Hashed password of the user."""

    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    """Display name."""

    role: Mapped[str] = mapped_column(VARCHAR(32), nullable=False)
    """Role assigned to the user (buyer, seller, admin)."""

    organization: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    """Organization the user belongs to."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    """Registration timestamp."""

    def __init__(
        self,
        email: str,
        password: str,
        name: str,
        role: str,
        organization: str | None = None,
        user_id: UUID | None = None,
        created_at: datetime | None = None,
    ):
        """
        Initialize a new User object.

        Parameters
        ----------
        email : str
            Email address of the user.
        password : str
            Password hash (hashing happens in the DAO).
        name : str
            Display name.
        role : str
            Role of the user.
        organization : str | None
            Optional organization.
        user_id : UUID | None
            Explicit id; a random UUID is generated when omitted.
        created_at : datetime | None
            Creation time; defaults to now (UTC).
        """
        self.id = user_id or uuid.uuid4()
        self.email = email
        self.password = password
        self.name = name
        self.role = role
        self.organization = organization
        self.created_at = created_at or datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"User: id:{self.id}, email: {self.email}, role: {self.role}"
