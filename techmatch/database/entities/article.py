"""
Article ORM Model
=================

Editorial content: technical columns and researcher interviews. Maps to the
``articles`` table. Public endpoints only ever see ``status == "published"``.
"""

import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import TEXT, VARCHAR, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from techmatch.database.config.connection_engine import declarativeBase

ARTICLE_TYPES = ("column", "interview")
ARTICLE_STATUSES = ("draft", "published")


class Article(declarativeBase):
    """
    ORM model for the `articles` table.

    ``author`` is the writer of a column or the interviewer; ``researcher`` and
    ``affiliation`` describe the interviewee and are only meaningful for
    interviews.
    """

    __tablename__ = "articles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    type: Mapped[str] = mapped_column(VARCHAR(32), nullable=False, index=True)
    status: Mapped[str] = mapped_column(VARCHAR(32), nullable=False, default="draft", index=True)
    title: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    category: Mapped[str] = mapped_column(VARCHAR(64), nullable=False)
    author: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    researcher: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    affiliation: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    excerpt: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    content: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    featured_image: Mapped[str | None] = mapped_column(TEXT, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __init__(
        self,
        type: str,
        title: str,
        category: str,
        status: str = "draft",
        author: str | None = None,
        researcher: str | None = None,
        affiliation: str | None = None,
        excerpt: str | None = None,
        content: str | None = None,
        featured_image: str | None = None,
        article_id: UUID | None = None,
        created_at: datetime | None = None,
    ):
        now = created_at or datetime.now(timezone.utc)
        self.id = article_id or uuid.uuid4()
        self.type = type
        self.status = status
        self.title = title
        self.category = category
        self.author = author
        self.researcher = researcher
        self.affiliation = affiliation
        self.excerpt = excerpt
        self.content = content
        self.featured_image = featured_image
        self.created_at = now
        self.updated_at = now

    def __str__(self) -> str:
        return f"Article: id:{self.id}, type: {self.type}, status: {self.status}, title: {self.title}"
