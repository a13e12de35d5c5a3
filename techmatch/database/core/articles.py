"""
Articles
========

Editorial content: technical columns and researcher interviews.

Projections
-----------
- public summary: no content body, plus ``read_time`` (integer minutes)
- public detail: summary plus ``content``
- admin summary: includes ``status`` and ``updated_at``
- admin detail: every column

Public reads only ever see ``status == "published"``. Admin reads and writes
are unrestricted by ownership.
"""

import html
import logging
import math
import re
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from techmatch.database.core import to_uuid
from techmatch.database.daos.article_dao import ArticleDao
from techmatch.database.entities.article import ARTICLE_STATUSES, ARTICLE_TYPES, Article
from techmatch.database.helpers.transactionManagement import transactional
from techmatch.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

CHARS_PER_MINUTE = 350

ARTICLE_FIELDS = (
    "type", "status", "title", "category", "author", "researcher",
    "affiliation", "excerpt", "content", "featured_image",
)

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def strip_html(markup: str | None) -> str:
    """Drop tags, unescape entities and collapse whitespace."""
    text = _TAG_RE.sub("", markup or "")
    return _SPACE_RE.sub(" ", html.unescape(text)).strip()


def estimate_read_time_minutes(text: str | None) -> int:
    """
    Whole minutes to read ``text`` at ``CHARS_PER_MINUTE``.

    Whitespace does not count; halves round up; the result is at least 1.
    """
    chars = len(_SPACE_RE.sub("", text or ""))
    return max(1, math.floor(chars / CHARS_PER_MINUTE + 0.5))


def read_time_label(minutes: int) -> str:
    """Read time as the pages print it, e.g. ``"3分"``."""
    return f"{minutes}分"


def _reading_text(article: Article) -> str:
    return strip_html(article.content) or strip_html(article.excerpt)


def public_summary(article: Article) -> dict:
    return {
        "id": str(article.id),
        "type": article.type,
        "title": article.title,
        "description": strip_html(article.excerpt),
        "category": article.category,
        "author": article.author,
        "researcher": article.researcher,
        "affiliation": article.affiliation,
        "featured_image": article.featured_image,
        "created_at": article.created_at,
        "read_time": estimate_read_time_minutes(_reading_text(article)),
    }


def public_detail(article: Article) -> dict:
    row = public_summary(article)
    row["content"] = article.content or ""
    return row


def admin_summary(article: Article) -> dict:
    return {
        "id": article.id,
        "type": article.type,
        "status": article.status,
        "title": article.title,
        "category": article.category,
        "author": article.author,
        "created_at": article.created_at,
        "updated_at": article.updated_at,
    }


def admin_detail(article: Article) -> dict:
    row = admin_summary(article)
    row.update({
        "researcher": article.researcher,
        "affiliation": article.affiliation,
        "excerpt": article.excerpt,
        "content": article.content,
        "featured_image": article.featured_image,
    })
    return row


def _load_article(session: Session, article_id) -> Article:
    parsed = to_uuid(article_id)
    article = ArticleDao().fetchArticleById(session, parsed) if parsed else None
    if article is None:
        raise NotFound("Article not found")
    return article


def _check_choices(fields: dict) -> None:
    if "type" in fields and fields["type"] not in ARTICLE_TYPES:
        raise ValidationError(f"type must be one of {', '.join(ARTICLE_TYPES)}")
    if "status" in fields and fields["status"] not in ARTICLE_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(ARTICLE_STATUSES)}")


@transactional
def list_published_articles(session: Session, article_type: str, category: str | None = None) -> list[dict]:
    """Published articles of one type as public summaries, newest first."""
    articles = ArticleDao().fetchArticles(
        session, article_type=article_type, status="published", category=category or None
    )
    return [public_summary(article) for article in articles]


@transactional
def get_published_article(session: Session, article_id, article_type: str) -> dict:
    """
    One published article as a public detail.

    Raises
    ------
    NotFound
        If the id is unknown, the article is a draft or its type differs.
    """
    article = _load_article(session, article_id)
    if article.status != "published" or article.type != article_type:
        raise NotFound("Article not found")
    return public_detail(article)


@transactional
def list_articles(session: Session, article_type: str | None = None) -> list[dict]:
    """Every article, any status, optionally filtered by type."""
    return [admin_summary(a) for a in ArticleDao().fetchArticles(session, article_type=article_type or None)]


@transactional
def get_article(session: Session, article_id) -> dict:
    return admin_detail(_load_article(session, article_id))


@transactional
def create_article(session: Session, fields: dict) -> dict:
    """
    Create an article.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    fields : dict
        Keys from ``ARTICLE_FIELDS``. ``type``, ``title`` and ``category``
        are required; ``status`` defaults to ``draft``.

    Raises
    ------
    ValidationError
        If a required field is empty or type / status is unknown.
    """
    fields = {key: value for key, value in fields.items() if key in ARTICLE_FIELDS and value is not None}
    missing = [key for key in ("type", "title", "category") if not str(fields.get(key) or "").strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    _check_choices(fields)

    article = Article(**fields)
    ArticleDao().createArticle(session, article)
    logger.info("Article %s created (%s, %s)", article.id, article.type, article.status)
    return admin_detail(article)


@transactional
def update_article(session: Session, article_id, fields: dict) -> dict:
    """
    Overwrite the supplied fields of an article and bump ``updated_at``.

    Raises
    ------
    NotFound
        If the article does not exist.
    ValidationError
        If type / status is unknown, or title / category would become empty.
    """
    article = _load_article(session, article_id)
    changes = {key: value for key, value in fields.items() if key in ARTICLE_FIELDS}
    for key in ("type", "title", "category"):
        if key in changes and not str(changes[key] or "").strip():
            raise ValidationError(f"{key} cannot be empty")
    _check_choices(changes)

    changes["updated_at"] = datetime.now(timezone.utc)
    ArticleDao().updateArticle(session, article, changes)
    return admin_detail(article)


@transactional
def delete_article(session: Session, article_id) -> dict:
    article = _load_article(session, article_id)
    removed = admin_summary(article)
    ArticleDao().deleteArticle(session, article)
    logger.info("Article %s deleted", article.id)
    return removed
