"""
Article DAO

Query interface for editorial `Article` rows. Listings are ordered newest
first and accept optional type / status / category equality filters.
"""

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from techmatch.database.entities.article import Article

logger = logging.getLogger(__name__)


class ArticleDao:
    """
    Data Access Object (DAO) for editorial articles.
    """

    def createArticle(self, session: Session, article: Article) -> Article:
        try:
            session.add(article)
            return article
        except Exception as e:
            logger.error("Error in ArticleDao.createArticle. Error Message: %s", e)
            raise e

    def fetchArticleById(self, session: Session, article_id: UUID) -> Article | None:
        try:
            return session.get(Article, article_id)
        except Exception as e:
            logger.error("Error in ArticleDao.fetchArticleById. Error Message: %s", e)
            raise e

    def fetchArticles(
        self,
        session: Session,
        article_type: str | None = None,
        status: str | None = None,
        category: str | None = None,
    ) -> list[Article]:
        try:
            query = session.query(Article)
            if article_type:
                query = query.filter(Article.type == article_type)
            if status:
                query = query.filter(Article.status == status)
            if category:
                query = query.filter(Article.category == category)
            return query.order_by(Article.created_at.desc()).all()
        except Exception as e:
            logger.error("Error in ArticleDao.fetchArticles. Error Message: %s", e)
            raise e

    def updateArticle(self, session: Session, article: Article, fields: dict) -> Article:
        try:
            for key, value in fields.items():
                setattr(article, key, value)
            return article
        except Exception as e:
            logger.error("Error in ArticleDao.updateArticle. Error Message: %s", e)
            raise e

    def deleteArticle(self, session: Session, article: Article) -> None:
        try:
            session.delete(article)
        except Exception as e:
            logger.error("Error in ArticleDao.deleteArticle. Error Message: %s", e)
            raise e

    def countByTypeAndStatus(self, session: Session) -> dict[str, dict[str, int]]:
        """Return ``{type: {status: count}}``."""
        try:
            rows = (
                session.query(Article.type, Article.status, func.count(Article.id))
                .group_by(Article.type, Article.status)
                .all()
            )
            counts: dict[str, dict[str, int]] = {}
            for article_type, status, count in rows:
                counts.setdefault(article_type, {})[status] = count
            return counts
        except Exception as e:
            logger.error("Error in ArticleDao.countByTypeAndStatus. Error Message: %s", e)
            raise e
