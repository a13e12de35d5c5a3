"""
Interest DAO

Query interface for `Interest` rows: creation, the buyer's sent interests and
the interests received on a set of patents. Ordering is newest first.
"""

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from techmatch.database.entities.interest import Interest

logger = logging.getLogger(__name__)


class InterestDao:
    """
    Data Access Object (DAO) for expressions of interest.
    """

    def createInterest(self, session: Session, interest: Interest) -> Interest:
        try:
            session.add(interest)
            return interest
        except Exception as e:
            logger.error("Error in InterestDao.createInterest. Error Message: %s", e)
            raise e

    def fetchInterestsByBuyer(self, session: Session, buyer_id: UUID) -> list[Interest]:
        """Interests sent by one buyer."""
        try:
            return (
                session.query(Interest)
                .filter(Interest.buyer_id == buyer_id)
                .order_by(Interest.created_at.desc())
                .all()
            )
        except Exception as e:
            logger.error("Error in InterestDao.fetchInterestsByBuyer. Error Message: %s", e)
            raise e

    def fetchInterestsByPatentIds(self, session: Session, patent_ids: Iterable[UUID]) -> list[Interest]:
        """
        Interests whose `patent_id` is in the given set.

        An empty id set short-circuits to an empty list without touching the store.
        """
        ids = list(patent_ids)
        if not ids:
            return []
        try:
            return (
                session.query(Interest)
                .filter(Interest.patent_id.in_(ids))
                .order_by(Interest.created_at.desc())
                .all()
            )
        except Exception as e:
            logger.error("Error in InterestDao.fetchInterestsByPatentIds. Error Message: %s", e)
            raise e

    def countByStatus(self, session: Session) -> dict[str, int]:
        try:
            rows = session.query(Interest.status, func.count(Interest.id)).group_by(Interest.status).all()
            return {status: count for status, count in rows}
        except Exception as e:
            logger.error("Error in InterestDao.countByStatus. Error Message: %s", e)
            raise e
