"""
Patent DAO

Purpose
-------
Query interface for the `Patent` entity:
- Create / fetch by id / delete
- Scoped listings (approved-only, owner + legacy null-owner, everything)
  with optional category and availability-status equality filters
- Approval-status updates for the admin workflow
- Pending-review listing with the owner row eagerly loaded

Notes
-----
- All listings are ordered newest first (`created_at DESC`).
- Free-text search is applied by the service layer after fetch, not here.
- `setApprovalStatus` is a single unconditional UPDATE; it returns the number
  of matched rows so the caller can tell a missing id apart.
"""

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session, joinedload

from techmatch.database.entities.patent import Patent

logger = logging.getLogger(__name__)


class PatentDao:
    """
    Data Access Object (DAO) for Patent listings.
    """

    def createPatent(self, session: Session, patent: Patent) -> Patent:
        try:
            session.add(patent)
            return patent
        except Exception as e:
            logger.error("Error in PatentDao.createPatent. Error Message: %s", e)
            raise e

    def fetchPatentById(self, session: Session, patent_id: UUID) -> Patent | None:
        """Return the patent with the given id, or None."""
        try:
            return session.get(Patent, patent_id)
        except Exception as e:
            logger.error("Error in PatentDao.fetchPatentById. Error Message: %s", e)
            raise e

    def fetchPatents(
        self,
        session: Session,
        approval_status: str | None = None,
        owner_id: UUID | None = None,
        include_unowned: bool = False,
        category: str | None = None,
        status: str | None = None,
    ) -> list[Patent]:
        """
        Fetch patents matching the given equality filters.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        approval_status : str | None
            Restrict to one approval state (e.g., "approved" for the public scope).
        owner_id : UUID | None
            Restrict to rows owned by this user.
        include_unowned : bool
            With `owner_id`, also return rows whose owner is NULL.
        category : str | None
            Category equality filter.
        status : str | None
            Availability-status equality filter.

        Returns
        -------
        list[Patent]
            Matching rows, newest first.
        """
        try:
            query = session.query(Patent)
            if approval_status is not None:
                query = query.filter(Patent.approval_status == approval_status)
            if owner_id is not None:
                if include_unowned:
                    query = query.filter(or_(Patent.owner_id == owner_id, Patent.owner_id.is_(None)))
                else:
                    query = query.filter(Patent.owner_id == owner_id)
            if category:
                query = query.filter(Patent.category == category)
            if status:
                query = query.filter(Patent.status == status)
            return query.order_by(Patent.created_at.desc()).all()
        except Exception as e:
            logger.error("Error in PatentDao.fetchPatents. Error Message: %s", e)
            raise e

    def fetchPendingPatents(self, session: Session) -> list[Patent]:
        """Return pending patents with their owner row loaded, newest first."""
        try:
            return (
                session.query(Patent)
                .options(joinedload(Patent.owner))
                .filter(Patent.approval_status == "pending")
                .order_by(Patent.created_at.desc())
                .all()
            )
        except Exception as e:
            logger.error("Error in PatentDao.fetchPendingPatents. Error Message: %s", e)
            raise e

    def updatePatent(self, session: Session, patent: Patent, fields: dict) -> Patent:
        """Overwrite the given attributes on a loaded patent."""
        try:
            for key, value in fields.items():
                setattr(patent, key, value)
            return patent
        except Exception as e:
            logger.error("Error in PatentDao.updatePatent. Error Message: %s", e)
            raise e

    def setApprovalStatus(self, session: Session, patent_id: UUID, approval_status: str) -> int:
        """
        Set `approval_status` on one patent.

        Returns
        -------
        int
            Number of rows matched (0 or 1).
        """
        try:
            result = session.execute(
                update(Patent)
                .where(Patent.id == patent_id)
                .values(approval_status=approval_status)
                .execution_options(synchronize_session="fetch")
            )
            return result.rowcount
        except Exception as e:
            logger.error("Error in PatentDao.setApprovalStatus. Error Message: %s", e)
            raise e

    def deletePatent(self, session: Session, patent: Patent) -> None:
        try:
            session.delete(patent)
        except Exception as e:
            logger.error("Error in PatentDao.deletePatent. Error Message: %s", e)
            raise e

    def fetchPatentsByIds(self, session: Session, patent_ids: Iterable[UUID]) -> list[Patent]:
        ids = list(patent_ids)
        if not ids:
            return []
        try:
            return session.query(Patent).filter(Patent.id.in_(ids)).all()
        except Exception as e:
            logger.error("Error in PatentDao.fetchPatentsByIds. Error Message: %s", e)
            raise e

    def countByApprovalStatus(self, session: Session) -> dict[str, int]:
        """Return a ``{approval_status: count}`` mapping."""
        try:
            rows = (
                session.query(Patent.approval_status, func.count(Patent.id))
                .group_by(Patent.approval_status)
                .all()
            )
            return {approval_status: count for approval_status, count in rows}
        except Exception as e:
            logger.error("Error in PatentDao.countByApprovalStatus. Error Message: %s", e)
            raise e
