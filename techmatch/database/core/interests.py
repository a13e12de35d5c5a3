"""
Interests
=========

Expressions of interest from a buyer in a patent.

- Buyers see what they sent (``list_my_interests``).
- Owners see what they received (``list_received_interests``): first the ids
  of the patents they own (plus legacy null-owner rows), then the interests
  on that id set. No owned patents means an empty list, never an error.
"""

import logging

from sqlalchemy.orm import Session

from techmatch.api.models import Identity
from techmatch.database.config.config import settings
from techmatch.database.core import to_uuid
from techmatch.database.core.patents import serialize_patent
from techmatch.database.daos.interest_dao import InterestDao
from techmatch.database.daos.patent_dao import PatentDao
from techmatch.database.entities.interest import Interest
from techmatch.database.helpers.transactionManagement import transactional
from techmatch.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)

UNKNOWN_BUYER = "Buyer"
"""Display name used when an interest carries neither buyer name nor email."""


def serialize_interest(interest: Interest) -> dict:
    return {
        "id": interest.id,
        "patent_id": interest.patent_id,
        "buyer_id": interest.buyer_id,
        "buyer_name": interest.buyer_name,
        "buyer_email": interest.buyer_email,
        "message": interest.message,
        "status": interest.status,
        "created_at": interest.created_at,
    }


@transactional
def create_interest(session: Session, patent_id, message: str | None, buyer: Identity) -> dict:
    """
    Record the caller's interest in a patent.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    patent_id : str | UUID
        Target patent.
    message : str | None
        Free text for the owner.
    buyer : Identity
        The caller; name and email are copied onto the row.

    Raises
    ------
    NotFound
        If the patent does not exist.
    Forbidden
        If the caller owns the patent and ``ALLOW_SELF_INTEREST`` is off.
    """
    parsed = to_uuid(patent_id)
    patent = PatentDao().fetchPatentById(session, parsed) if parsed else None
    if patent is None:
        raise NotFound("Patent not found")
    if not settings.ALLOW_SELF_INTEREST and patent.owner_id == buyer.id:
        raise Forbidden("You cannot express interest in your own patent")

    interest = Interest(
        patent_id=patent.id,
        buyer_id=buyer.id,
        buyer_name=buyer.name,
        buyer_email=buyer.email,
        message=message,
    )
    InterestDao().createInterest(session, interest)
    logger.info("Interest %s from %s on patent %s", interest.id, buyer.id, patent.id)
    return serialize_interest(interest)


@transactional
def list_my_interests(session: Session, buyer: Identity) -> list[dict]:
    """Interests the caller sent, newest first."""
    return [serialize_interest(i) for i in InterestDao().fetchInterestsByBuyer(session, buyer.id)]


@transactional
def list_my_interests_with_patents(session: Session, buyer: Identity) -> list[dict]:
    """
    Interests the caller sent, each with the patent it targets embedded under
    ``patent`` (None if the patent has since been removed).
    """
    interests = InterestDao().fetchInterestsByBuyer(session, buyer.id)
    patents = {p.id: p for p in PatentDao().fetchPatentsByIds(session, {i.patent_id for i in interests})}
    result = []
    for interest in interests:
        row = serialize_interest(interest)
        patent = patents.get(interest.patent_id)
        row["patent"] = serialize_patent(patent) if patent is not None else None
        result.append(row)
    return result


@transactional
def list_received_interests(session: Session, owner: Identity) -> list[dict]:
    """
    Interests received on the caller's patents.

    Returns
    -------
    list[dict]
        Each item: ``{id, patent_id, patent_title, user_name, message, status, created_at}``
        where ``user_name`` is buyer name → buyer email → ``UNKNOWN_BUYER``,
        plus the camelCase copies the pages read (``patentId``,
        ``patentTitle``, ``userName``, ``createdAt``).
        Empty when the caller owns no patents.
    """
    owned = PatentDao().fetchPatents(session, owner_id=owner.id, include_unowned=True)
    title_by_id = {patent.id: patent.title for patent in owned}
    if not title_by_id:
        return []

    rows = []
    for interest in InterestDao().fetchInterestsByPatentIds(session, title_by_id.keys()):
        patent_title = title_by_id.get(interest.patent_id) or str(interest.patent_id)
        user_name = interest.buyer_name or interest.buyer_email or UNKNOWN_BUYER
        rows.append({
            "id": interest.id,
            "patent_id": interest.patent_id,
            "patent_title": patent_title,
            "user_name": user_name,
            "message": interest.message or "",
            "status": interest.status,
            "created_at": interest.created_at,
            "patentId": interest.patent_id,
            "patentTitle": patent_title,
            "userName": user_name,
            "createdAt": interest.created_at,
        })
    return rows


@transactional
def list_patent_interests(session: Session, patent_id, caller: Identity) -> list[dict]:
    """
    Raw interests on one patent, visible only to its owner.

    Raises
    ------
    NotFound
        If the patent does not exist.
    Forbidden
        If the caller is not the owner.
    """
    parsed = to_uuid(patent_id)
    patent = PatentDao().fetchPatentById(session, parsed) if parsed else None
    if patent is None:
        raise NotFound("Patent not found")
    if patent.owner_id != caller.id:
        raise Forbidden()
    return [serialize_interest(i) for i in InterestDao().fetchInterestsByPatentIds(session, [patent.id])]
