"""
Patent lifecycle
================

Listing scopes, owner-gated mutation and the approval workflow.

Scopes
------
- ``public``: ``approval_status == "approved"`` only; no authentication.
- ``mine``: rows owned by the caller, plus legacy rows with no owner.
- ``all``: every row regardless of approval state.

Category / availability-status filters run in the store; the free-text
search (case-insensitive substring over title and description) runs here
after fetch.

Approval workflow
-----------------
``pending → approved`` and ``pending → rejected`` through admin actions only.
Setting a status is unconditional and idempotent; there is no endpoint that
moves a row back to ``pending``. ``update_patent`` never touches
``approval_status``.
"""

import logging
import math

from sqlalchemy.orm import Session

from techmatch.api.models import Identity
from techmatch.api.uploads import remove_upload
from techmatch.database.core import to_uuid
from techmatch.database.daos.patent_dao import PatentDao
from techmatch.database.entities.patent import AVAILABILITY_STATUSES, Patent
from techmatch.database.helpers.transactionManagement import transactional
from techmatch.errors import Forbidden, NotFound, ValidationError

logger = logging.getLogger(__name__)

LIST_SCOPES = ("public", "mine", "all")

MUTABLE_FIELDS = (
    "title", "description", "problem", "usage", "advantage",
    "category", "patent_number", "price", "status",
)
"""Fields an owner may overwrite through ``update_patent``."""


def coerce_price(value, default: float | None = 0.0) -> float | None:
    """
    Parse a price from a form or JSON value.

    Unparsable, missing or non-finite input returns ``default``; negative
    prices are clamped to 0.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        price = float(str(value).strip()) if isinstance(value, str) else float(value)
    except ValueError:
        return default
    if not math.isfinite(price):
        return default
    return max(price, 0.0)


def serialize_patent(patent: Patent) -> dict:
    return {
        "id": patent.id,
        "title": patent.title,
        "description": patent.description,
        "problem": patent.problem,
        "usage": patent.usage,
        "advantage": patent.advantage,
        "category": patent.category,
        "patent_number": patent.patent_number,
        "price": patent.price,
        "status": patent.status,
        "approval_status": patent.approval_status,
        "owner_id": patent.owner_id,
        "owner_name": patent.owner_name,
        "image": patent.image,
        "created_at": patent.created_at,
    }


def _matches_search(patent: Patent, needle: str) -> bool:
    return needle in (patent.title or "").lower() or needle in (patent.description or "").lower()


def _load_patent(session: Session, patent_id) -> Patent:
    parsed = to_uuid(patent_id)
    patent = PatentDao().fetchPatentById(session, parsed) if parsed else None
    if patent is None:
        raise NotFound("Patent not found")
    return patent


def _load_owned_patent(session: Session, patent_id, caller: Identity) -> Patent:
    patent = _load_patent(session, patent_id)
    if patent.owner_id != caller.id:
        raise Forbidden()
    return patent


@transactional
def list_patents(session: Session, scope: str = "public", caller: Identity | None = None,
                 category: str | None = None, status: str | None = None,
                 search: str | None = None) -> list[dict]:
    """
    List patents in one of the three scopes.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    scope : str
        ``public``, ``mine`` or ``all``.
    caller : Identity | None
        Required for ``mine``; authentication for ``mine`` / ``all`` is
        enforced by the router before this is called.
    category : str | None
        Category equality filter; ``"all"`` means no filter.
    status : str | None
        Availability-status equality filter.
    search : str | None
        Case-insensitive substring over title / description.

    Returns
    -------
    list[dict]
        Serialized patents, newest first.
    """
    if scope not in LIST_SCOPES:
        raise ValidationError(f"scope must be one of {', '.join(LIST_SCOPES)}")
    filters = {
        "category": category if category and category != "all" else None,
        "status": status or None,
    }
    patent_dao = PatentDao()
    if scope == "public":
        patents = patent_dao.fetchPatents(session, approval_status="approved", **filters)
    elif scope == "mine":
        if caller is None:
            raise ValidationError("The 'mine' scope needs a caller identity")
        patents = patent_dao.fetchPatents(session, owner_id=caller.id, include_unowned=True, **filters)
    else:
        patents = patent_dao.fetchPatents(session, **filters)

    if search:
        needle = search.lower()
        patents = [patent for patent in patents if _matches_search(patent, needle)]
    return [serialize_patent(patent) for patent in patents]


@transactional
def list_owned_patents(session: Session, owner: Identity) -> list[dict]:
    """Patents whose owner is exactly the caller (no legacy null-owner rows)."""
    patents = PatentDao().fetchPatents(session, owner_id=owner.id)
    return [serialize_patent(patent) for patent in patents]


@transactional
def get_patent(session: Session, patent_id) -> dict:
    """
    Fetch one patent by id. No ownership or approval check.

    Raises
    ------
    NotFound
        If no row matches (including malformed ids).
    """
    return serialize_patent(_load_patent(session, patent_id))


@transactional
def create_patent(session: Session, fields: dict, owner: Identity, image: str | None = None) -> dict:
    """
    Create a listing owned by the caller.

    The row starts as ``status="available"`` / ``approval_status="pending"``;
    any ``status`` in ``fields`` is ignored. The price is coerced to a
    non-negative number, defaulting to 0.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    fields : dict
        Listing fields (see ``MUTABLE_FIELDS``).
    owner : Identity
        The caller; becomes ``owner_id`` / ``owner_name``.
    image : str | None
        Relative URL of an image already written to upload storage.

    Returns
    -------
    dict
        The serialized new patent.
    """
    patent = Patent(
        title=fields.get("title"),
        description=fields.get("description"),
        problem=fields.get("problem"),
        usage=fields.get("usage"),
        advantage=fields.get("advantage"),
        category=fields.get("category"),
        patent_number=fields.get("patent_number"),
        price=coerce_price(fields.get("price"), default=0.0),
        owner_id=owner.id,
        owner_name=owner.name,
        image=image,
    )
    PatentDao().createPatent(session, patent)
    logger.info("Patent %s created by %s (pending approval)", patent.id, owner.id)
    return serialize_patent(patent)


@transactional
def update_patent(session: Session, patent_id, fields: dict, caller: Identity) -> dict:
    """
    Overwrite the supplied mutable fields of a patent the caller owns.

    Only keys present in ``fields`` and listed in ``MUTABLE_FIELDS`` are
    written; ``approval_status`` is never changed here. An unparsable price
    keeps the current value.

    Raises
    ------
    NotFound
        If the patent does not exist.
    Forbidden
        If the caller is not the owner.
    ValidationError
        If ``status`` is not an availability status.
    """
    patent = _load_owned_patent(session, patent_id, caller)
    changes = {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}
    if "price" in changes:
        changes["price"] = coerce_price(changes["price"], default=patent.price)
    if "status" in changes:
        if changes["status"] not in AVAILABILITY_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(AVAILABILITY_STATUSES)}")
    PatentDao().updatePatent(session, patent, changes)
    return serialize_patent(patent)


@transactional
def _delete_patent_row(session: Session, patent_id, caller: Identity) -> dict:
    patent = _load_owned_patent(session, patent_id, caller)
    removed = serialize_patent(patent)
    PatentDao().deletePatent(session, patent)
    return removed


def delete_patent(patent_id, caller: Identity) -> dict:
    """
    Delete a patent the caller owns, then remove its stored image.

    The row delete is committed first; removing the image afterwards is
    best-effort and never fails the request.

    Raises
    ------
    NotFound
        If the patent does not exist.
    Forbidden
        If the caller is not the owner.
    """
    removed = _delete_patent_row(patent_id=patent_id, caller=caller)
    if removed["image"]:
        remove_upload(removed["image"])
    logger.info("Patent %s deleted by %s", removed["id"], caller.id)
    return removed


def _set_approval(session: Session, patent_id, approval_status: str) -> dict:
    parsed = to_uuid(patent_id)
    if parsed is None or PatentDao().setApprovalStatus(session, parsed, approval_status) == 0:
        raise NotFound("Patent not found")
    logger.info("Patent %s set to %s", parsed, approval_status)
    return {"id": parsed, "approval_status": approval_status}


@transactional
def approve_patent(session: Session, patent_id) -> dict:
    """Set ``approval_status="approved"``; re-approving is not an error."""
    return _set_approval(session, patent_id, "approved")


@transactional
def reject_patent(session: Session, patent_id) -> dict:
    """Set ``approval_status="rejected"``; re-rejecting is not an error."""
    return _set_approval(session, patent_id, "rejected")


@transactional
def list_pending_patents(session: Session) -> list[dict]:
    """
    Pending patents for the admin review screen.

    Each row carries ``owner`` = {name, email, organization} (or None when the
    owner row is missing) and ``owner_name`` resolved as owner name → owner
    email → ``"unknown"``.
    """
    pending = []
    for patent in PatentDao().fetchPendingPatents(session):
        row = serialize_patent(patent)
        owner = patent.owner
        if owner is not None:
            row["owner"] = {"name": owner.name, "email": owner.email, "organization": owner.organization}
            row["owner_name"] = owner.name or owner.email
        else:
            row["owner"] = None
            row["owner_name"] = "unknown"
        pending.append(row)
    return pending
