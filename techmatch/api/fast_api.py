"""
FastAPI Router — Auth • Patents • Interests • Messages • Content • Admin
========================================================================

Purpose
-------
Defines the HTTP API (mounted under ``/api``) for:
- Authentication: register, login, logout, current user
- Patents: scoped listing, detail, create, owner-only update / delete
- Interests and messages between buyers and patent owners
- Public editorial content (columns, interviews) through the content gateway
- Admin review, statistics and article management

Key Notes
---------
- Input validation via Pydantic models in `techmatch.api.models`.
- Auth cookie: `token` (JWT), resolved by the dependencies in `techmatch.api.auth`.
- Services raise `TechMatchError` subclasses; the handlers registered in
  `techmatch.api.exception_handlers` render them, so routes never build
  error responses themselves.
- Mutations answer ``{"message": ..., <entity>: ...}``; listings answer a
  bare JSON array.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request, Response
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from techmatch.api.auth import get_current_user, get_identity_provider, require_admin
from techmatch.api.models import (
    ArticleData,
    Identity,
    InterestRequest,
    NewMessage,
    PatentFields,
    UserCredentials,
    UserData,
)
from techmatch.api.uploads import remove_upload, save_image
from techmatch.api.utils import create_access_token
from techmatch.database.config.config import settings
from techmatch.database.core import admin, articles, interests, messages, patents
from techmatch.database.core.funcs import login_user, register_user
from techmatch.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
"""Creates the FastAPI router in which we define its routes"""

SESSION_COOKIE = "token"

PATENT_SCOPES = {None: "public", "": "public", "me": "mine", "all": "all"}
"""``owner`` query value → listing scope."""


def _parse(model, data):
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ValidationError(f"Invalid fields: {fields}")


# -----------------------
# Health
# -----------------------
@router.get("/ping")
async def ping():
    """Liveness check."""
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}


# -----------------------
# Auth
# -----------------------
@router.post("/register")
async def register(data: UserData):
    """Register a new account.

    Returns:
        200: {'message': ..., 'userId': <uuid>}
        400: missing fields, unknown role or email already registered
        403: role `admin` while `ADMIN_ROLE_REQUIRED` is on
    """
    res = register_user(
        email=data.email,
        password=data.password,
        name=data.name,
        role=data.role,
        organization=data.organization,
        allow_admin=not settings.ADMIN_ROLE_REQUIRED,
    )
    return {"message": "Registration complete", **res}


@router.post("/login")
async def login(data: UserCredentials, response: Response):
    """Authenticate a user and set a signed JWT cookie.

    Behavior:
        - Verifies credentials via `login_user`.
        - On success sets the HttpOnly `token` cookie (secure in production)
          and returns the identity.
        - On failure 401, without saying whether the email or password was wrong.
    """
    identity = login_user(email=data.email, password=data.password)
    access_token = create_access_token(identity.claims())
    response.set_cookie(
        key=SESSION_COOKIE,
        value=access_token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )
    logger.info("User %s logged in", identity.id)
    return {"message": "Login successful", "user": identity.model_dump()}


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie. Tokens are stateless; nothing is revoked server-side."""
    response.delete_cookie(SESSION_COOKIE, path="/")
    return {"message": "Logged out"}


@router.get("/user")
async def current_user(request: Request, identity: Identity = Depends(get_current_user)):
    """Profile of the caller (the injected identity under the development bypass)."""
    return get_identity_provider(request).profile(identity)


# -----------------------
# Patents
# -----------------------
@router.get("/patents")
async def list_patents(
    request: Request,
    category: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    owner: Optional[str] = None,
    token: Optional[str] = Cookie(None),
):
    """List patents.

    `owner` selects the scope:
        - absent: approved patents only, no authentication
        - `me`: the caller's patents plus legacy rows without an owner
        - `all`: every patent, admin-scoped
    """
    if owner not in PATENT_SCOPES:
        raise ValidationError("owner must be 'me' or 'all'")
    scope = PATENT_SCOPES[owner]
    caller = None
    if scope != "public":
        caller = get_identity_provider(request).authenticate(token)
        if scope == "all":
            require_admin(caller)
    return patents.list_patents(scope=scope, caller=caller, category=category, status=status, search=search)


@router.get("/patents/{patent_id}")
async def get_patent(patent_id: str):
    """Fetch one patent by id; no ownership or approval check."""
    return patents.get_patent(patent_id=patent_id)


@router.post("/patents")
async def create_patent(request: Request, identity: Identity = Depends(get_current_user)):
    """Create a listing from multipart form data (optional `image` file) or JSON.

    The listing starts pending approval. A stored image is removed again if
    the row cannot be created.
    """
    content_type = request.headers.get("content-type", "")
    upload = None
    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        upload = form.get("image")
        fields = _parse(PatentFields, {k: v for k, v in form.items() if not isinstance(v, UploadFile)})
    else:
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Request body must be JSON or multipart form data")
        fields = _parse(PatentFields, body)

    image = save_image(upload) if isinstance(upload, UploadFile) and upload.filename else None
    try:
        patent = patents.create_patent(fields=fields.model_dump(exclude_none=True), owner=identity, image=image)
    except Exception:
        remove_upload(image)
        raise
    return {"message": "Patent registered. It will be published after administrator approval.", "patent": patent}


@router.put("/patents/{patent_id}")
async def update_patent(patent_id: str, data: PatentFields, identity: Identity = Depends(get_current_user)):
    """Owner-only update of the fields present in the body."""
    patent = patents.update_patent(patent_id=patent_id, fields=data.model_dump(exclude_unset=True), caller=identity)
    return {"message": "Patent updated", "patent": patent}


@router.delete("/patents/{patent_id}")
async def delete_patent(patent_id: str, identity: Identity = Depends(get_current_user)):
    """Owner-only delete; the stored image is removed afterwards."""
    removed = patents.delete_patent(patent_id=patent_id, caller=identity)
    return {"message": "Patent deleted", "id": removed["id"]}


@router.get("/patents/{patent_id}/interests")
async def patent_interests(patent_id: str, identity: Identity = Depends(get_current_user)):
    """Interests received on one patent; owner only."""
    return interests.list_patent_interests(patent_id=patent_id, caller=identity)


@router.get("/user/patents")
async def user_patents(identity: Identity = Depends(get_current_user)):
    """Patents owned by the caller."""
    return patents.list_owned_patents(owner=identity)


# -----------------------
# Interests
# -----------------------
@router.post("/interests")
async def create_interest(data: InterestRequest, identity: Identity = Depends(get_current_user)):
    """Express interest in a patent."""
    interest = interests.create_interest(patent_id=data.patent_id, message=data.message, buyer=identity)
    return {"message": "Interest sent", "interest": interest}


@router.get("/my-interests")
async def my_interests(identity: Identity = Depends(get_current_user)):
    """Interests the caller sent."""
    return interests.list_my_interests(buyer=identity)


@router.get("/user/interests")
async def user_interests(identity: Identity = Depends(get_current_user)):
    """Interests the caller sent, each with its patent embedded."""
    return interests.list_my_interests_with_patents(buyer=identity)


@router.get("/patent-interests")
async def received_interests(identity: Identity = Depends(get_current_user)):
    """Interests received on the caller's patents."""
    return interests.list_received_interests(owner=identity)


# -----------------------
# Messages
# -----------------------
@router.post("/messages")
async def send_message(data: NewMessage, identity: Identity = Depends(get_current_user)):
    message = messages.create_message(
        receiver_id=data.receiver_id,
        patent_id=data.patent_id,
        subject=data.subject,
        content=data.content,
        sender=identity,
    )
    return {"message": "Message sent", "message_data": message, "messageData": message}


@router.get("/messages")
async def list_messages(identity: Identity = Depends(get_current_user)):
    """Messages the caller sent or received, newest first."""
    return messages.list_messages(identity=identity)


@router.put("/messages/{message_id}/read")
async def read_message(message_id: str, identity: Identity = Depends(get_current_user)):
    """Mark a message read; only its receiver may."""
    messages.mark_read(message_id=message_id, identity=identity)
    return {"message": "Message marked as read", "id": message_id}


# -----------------------
# Public content
# -----------------------
# Sync handlers (threadpool): the gateway's HTTP client blocks.
@router.get("/columns")
def list_columns(request: Request, category: Optional[str] = None):
    return request.app.state.content_gateway.list_articles("column", category)


@router.get("/columns/{article_id}")
def get_column(request: Request, article_id: str):
    return request.app.state.content_gateway.get_article(article_id, "column")


@router.get("/interviews")
def list_interviews(request: Request, category: Optional[str] = None):
    return request.app.state.content_gateway.list_articles("interview", category)


@router.get("/interviews/{article_id}")
def get_interview(request: Request, article_id: str):
    return request.app.state.content_gateway.get_article(article_id, "interview")


# -----------------------
# Admin
# -----------------------
@router.get("/admin/patents/pending")
async def pending_patents(identity: Identity = Depends(require_admin)):
    """Patents awaiting review, with owner details."""
    return patents.list_pending_patents()


@router.get("/admin/patents")
async def all_patents(identity: Identity = Depends(require_admin)):
    return admin.list_all_patents()


@router.put("/admin/patents/{patent_id}/approve")
async def approve_patent(patent_id: str, identity: Identity = Depends(require_admin)):
    result = patents.approve_patent(patent_id=patent_id)
    logger.info("Patent %s approved by %s", patent_id, identity.id)
    return {"message": "Patent approved", **result}


@router.put("/admin/patents/{patent_id}/reject")
async def reject_patent(patent_id: str, identity: Identity = Depends(require_admin)):
    result = patents.reject_patent(patent_id=patent_id)
    logger.info("Patent %s rejected by %s", patent_id, identity.id)
    return {"message": "Patent rejected", **result}


@router.get("/admin/stats")
async def stats(identity: Identity = Depends(require_admin)):
    return admin.get_stats()


@router.get("/admin/users")
async def users(identity: Identity = Depends(require_admin)):
    return admin.list_users()


@router.get("/admin/articles")
async def list_articles(type: Optional[str] = None, identity: Identity = Depends(require_admin)):
    """All articles in any status, optionally one type."""
    return articles.list_articles(article_type=type)


@router.get("/admin/articles/{article_id}")
async def get_article(article_id: str, identity: Identity = Depends(require_admin)):
    return articles.get_article(article_id=article_id)


@router.post("/admin/articles")
async def create_article(data: ArticleData, identity: Identity = Depends(require_admin)):
    article = articles.create_article(fields=data.model_dump(exclude_none=True))
    return {"message": "Article created", "article": article}


@router.put("/admin/articles/{article_id}")
async def update_article(article_id: str, data: ArticleData, identity: Identity = Depends(require_admin)):
    article = articles.update_article(article_id=article_id, fields=data.model_dump(exclude_unset=True))
    return {"message": "Article updated", "article": article}


@router.delete("/admin/articles/{article_id}")
async def delete_article(article_id: str, identity: Identity = Depends(require_admin)):
    removed = articles.delete_article(article_id=article_id)
    return {"message": "Article deleted", "id": removed["id"]}
