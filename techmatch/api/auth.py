"""
Authorization middleware
========================

Resolves the caller's identity for every authenticated route.

An ``IdentityProvider`` turns the session cookie into an ``Identity``:

- ``TokenIdentityProvider`` verifies the signed JWT in the ``token`` cookie.
- ``FixedIdentityProvider`` always answers with one injected identity; it is
  selected when ``SKIP_AUTH`` is on, which the settings refuse in production.

The provider lives on ``app.state.identity_provider`` so tests and local
runs can swap it without touching route code.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Cookie, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from techmatch.api.models import Identity
from techmatch.api.utils import verify_token
from techmatch.database.config.config import Settings, settings
from techmatch.database.core.funcs import get_user_profile
from techmatch.database.entities.user import ADMIN_ROLE
from techmatch.errors import Forbidden, InvalidCredential, Unauthenticated

logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    """Source of the caller identity for authenticated requests."""

    @abstractmethod
    def authenticate(self, token: Optional[str]) -> Identity:
        """
        Resolve the identity behind a session credential.

        Raises
        ------
        Unauthenticated
            If no credential was presented.
        InvalidCredential
            If the credential does not verify.
        """

    @abstractmethod
    def profile(self, identity: Identity) -> dict:
        """Profile returned by ``GET /api/user`` for ``identity``."""


class TokenIdentityProvider(IdentityProvider):
    """Identity from the signed JWT carried in the session cookie."""

    def authenticate(self, token: Optional[str]) -> Identity:
        if not token:
            raise Unauthenticated()
        payload = verify_token(token)
        if payload is None:
            raise InvalidCredential("Invalid or expired token")
        try:
            return Identity(
                id=payload.get("sub"),
                email=payload.get("email"),
                name=payload.get("name"),
                role=payload.get("role"),
            )
        except PydanticValidationError:
            raise InvalidCredential("Invalid or expired token")

    def profile(self, identity: Identity) -> dict:
        return get_user_profile(user_id=identity.id)


class FixedIdentityProvider(IdentityProvider):
    """Development bypass: every request is ``identity``, no token needed."""

    def __init__(self, identity: Identity):
        self.identity = identity

    def authenticate(self, token: Optional[str]) -> Identity:
        return self.identity

    def profile(self, identity: Identity) -> dict:
        return identity.model_dump()


def development_identity(config: Settings) -> Identity:
    return Identity(
        id=config.DEV_USER_ID,
        email=config.DEV_USER_EMAIL,
        name=config.DEV_USER_NAME,
        role=config.DEV_USER_ROLE,
    )


def build_identity_provider(config: Settings) -> IdentityProvider:
    """Pick the provider for the configured environment."""
    if config.SKIP_AUTH:
        logger.warning("SKIP_AUTH is on: every request runs as %s", config.DEV_USER_EMAIL)
        return FixedIdentityProvider(development_identity(config))
    return TokenIdentityProvider()


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def get_current_user(
    request: Request,
    token: Optional[str] = Cookie(None),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Identity:
    """FastAPI dependency: the caller's identity, or 401."""
    identity = provider.authenticate(token)
    request.state.identity = identity
    return identity


def require_admin(identity: Identity = Depends(get_current_user)) -> Identity:
    """
    FastAPI dependency for admin-scoped routes.

    Any authenticated caller passes unless ``ADMIN_ROLE_REQUIRED`` is set, in
    which case the role claim must be ``admin``.
    """
    if settings.ADMIN_ROLE_REQUIRED and identity.role != ADMIN_ROLE:
        raise Forbidden("Administrator role required")
    return identity
