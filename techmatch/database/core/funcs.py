"""
Service-layer operations for accounts: registration, login, profile.

All functions are wrapped with the `@transactional` decorator, which manages
SQLAlchemy sessions and transactions automatically. Each function accepts (and
uses) an injected `session: Session` provided by the decorator.
"""

import logging

from sqlalchemy.orm import Session

from techmatch.api.models import Identity
from techmatch.crypt.encrypt_decrypt import EncryptionDec
from techmatch.database.daos.user_dao import UserDao
from techmatch.database.entities.user import ADMIN_ROLE, USER_ROLES, User
from techmatch.database.helpers.transactionManagement import transactional
from techmatch.errors import DuplicateIdentity, Forbidden, InvalidCredential, NotFound, ValidationError

logger = logging.getLogger(__name__)

UNUSABLE_PASSWORD = "!"
"""Stored for rows created without a password; never matches a bcrypt check."""


def user_projection(user: User) -> dict:
    """Public view of a user row (no password hash)."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "organization": user.organization,
        "created_at": user.created_at,
    }


@transactional
def register_user(session: Session, email: str | None, password: str | None, name: str | None,
                  role: str | None, organization: str | None = None, allow_admin: bool = True) -> dict:
    """
    Validate, check email uniqueness and create a new account.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    email, password, name : str
        Required account fields.
    role : str
        One of ``USER_ROLES``.
    organization : str | None
        Optional affiliation.
    allow_admin : bool
        False refuses the ``admin`` role; such accounts are then seeded with
        ``ensure_admin`` only.

    Returns
    -------
    dict
        ``{"userId": <UUID>}``

    Raises
    ------
    ValidationError
        If a required field is empty or the role is unknown.
    DuplicateIdentity
        If the email is already registered.
    Forbidden
        If ``role`` is ``admin`` and ``allow_admin`` is False.
    """
    email = (email or "").strip()
    name = (name or "").strip()
    missing = [field for field, value in (("email", email), ("password", password), ("name", name)) if not value]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    if role not in USER_ROLES:
        raise ValidationError(f"role must be one of {', '.join(USER_ROLES)}")
    if role == ADMIN_ROLE and not allow_admin:
        raise Forbidden("Administrator accounts cannot be self-registered")

    user_dao = UserDao()
    if user_dao.fetchUserByEmail(session, email):
        raise DuplicateIdentity()

    user = User(email=email, password=password, name=name, role=role, organization=organization or None)
    user_dao.createUser(session=session, user_data=user)
    logger.info("Registered user %s (%s)", user.id, role)
    return {"userId": user.id}


@transactional
def login_user(session: Session, email: str, password: str) -> Identity:
    """
    Authenticate a user by email and password.

    Returns
    -------
    Identity
        The identity to encode in the session token.

    Raises
    ------
    InvalidCredential
        If the email is unknown or the password does not match. The two cases
        are indistinguishable to the caller.
    """
    user_dao = UserDao()
    enc = EncryptionDec()
    users_fetched = user_dao.fetchUserByEmail(session, email)
    if not users_fetched or not enc.check_passwords(password, users_fetched[0].password):
        raise InvalidCredential("Incorrect email address or password")
    user = users_fetched[0]
    return Identity(id=user.id, email=user.email, name=user.name, role=user.role)


@transactional
def get_user_profile(session: Session, user_id) -> dict:
    """
    Fetch the profile of the user a session belongs to.

    Raises
    ------
    NotFound
        If the user row no longer exists.
    """
    user = UserDao().fetchUserById(session, user_id)
    if user is None:
        raise NotFound("User not found")
    return user_projection(user)


@transactional
def ensure_user(session: Session, identity: Identity) -> None:
    """
    Make sure a user row exists for ``identity``.

    Used for the fixed development identity so rows it creates satisfy the
    owner foreign key. The row gets an unusable password.
    """
    user_dao = UserDao()
    if user_dao.fetchUserById(session, identity.id) is not None:
        return
    if user_dao.fetchUserByEmail(session, identity.email):
        logger.warning("Email %s already taken by another user; development identity row not created", identity.email)
        return
    user = User(
        email=identity.email,
        password=UNUSABLE_PASSWORD,
        name=identity.name,
        role=identity.role,
        user_id=identity.id,
    )
    user_dao.createUser(session=session, user_data=user, hash_password=False)
    logger.info("Created user row for development identity %s", identity.id)


@transactional
def ensure_admin(session: Session, email: str, password: str, name: str) -> bool:
    """
    Seed an administrator account unless ``email`` is already registered.

    Returns
    -------
    bool
        True if a row was created.
    """
    user_dao = UserDao()
    existing = user_dao.fetchUserByEmail(session, email)
    if existing:
        if existing[0].role != ADMIN_ROLE:
            logger.warning("Bootstrap admin email %s belongs to a %s account; left unchanged", email, existing[0].role)
        return False
    user = User(email=email, password=password, name=name, role=ADMIN_ROLE)
    user_dao.createUser(session=session, user_data=user)
    logger.info("Seeded administrator %s", user.id)
    return True
