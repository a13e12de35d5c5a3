"""
User DAO

Purpose
-------
Thin data-access layer for the `User` ORM entity. Provides:
- Creation with password hashing
- Lookup by email or id
- Listing and per-role counts for the admin views

Design
------
- The DAO expects an active SQLAlchemy `Session` supplied by the caller.
- Email uniqueness is checked by the service layer before insert; the unique
  index on `users.email` is the last line of defence.
- Passwords are hashed using `EncryptionDec.hash_password(...)` before insert.

Usage
-----
.. code-block:: python

    from techmatch.database.helpers.transactionManagement import SessionFactory
    from techmatch.database.entities.user import User
    from techmatch.database.daos.user_dao import UserDao

    dao = UserDao()
    with SessionFactory() as session:
        dao.createUser(session, User(email="s@lab.jp", password="pw", name="Sato", role="seller"))
        session.commit()
        users = dao.fetchUserByEmail(session, "s@lab.jp")   # list[User], at most 1
"""

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from techmatch.crypt.encrypt_decrypt import EncryptionDec
from techmatch.database.entities.user import User

logger = logging.getLogger(__name__)


class UserDao:
    """
    Data Access Object (DAO) for managing User entities.
    """

    def createUser(self, session: Session, user_data: User, hash_password: bool = True) -> User:
        """
        Create a new user in the database with a hashed password.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_data : User
            User entity whose `password` still holds the plaintext.
        hash_password : bool
            False stores `password` unchanged (placeholder markers that must
            never verify).

        Returns
        -------
        User
            The staged entity (password replaced by its hash).

        Raises
        ------
        Exception
            If hashing or insertion fails.
        """
        try:
            if hash_password:
                user_data.password = EncryptionDec().hash_password(text=user_data.password)
            session.add(user_data)
            return user_data
        except Exception as e:
            logger.error("Error in UserDao.createUser. Error Message: %s", e)
            raise e

    def fetchUserByEmail(self, session: Session, email: str) -> list[User]:
        """
        Fetch a user by email.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        email : str
            Email address of the user.

        Returns
        -------
        list[User]
            A list containing the matching user (at most one due to limit(1)).
        """
        try:
            return session.query(User).filter(User.email == email).limit(1).all()
        except Exception as e:
            logger.error("Error in UserDao.fetchUserByEmail. Error Message: %s", e)
            raise e

    def fetchUserById(self, session: Session, user_id: UUID) -> User | None:
        """
        Fetch a user by primary key.

        Returns
        -------
        User | None
            The user, or None if no row matches.
        """
        try:
            return session.get(User, user_id)
        except Exception as e:
            logger.error("Error in UserDao.fetchUserById. Error Message: %s", e)
            raise e

    def fetchUsers(self, session: Session) -> list[User]:
        """Return every user, newest registration first."""
        try:
            return session.query(User).order_by(User.created_at.desc()).all()
        except Exception as e:
            logger.error("Error in UserDao.fetchUsers. Error Message: %s", e)
            raise e

    def countUsersByRole(self, session: Session) -> dict[str, int]:
        """Return a ``{role: count}`` mapping."""
        try:
            rows = session.query(User.role, func.count(User.id)).group_by(User.role).all()
            return {role: count for role, count in rows}
        except Exception as e:
            logger.error("Error in UserDao.countUsersByRole. Error Message: %s", e)
            raise e
