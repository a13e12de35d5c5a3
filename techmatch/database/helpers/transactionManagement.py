"""
Database Transaction Management
===============================

Utilities for managing SQLAlchemy sessions using a context variable and a
decorator-based transaction wrapper.

Key features
~~~~~~~~~~~~
- Context variable to store the active session
- Implicit reuse of an existing session (nested service calls share one transaction)
- Automatic commit and rollback handling
- SQLAlchemy errors surface as ``StoreFailure``; domain errors pass through untouched
"""

import contextvars
import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from techmatch.database.config.connection_engine import connection_engine
from techmatch.errors import StoreFailure

logger = logging.getLogger(__name__)

db_session_context = contextvars.ContextVar("db_session_context", default=None)
"""Context variable storing the active SQLAlchemy session."""

SessionFactory = sessionmaker(bind=connection_engine, expire_on_commit=False)
"""Session factory bound to the application engine."""


def transactional(func):
    """
    Decorator to wrap functions in a managed SQLAlchemy transaction.

    Ensures that:
    - If a session already exists in context, it is reused.
    - Otherwise, a new session is created, committed, and closed.
    - On errors, the session is rolled back and closed.

    Parameters
    ----------
    func : callable
        The function to wrap. It must accept a `session` keyword argument.

    Returns
    -------
    callable
        The wrapped function, executed within a database transaction.

    Raises
    ------
    StoreFailure
        If SQLAlchemy raises while running or committing the function.
    """
    @wraps(func)
    def wrap_func(*args, **kwargs):
        session = db_session_context.get()
        if session:
            return func(*args, session=session, **kwargs)

        session = SessionFactory()
        token = db_session_context.set(session)

        try:
            result = func(*args, session=session, **kwargs)
            session.flush()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Persistence failure in %s: %s", func.__name__, e)
            raise StoreFailure(f"Database operation failed in {func.__name__}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            db_session_context.reset(token)

        return result

    return wrap_func
