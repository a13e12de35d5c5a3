"""
Entities Package — SQLAlchemy 2.0 ORM Models (UUID + UTC)
==========================================================

The `entities` package maps the marketplace tables to Python classes using
SQLAlchemy 2.0 typed mappings. DAOs (`daos` package) consume these classes.

Conventions
-----------
- Generic ``Uuid`` primary keys (native on PostgreSQL, CHAR(32) elsewhere)
- Timezone-aware timestamps assigned in Python (UTC)
- Ownership is expressed only through id columns (``owner_id``, ``buyer_id``,
  ``receiver_id``); access checks compare those ids, never object identity

Contents
--------
- User: registered account (email unique, bcrypt hash, role, organization)
- Patent: listing owned by one user, with availability and approval status
- Interest: buyer → patent expression of interest
- Message: user → user direct message, optionally about a patent
- Article: editorial column / interview
"""

from techmatch.database.entities.user import User
from techmatch.database.entities.patent import Patent
from techmatch.database.entities.interest import Interest
from techmatch.database.entities.messages import Message
from techmatch.database.entities.article import Article

__all__ = ["User", "Patent", "Interest", "Message", "Article"]
