"""
DAOs Package — Data Access Layer (SQLAlchemy 2.0)
=================================================

The `daos` package is the query interface over the marketplace tables. It
hides ORM query details from the service layer.

Conventions
-----------
- Every method takes an explicit SQLAlchemy `Session`; the caller (a
  ``@transactional`` service function) owns commit / rollback.
- DAOs never decide access rules; ownership and approval checks live in
  ``techmatch.database.core``.
- Errors are logged and re-raised so the transaction wrapper can report them.

Contents
--------
- UserDao: create with password hashing, lookup by email / id, role counts
- PatentDao: scoped listings, owner lookups, approval updates, pending review
- InterestDao: create, by-buyer and by-patent-set lookups
- MessagesDao: create, inbox/outbox listing, read flag
- ArticleDao: editorial CRUD and filtered listings
"""
