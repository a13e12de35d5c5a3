"""
The `database` package is responsible for all interactions with the marketplace's relational store.

Contents:
    - config:
        Environment-driven settings and the SQLAlchemy engine / declarative base.

    - entities:
        ORM models for users, patents, interests, messages and articles.

    - daos:
        Data Access Objects providing the query interface over each table.

    - core:
        Transactional service functions that the API router calls. Ownership,
        approval and read-state rules live here.

    - helpers:
        Session propagation and the ``@transactional`` decorator.
"""
