"""
Service layer
=============

Transactional operations called by the API router. Every public function is
wrapped with ``@transactional`` and receives its ``session`` from the
decorator; callers pass only keyword arguments.

Modules
-------
- funcs: registration, login, profile
- patents: listing scopes, owner-gated mutation, approval workflow
- interests: buyer → patent interests, received-interest resolution
- messages: direct messages and read state
- articles: editorial content, public projections, read-time estimate
- admin: cross-cutting listings and statistics
"""

from uuid import UUID


def to_uuid(value) -> UUID | None:
    """Parse an id from a path or body; None when it is not a valid UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None
