"""
API Package — FastAPI Router • Models • Auth • Uploads • Content Gateway
========================================================================

Mission
-------
This package defines the backend's HTTP interface and its support stack:
FastAPI routing, cookie-carried JWT sessions, image uploads and the
read-through editorial content gateway.

Contents
--------
- fast_api
    FastAPI router mounted under ``/api``:
      • Auth: register, login, logout, current user
      • Patents: scoped listing, detail, create (multipart or JSON), owner-only
        update / delete, per-patent interests
      • Interests: express interest, sent interests, received interests
      • Messages: send, list, mark read
      • Content: public columns / interviews through the gateway
      • Admin: pending review, approve / reject, statistics, users, articles

- models
    Pydantic request contracts (credentials, registration, patent fields,
    interests, messages, articles) and the ``Identity`` attached to requests.

- utils
    JWT helpers:
      • create_access_token(claims) — issues signed JWTs with exp
      • verify_token(token) — validates JWTs and returns their claims

- auth
    Identity providers (token-backed, fixed development identity) and the
    FastAPI dependencies that attach the caller's identity or reject.

- uploads
    Image persistence under the public uploads directory.

- exception_handlers
    Renders ``TechMatchError`` subclasses and unexpected failures as JSON.

- content_gateway, sample_content
    Remote WordPress source with endpoint-shape fallback, TTL cache, local
    published articles and built-in samples as final fallback.

Operational Notes
-----------------
- Security: auth via HttpOnly ``token`` cookie (JWT). Never log secrets.
- Uploads are served from ``/uploads`` and referenced by relative URL.
"""
