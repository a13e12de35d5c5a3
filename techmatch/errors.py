"""
Error taxonomy
==============

Every failure the service layer reports to a caller is a ``TechMatchError``.
Each subclass pins the HTTP status the API layer renders it with, so services
never import FastAPI and routes never translate errors by hand.

=====================  ======  ===============================================
Class                  Status  Raised when
=====================  ======  ===============================================
ValidationError        400     required fields are missing or malformed
DuplicateIdentity      400     registering an email that already exists
Unauthenticated        401     no session credential was presented
InvalidCredential      401     credential present but fails verification
Forbidden              403     authenticated, but not owner / not admin
NotFound               404     resource id does not match any row
StoreFailure           500     a persistence call failed
UpstreamUnavailable    502     remote content source unreachable
=====================  ======  ===============================================

``UpstreamUnavailable`` is recovered inside the content gateway and is not
expected to reach clients of the public listing endpoints.
"""


class TechMatchError(Exception):
    """Base class for errors rendered as structured JSON responses."""

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(TechMatchError):
    status_code = 400
    default_detail = "Invalid or missing fields"


class DuplicateIdentity(TechMatchError):
    status_code = 400
    default_detail = "This email address is already registered"


class Unauthenticated(TechMatchError):
    status_code = 401
    default_detail = "Login required"


class InvalidCredential(TechMatchError):
    status_code = 401
    default_detail = "Invalid credentials"


class Forbidden(TechMatchError):
    status_code = 403
    default_detail = "Permission denied"


class NotFound(TechMatchError):
    status_code = 404
    default_detail = "Resource not found"


class StoreFailure(TechMatchError):
    status_code = 500
    default_detail = "A database operation failed"


class UpstreamUnavailable(TechMatchError):
    status_code = 502
    default_detail = "Remote content source is unavailable"
