"""
Pydantic models used for request validation and the authenticated identity.

Request bodies accept both the snake_case field names and the camelCase names
the static pages send (``patentNumber``, ``receiverId``, ``userType`` ...).
The responses those pages read carry camelCase copies of the keys they use
(``patentTitle``, ``userName``, ``readTime``, ``messageData``).
Fields the service layer validates itself are declared optional here so a
missing value is reported as a 400 ``ValidationError`` rather than a 422.
"""

from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """
    The authenticated caller attached to a request.

    Produced by an identity provider from a verified session token, or the
    fixed development identity when the bypass is configured.
    """
    id: UUID
    """Id of the user row the session belongs to."""
    email: str
    """Email address at the time the token was issued."""
    name: str
    """Display name at the time the token was issued."""
    role: str
    """Role claim (buyer, seller, admin)."""

    def claims(self) -> dict:
        """Token claims encoding this identity."""
        return {"sub": str(self.id), "email": self.email, "name": self.name, "role": self.role}


class UserCredentials(BaseModel):
    """
    Login credentials.
    """
    email: str
    """The email address the account was registered with."""
    password: str
    """The plaintext password provided for authentication."""


class UserData(BaseModel):
    """
    Data required to register a new user.
    """
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = None
    """Email address (unique)."""
    password: str | None = None
    """Password chosen by the user."""
    name: str | None = None
    """Display name."""
    role: str | None = Field(None, validation_alias=AliasChoices("role", "userType", "user_type"))
    """Role of the account: buyer, seller or admin."""
    organization: str | None = None
    """Company, university or lab."""


class PatentFields(BaseModel):
    """
    Listing fields supplied when creating or updating a patent.

    On update only the fields present in the request body are written.
    ``price`` stays loosely typed so form posts ("1200", "") can be coerced.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    problem: str | None = None
    usage: str | None = None
    advantage: str | None = None
    category: str | None = None
    patent_number: str | None = Field(None, validation_alias=AliasChoices("patent_number", "patentNumber"))
    price: float | str | None = None
    status: str | None = None


class InterestRequest(BaseModel):
    """Expression of interest in a patent."""
    model_config = ConfigDict(populate_by_name=True)

    patent_id: str = Field(..., validation_alias=AliasChoices("patent_id", "patentId"))
    message: str | None = None


class NewMessage(BaseModel):
    """
    A direct message to another user.
    """
    model_config = ConfigDict(populate_by_name=True)

    receiver_id: UUID = Field(..., validation_alias=AliasChoices("receiver_id", "receiverId"))
    """Recipient user id (stored as given)."""
    patent_id: UUID | None = Field(None, validation_alias=AliasChoices("patent_id", "patentId"))
    """Optional patent the message is about."""
    subject: str | None = None
    """Subject line."""
    content: str | None = None
    """Message body."""


class ArticleData(BaseModel):
    """Editorial article fields for the admin create / update endpoints."""
    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    title: str | None = None
    category: str | None = None
    status: str | None = None
    author: str | None = None
    researcher: str | None = None
    affiliation: str | None = None
    excerpt: str | None = Field(None, validation_alias=AliasChoices("excerpt", "description"))
    content: str | None = None
    featured_image: str | None = Field(None, validation_alias=AliasChoices("featured_image", "featuredImage"))
