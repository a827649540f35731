"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

# Column widths in shared/schema.py
USERNAME_MAX_LENGTH = 50
NICKNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100


class AuthProvider(str, Enum):
    """Where an account's credentials live."""

    LOCAL = "local"
    KAKAO = "kakao"
    GOOGLE = "google"


class User(BaseModel):
    """
    Full user record as stored in the database.

    Contains the password hash, so it never leaves the service layer.
    Use UserPublic for anything that is returned to a client.
    """

    id: int
    username: Optional[str] = None
    password_hash: Optional[str] = None
    nickname: str
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    profile_image: Optional[str] = None
    provider: AuthProvider = AuthProvider.LOCAL
    provider_id: Optional[str] = None
    created_at: Optional[datetime] = None


class UserPublic(BaseModel):
    """Sanitized user view returned by the API."""

    id: int = Field(..., description="Numeric user ID")
    username: Optional[str] = Field(None, description="Local username")
    nickname: str = Field(..., description="Display nickname")
    email: Optional[str] = Field(None, description="Contact email")
    phone: Optional[str] = Field(None, description="Contact phone number")
    location: Optional[str] = Field(None, description="Free-form location")
    profile_image: Optional[str] = Field(None, description="Profile image URL")
    provider: AuthProvider = Field(..., description="Authentication provider")
    created_at: Optional[datetime] = Field(None, description="Account creation time")

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            username=user.username,
            nickname=user.nickname,
            email=user.email,
            phone=user.phone,
            location=user.location,
            profile_image=user.profile_image,
            provider=user.provider,
            created_at=user.created_at,
        )


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_email_length(value):
    if isinstance(value, str) and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"must be at most {EMAIL_MAX_LENGTH} characters")
    return value


class RegisterRequest(BaseModel):
    """
    Local account registration.

    Required fields are optional here on purpose: the service reports
    missing values with its own 400 message instead of a schema error.
    """

    username: Optional[str] = Field(None, max_length=USERNAME_MAX_LENGTH)
    password: Optional[str] = None
    nickname: Optional[str] = Field(None, max_length=NICKNAME_MAX_LENGTH)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=100)

    @field_validator("email", "phone", "location", mode="before")
    @classmethod
    def blank_optional_is_none(cls, value):
        return _blank_to_none(value)

    @field_validator("email", mode="before")
    @classmethod
    def email_fits_column(cls, value):
        return _check_email_length(value)


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile update. Omitted or null fields are left unchanged."""

    nickname: Optional[str] = Field(None, max_length=NICKNAME_MAX_LENGTH)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=100)
    profile_image: Optional[str] = None

    @field_validator("email", "phone", "location", "profile_image", mode="before")
    @classmethod
    def blank_optional_is_none(cls, value):
        return _blank_to_none(value)

    @field_validator("email", mode="before")
    @classmethod
    def email_fits_column(cls, value):
        return _check_email_length(value)


class AuthResult(BaseModel):
    """Token plus the sanitized user it was issued for."""

    token: str
    user: UserPublic


class TokenClaims(BaseModel):
    """Decoded bearer token payload."""

    sub: str = Field(..., description="Subject (numeric user ID as a string)")
    username: Optional[str] = None
    nickname: Optional[str] = None
    provider: AuthProvider = AuthProvider.LOCAL
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: Optional[str] = Field(None, description="Token ID")

    @field_validator("sub")
    @classmethod
    def sub_must_be_numeric(cls, value: str) -> str:
        if not value.isdigit():
            raise ValueError("sub must be a numeric user ID")
        return value

    @property
    def user_id(self) -> int:
        return int(self.sub)


class OAuthProviderConfig(BaseModel):
    """Public settings a frontend needs to start a federated login."""

    provider: str
    enabled: bool
    client_id: Optional[str] = None
    redirect_uri: Optional[str] = None
    authorize_url: Optional[str] = None
