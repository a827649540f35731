"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from verified token claims and made available
    to route handlers via dependency injection. Handlers use `id` for
    their own ownership checks.
    """

    id: int = Field(..., description="Numeric user ID")
    username: Optional[str] = Field(None, description="Local username (None for federated-only accounts)")
    nickname: Optional[str] = Field(None, description="Display nickname")
    provider: str = Field(default="local", description="Authentication provider tag")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from token claims
    }


class ApiResponse(BaseModel, Generic[T]):
    """
    Response envelope used by every JSON endpoint.

    Success: {"success": true, "data": ...}
    Failure: {"success": false, "message": "..."}
    """

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse[T]":
        return cls(success=False, message=message)
