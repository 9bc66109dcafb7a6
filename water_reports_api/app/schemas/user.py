"""
Pydantic models for user data.

Defines schemas for registering and updating users, logging in and
reading user information.  Passwords are accepted on input but never
returned through the API.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering or updating a user.

    ``role`` is free‑form; ``"citizen"`` and ``"official"`` are the
    values the web client uses.  Validation of required fields and the
    email format happens in ``UserService``.
    """

    name: Optional[str] = Field(None, examples=["John Citizen"])
    email: Optional[str] = Field(None, examples=["john@citizen.com"])
    password: Optional[str] = Field(None, examples=["demo123"])
    role: Optional[str] = Field(None, examples=["citizen"])
    department: Optional[str] = Field(None, examples=["Community Member"])


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    name: str
    email: str
    role: str
    department: Optional[str] = None
    created_at: str = Field(..., alias="createdAt")

    model_config = {
        "populate_by_name": True,
    }


class LoginResponse(BaseModel):
    """Login (and failed registration) response.

    On failure every identity field is ``None`` and ``message`` says
    why.
    """

    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    message: str
