"""
Pydantic models for user data.

A user is nothing more than an opaque identifier and a unique
username.  Decks reference users through ``userId``.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    username: str = Field(..., examples=["alice"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str
    username: str
