"""Pydantic schemas for the todo backend wire format."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class User(BaseModel):
    """Identity record owned by the backend."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    email: str


class Todo(BaseModel):
    """Task record. ``id`` stays empty until the server assigns one."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[str] = None
    title: str
    description: str = ""


class AuthResponse(BaseModel):
    """Body returned by login and register."""

    token: str
    user: User


class TodoCreateRequest(BaseModel):
    """Request body for adding a todo."""

    title: str = Field(..., min_length=1)
    description: str = ""


class ApiEnvelope(BaseModel, Generic[T]):
    """``{statusCode, data, message?, success?}`` wrapper around payloads."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: Optional[int] = Field(None, alias="statusCode")
    data: T
    message: Optional[str] = None
    success: Optional[bool] = None
