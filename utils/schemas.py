"""
Pydantic schemas for the task tracker API.

Request bodies are deliberately lenient (every field optional, unknown keys
ignored): required-field and enum checks happen in ``utils.validators`` so
that they surface as ``ValidationError`` with a readable message.  Response
models serialise with camelCase aliases.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from database.models import Priority, TaskStatus


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class Credentials(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: int = Field(..., alias="userId")


class LoginResponse(BaseModel):
    token: str
    username: str


# ═══════════════════════════════════════════════════════════════════════════════
# Tasks
# ═══════════════════════════════════════════════════════════════════════════════


class TaskFields(BaseModel):
    """Writable task fields as sent by a client (create or partial update)."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[Any] = Field(
        None, validation_alias=AliasChoices("dueDate", "due_date")
    )
    priority: Optional[str] = None
    status: Optional[str] = None

    def supplied(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Priority
    status: TaskStatus
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeleteResponse(BaseModel):
    success: bool
