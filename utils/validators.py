"""
Boundary validators for task fields and listing filters.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from database.models import Priority, TaskStatus
from utils.errors import ValidationError

E = TypeVar("E", bound=Enum)

_WRITABLE_FIELDS = ("title", "description", "due_date", "priority", "status")


def coerce_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    """Map a wire value onto its closed set or raise ``ValidationError``."""
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if member.value == value:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"Invalid {field} {value!r}; expected one of: {allowed}")


def parse_due_date(value: Any) -> Optional[date]:
    """Accept ``None``, ``""`` or an ISO ``YYYY-MM-DD`` string."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            if len(value) == 10:
                return date.fromisoformat(value)
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValidationError(f"Invalid dueDate {value!r}; expected YYYY-MM-DD")


def _clean_title(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Title is required")
    return value.strip()


def validate_task_fields(fields: Dict[str, Any], *, creating: bool) -> Dict[str, Any]:
    """
    Normalise a client-supplied field dict into column values.

    On create a title is mandatory; on update only the fields present are
    checked.  Keys outside the writable set are dropped.
    """
    cleaned: Dict[str, Any] = {}
    if creating or "title" in fields:
        cleaned["title"] = _clean_title(fields.get("title"))

    for key in _WRITABLE_FIELDS:
        if key not in fields or key == "title":
            continue
        value = fields[key]
        if key == "due_date":
            cleaned[key] = parse_due_date(value)
        elif key == "priority":
            if value is None:
                raise ValidationError("Priority cannot be null")
            cleaned[key] = coerce_enum(Priority, value, "priority")
        elif key == "status":
            if value is None:
                raise ValidationError("Status cannot be null")
            cleaned[key] = coerce_enum(TaskStatus, value, "status")
        else:
            if value is not None and not isinstance(value, str):
                raise ValidationError("Description must be text")
            cleaned[key] = value or None
    return cleaned


def validate_filter(
    status: Optional[str], priority: Optional[str]
) -> Dict[str, Enum]:
    """
    Build equality constraints for a task listing.

    Blank values mean "no restriction"; unrecognised values are rejected
    rather than silently matching nothing.
    """
    constraints: Dict[str, Enum] = {}
    if status:
        constraints["status"] = coerce_enum(TaskStatus, status, "status")
    if priority:
        constraints["priority"] = coerce_enum(Priority, priority, "priority")
    return constraints
