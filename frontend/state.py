"""
Client UI state machine.

``ClientApp`` is either *unauthenticated* (login/register form) or
*authenticated* (task dashboard).  The session token is mirrored into
``TokenStorage`` so the initial state after a restart follows whatever
token is on disk.  Every API failure lands in ``error`` (the banner) and
leaves the rest of the state untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from frontend.client import ApiError, TaskApiClient
from frontend.storage import TokenStorage

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "Account created! Please log in."


class View(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class AuthMode(str, Enum):
    LOGIN = "login"
    REGISTER = "register"


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


def blank_form() -> Dict[str, Any]:
    return {"title": "", "priority": "Medium", "status": "Pending", "dueDate": ""}


@dataclass
class TaskFilter:
    status: str = ""
    priority: str = ""


@dataclass
class ClientApp:
    api: TaskApiClient
    storage: TokenStorage
    token: Optional[str] = None
    auth_mode: AuthMode = AuthMode.LOGIN
    message: str = ""
    error: str = ""
    tasks: List[Dict[str, Any]] = field(default_factory=list)
    filter: TaskFilter = field(default_factory=TaskFilter)
    form: Dict[str, Any] = field(default_factory=blank_form)
    edit_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.token is None:
            self.token = self.storage.get()

    # ── derived state ──────────────────────────────────────────────────

    @property
    def view(self) -> View:
        return View.AUTHENTICATED if self.token else View.UNAUTHENTICATED

    @property
    def form_mode(self) -> FormMode:
        return FormMode.EDIT if self.edit_id is not None else FormMode.CREATE

    def dismiss_error(self) -> None:
        self.error = ""

    async def start(self) -> None:
        """Initial load: a stored token goes straight to the dashboard."""
        if self.token:
            await self.refresh()

    # ── unauthenticated ────────────────────────────────────────────────

    def toggle_auth_mode(self) -> None:
        self.auth_mode = (
            AuthMode.LOGIN if self.auth_mode is AuthMode.REGISTER else AuthMode.REGISTER
        )

    async def submit_auth(self, username: str, password: str) -> None:
        """Register or log in depending on ``auth_mode``."""
        try:
            if self.auth_mode is AuthMode.REGISTER:
                await self.api.register(username, password)
                self.message = REGISTERED_MESSAGE
                self.auth_mode = AuthMode.LOGIN
                return
            data = await self.api.login(username, password)
        except ApiError as exc:
            self.message = exc.message
            return
        self.message = ""
        await self.sign_in(data["token"])

    async def sign_in(self, token: str) -> None:
        self.storage.set(token)
        await self._set_token(token)

    def sign_out(self) -> None:
        self.storage.clear()
        self.token = None
        self.tasks = []
        self.edit_id = None
        self.filter = TaskFilter()
        self.form = blank_form()
        self.error = ""

    async def _set_token(self, token: Optional[str]) -> None:
        changed = token != self.token
        self.token = token
        if changed and token:
            await self.refresh()

    # ── authenticated ──────────────────────────────────────────────────

    async def refresh(self) -> None:
        if not self.token:
            return
        try:
            self.tasks = await self.api.list_tasks(
                self.token, status=self.filter.status, priority=self.filter.priority
            )
        except ApiError as exc:
            logger.warning("Failed to fetch tasks: %s", exc)
            self.error = exc.message

    async def set_filter(
        self, status: Optional[str] = None, priority: Optional[str] = None
    ) -> None:
        """Change the active filter; the list is refetched when it changes."""
        new = TaskFilter(
            status=self.filter.status if status is None else status,
            priority=self.filter.priority if priority is None else priority,
        )
        if new != self.filter:
            self.filter = new
            await self.refresh()

    def update_form(self, **fields: Any) -> None:
        self.form.update(fields)

    def start_edit(self, task: Dict[str, Any]) -> None:
        self.form = {
            "title": task.get("title") or "",
            "description": task.get("description"),
            "priority": task.get("priority") or "Medium",
            "status": task.get("status") or "Pending",
            "dueDate": task.get("dueDate") or "",
        }
        self.edit_id = task["id"]

    def cancel_edit(self) -> None:
        self.edit_id = None
        self.form = blank_form()

    def find_task(self, task_id: int) -> Optional[Dict[str, Any]]:
        return next((t for t in self.tasks if t.get("id") == task_id), None)

    async def submit_form(self) -> None:
        """Create, or update when editing; then reset to create mode."""
        try:
            if self.edit_id is not None:
                await self.api.update_task(self.token, self.edit_id, self.form)
            else:
                await self.api.create_task(self.token, self.form)
        except ApiError as exc:
            self.error = exc.message
            return
        self.edit_id = None
        self.form = blank_form()
        await self.refresh()

    async def delete(self, task_id: int, confirmed: bool) -> bool:
        if not confirmed:
            return False
        try:
            removed = await self.api.delete_task(self.token, task_id)
        except ApiError as exc:
            self.error = exc.message
            return False
        await self.refresh()
        return removed
