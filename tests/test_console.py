"""
Tests for the console renderer and command dispatch.
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from frontend.client import TaskApiClient
from frontend.console import handle_command, priority_color, render, render_task
from frontend.state import AuthMode, ClientApp, FormMode, View
from frontend.storage import TokenStorage


@pytest_asyncio.fixture
async def ui(client, settings):
    api = TaskApiClient("http://testserver", http=client)
    return ClientApp(api=api, storage=TokenStorage(settings.token_file))


@pytest_asyncio.fixture
async def logged_in(ui):
    await handle_command(ui, "register alice pw1")
    await handle_command(ui, "login alice pw1")
    assert ui.view is View.AUTHENTICATED
    return ui


class TestRender:
    def test_priority_colors(self):
        assert priority_color("High") == "danger"
        assert priority_color("Medium") == "warning"
        assert priority_color("Low") == "success"

    def test_unscheduled_task(self):
        line = render_task({"id": 3, "title": "t", "priority": "Low", "status": "Pending"})
        assert "Due: Unscheduled" in line
        assert line.startswith("[ ] #3 t")

    def test_completed_task_is_struck(self):
        line = render_task(
            {"id": 1, "title": "t", "priority": "High", "status": "Completed", "dueDate": "2026-01-02"}
        )
        assert line.startswith("[x] #1 ~t~")
        assert "Due: 2026-01-02" in line

    @pytest.mark.asyncio
    async def test_auth_screen(self, ui):
        assert "Welcome Back" in render(ui)
        ui.toggle_auth_mode()
        assert "Join Us" in render(ui)

    @pytest.mark.asyncio
    async def test_empty_dashboard(self, logged_in):
        text = render(logged_in)
        assert "My Tasks" in text
        assert "No tasks found" in text


class TestCommands:
    @pytest.mark.asyncio
    async def test_quit(self, ui):
        assert await handle_command(ui, "quit") is False
        assert await handle_command(ui, "") is True

    @pytest.mark.asyncio
    async def test_register_switches_to_login(self, ui):
        await handle_command(ui, "register alice pw1")
        assert ui.auth_mode is AuthMode.LOGIN
        assert "Please log in" in render(ui)

    @pytest.mark.asyncio
    async def test_add_edit_save(self, logged_in):
        await handle_command(logged_in, 'add "Buy milk" priority=High due=2026-10-20')
        assert [t["title"] for t in logged_in.tasks] == ["Buy milk"]
        task_id = logged_in.tasks[0]["id"]

        await handle_command(logged_in, f"edit {task_id}")
        assert logged_in.form_mode is FormMode.EDIT
        await handle_command(logged_in, "set status=Completed")
        await handle_command(logged_in, "save")

        assert logged_in.form_mode is FormMode.CREATE
        assert logged_in.tasks[0]["status"] == "Completed"
        assert "~Buy milk~" in render(logged_in)

    @pytest.mark.asyncio
    async def test_filter_and_clear(self, logged_in):
        await handle_command(logged_in, "add a priority=High")
        await handle_command(logged_in, "add b priority=Low")

        await handle_command(logged_in, "filter priority=High")
        assert [t["title"] for t in logged_in.tasks] == ["a"]
        assert "priority=High" in render(logged_in)

        await handle_command(logged_in, "filter")
        assert len(logged_in.tasks) == 2

    @pytest.mark.asyncio
    async def test_delete_asks_first(self, logged_in):
        await handle_command(logged_in, "add doomed")
        task_id = logged_in.tasks[0]["id"]

        refuse = AsyncMock(return_value=False)
        await handle_command(logged_in, f"delete {task_id}", confirm=refuse)
        refuse.assert_awaited_once()
        assert len(logged_in.tasks) == 1

        await handle_command(logged_in, f"delete {task_id}", confirm=AsyncMock(return_value=True))
        assert logged_in.tasks == []

    @pytest.mark.asyncio
    async def test_server_error_lands_in_banner(self, logged_in):
        await handle_command(logged_in, "add x priority=Urgent")
        assert "Urgent" in logged_in.error
        assert "dismiss" in render(logged_in)

        await handle_command(logged_in, "dismiss")
        assert logged_in.error == ""

    @pytest.mark.asyncio
    async def test_logout(self, logged_in):
        await handle_command(logged_in, "logout")
        assert logged_in.view is View.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_unknown_command(self, logged_in):
        await handle_command(logged_in, "frobnicate")
        assert "Unknown command" in logged_in.error
