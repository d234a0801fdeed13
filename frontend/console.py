"""
Console front end for the task tracker.

Usage:
    python -m frontend.console

Renders either the login/register form or the task dashboard and turns
typed commands into ``ClientApp`` transitions.  Type ``help`` for the
command list.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from config.settings import Settings, load_settings
from frontend.client import TaskApiClient
from frontend.state import AuthMode, ClientApp, FormMode, View
from frontend.storage import TokenStorage

logger = logging.getLogger(__name__)

Confirm = Callable[[str], Awaitable[bool]]

AUTH_HELP = """\
  login <username> <password>      sign in (or register, in register mode)
  register <username> <password>   same, in register mode
  toggle                           switch between login and register
  quit"""

DASHBOARD_HELP = """\
  add <title> [priority=..] [status=..] [due=YYYY-MM-DD] [description=..]
  edit <id>                        load a task into the form
  set field=value ...              change form fields (title, priority, status, due, description)
  save                             submit the form (create or update)
  cancel                           leave edit mode
  delete <id>                      delete a task (asks first)
  filter [status=..] [priority=..] empty value clears a filter
  refresh | dismiss | logout | quit"""

_FIELD_ALIASES = {"due": "dueDate", "duedate": "dueDate", "due_date": "dueDate"}
_PRIORITY_COLOR = {"High": "danger", "Medium": "warning"}


def priority_color(priority: str) -> str:
    return _PRIORITY_COLOR.get(priority, "success")


def _parse_assignments(args: List[str]) -> Tuple[List[str], Dict[str, str]]:
    positional: List[str] = []
    assigned: Dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if sep:
            assigned[_FIELD_ALIASES.get(key.lower(), key.lower())] = value
        else:
            positional.append(arg)
    return positional, assigned


# ── Rendering ─────────────────────────────────────────────────────────


def render_task(task: dict) -> str:
    done = "[x]" if task.get("status") == "Completed" else "[ ]"
    title = task.get("title", "")
    if task.get("status") == "Completed":
        title = f"~{title}~"
    due = task.get("dueDate") or "Unscheduled"
    return (
        f"{done} #{task.get('id')} {title}  "
        f"<{task.get('priority')}:{priority_color(task.get('priority', ''))}>  "
        f"Due: {due}  ({task.get('status')})"
    )


def render(app: ClientApp) -> str:
    lines: List[str] = []
    if app.view is View.UNAUTHENTICATED:
        heading = "Join Us" if app.auth_mode is AuthMode.REGISTER else "Welcome Back"
        lines.append(f"== {heading} ==  (Task Management Simplified)")
        lines.append(
            "Already have an account? type 'toggle' to log in"
            if app.auth_mode is AuthMode.REGISTER
            else "New here? type 'toggle' to create an account"
        )
        if app.message:
            lines.append(f"! {app.message}")
        return "\n".join(lines)

    lines.append("== My Tasks ==")
    if app.error:
        lines.append(f"! {app.error}   (type 'dismiss' to close)")
    lines.append(
        f"Filter: status={app.filter.status or 'All'}  priority={app.filter.priority or 'All'}"
    )
    if app.form_mode is FormMode.EDIT:
        form = ", ".join(f"{k}={v!r}" for k, v in app.form.items())
        lines.append(f"Editing task #{app.edit_id}: {form}")
    if not app.tasks:
        lines.append("No tasks found. Time to relax!")
    lines.extend(render_task(t) for t in app.tasks)
    return "\n".join(lines)


# ── Commands ──────────────────────────────────────────────────────────


async def _ask(prompt: str) -> bool:
    answer = await asyncio.to_thread(input, f"{prompt} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


async def handle_command(app: ClientApp, line: str, confirm: Confirm = _ask) -> bool:
    """
    Apply one command line to ``app``.

    Returns ``False`` when the user asked to quit.
    """
    try:
        words = shlex.split(line)
    except ValueError as exc:
        if app.view is View.UNAUTHENTICATED:
            app.message = str(exc)
        else:
            app.error = str(exc)
        return True
    if not words:
        return True
    cmd, args = words[0].lower(), words[1:]

    if cmd in ("quit", "exit"):
        return False
    if cmd == "help":
        print(AUTH_HELP if app.view is View.UNAUTHENTICATED else DASHBOARD_HELP)
        return True

    if app.view is View.UNAUTHENTICATED:
        await _handle_auth_command(app, cmd, args)
    else:
        await _handle_dashboard_command(app, cmd, args, confirm)
    return True


async def _handle_auth_command(app: ClientApp, cmd: str, args: List[str]) -> None:
    if cmd == "toggle":
        app.toggle_auth_mode()
        app.message = ""
        return
    if cmd in ("login", "register"):
        if len(args) != 2:
            app.message = f"usage: {cmd} <username> <password>"
            return
        wanted = AuthMode.REGISTER if cmd == "register" else AuthMode.LOGIN
        if app.auth_mode is not wanted:
            app.toggle_auth_mode()
        await app.submit_auth(args[0], args[1])
        return
    app.message = f"Unknown command {cmd!r}; type 'help'"


def _parse_id(args: List[str]) -> Optional[int]:
    if len(args) != 1:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


async def _handle_dashboard_command(
    app: ClientApp, cmd: str, args: List[str], confirm: Confirm
) -> None:
    if cmd == "logout":
        app.sign_out()
    elif cmd == "refresh":
        await app.refresh()
    elif cmd == "dismiss":
        app.dismiss_error()
    elif cmd == "filter":
        _, assigned = _parse_assignments(args)
        await app.set_filter(
            status=assigned.get("status", "" if not args else None),
            priority=assigned.get("priority", "" if not args else None),
        )
    elif cmd == "add":
        positional, assigned = _parse_assignments(args)
        app.cancel_edit()
        app.update_form(**{"title": " ".join(positional), **assigned})
        await app.submit_form()
    elif cmd == "edit":
        task_id = _parse_id(args)
        task = app.find_task(task_id) if task_id is not None else None
        if task is None:
            app.error = "usage: edit <id> (id must be in the current list)"
            return
        app.start_edit(task)
    elif cmd == "set":
        positional, assigned = _parse_assignments(args)
        if positional or not assigned:
            app.error = "usage: set field=value ..."
            return
        app.update_form(**assigned)
    elif cmd == "save":
        await app.submit_form()
    elif cmd == "cancel":
        app.cancel_edit()
    elif cmd == "delete":
        task_id = _parse_id(args)
        if task_id is None:
            app.error = "usage: delete <id>"
            return
        await app.delete(task_id, await confirm("Delete this task?"))
    else:
        app.error = f"Unknown command {cmd!r}; type 'help'"


# ── Loop ──────────────────────────────────────────────────────────────


async def run_console(settings: Settings) -> None:
    storage = TokenStorage(settings.token_file)
    async with TaskApiClient(settings.api_url, timeout=settings.request_timeout) as api:
        app = ClientApp(api=api, storage=storage)
        await app.start()
        logger.info("Console client started against %s", settings.api_url)

        while True:
            print()
            print(render(app))
            try:
                line = await asyncio.to_thread(input, "> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not await handle_command(app, line):
                break


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    )
    asyncio.run(run_console(settings))


if __name__ == "__main__":
    main()
