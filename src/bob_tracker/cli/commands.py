# src/bob_tracker/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..core.errors import IndexOutOfRangeError, InvalidCommandError, TaskTrackerError
from ..core.state import AppState

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("bye", "exit")

_DEADLINE_RE = re.compile(r"^(?P<desc>.*?)\s*/by(?:\s+(?P<end>.*))?$", re.DOTALL)
_TASK_NUMBER_RE = re.compile(r"-?[0-9]+")
_EVENT_RE = re.compile(
    r"^(?P<desc>.*?)\s*/from(?:\s+(?P<start>.*?))?\s*/to(?:\s+(?P<end>.*))?$", re.DOTALL
)


class CommandRegistry:
    """Word-command registry used by connectors (todo, list, mark, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a line like "deadline return book /by Sunday".

        Returns the reply text, or None for a blank line. Task errors are
        rendered into the reply instead of being raised.
        """
        line = line.strip()
        if not line:
            return None

        name, _, rest = line.partition(" ")
        name = name.lower()
        handler = self._handlers.get(name)
        if not handler:
            return state.formatter.render_error(
                f"I don't know what '{name}' means. Type 'help' to list available commands."
            )

        try:
            return handler(state, rest.strip())
        except IndexOutOfRangeError as e:
            logger.debug("Rejected index %s (size=%s) for %s", e.index, e.size, name)
            if e.size == 0:
                return state.formatter.render_error("Your list is empty; there is nothing to change.")
            return state.formatter.render_error(
                f"There is no task number {e.index + 1}. Pick a number from 1 to {e.size}."
            )
        except TaskTrackerError as e:
            logger.debug("Command %s failed: %s", name, e)
            return state.formatter.render_error(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        lines.append(f"  {'/'.join(EXIT_COMMANDS)} - Save the list and exit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _task_index(args: str, usage: str) -> int:
    """Parse a 1-based task number into a 0-based store index."""
    parts = args.split()
    if len(parts) != 1 or not _TASK_NUMBER_RE.fullmatch(parts[0]):
        raise InvalidCommandError(f"Usage: {usage}")
    return int(parts[0]) - 1


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_todo(state: AppState, args: str) -> str:
    return state.task_list.add_todo(args)


def cmd_deadline(state: AppState, args: str) -> str:
    m = _DEADLINE_RE.match(args)
    if not m:
        raise InvalidCommandError("Usage: deadline <description> /by <date>")
    return state.task_list.add_deadline(m.group("desc"), m.group("end") or "")


def cmd_event(state: AppState, args: str) -> str:
    m = _EVENT_RE.match(args)
    if not m:
        raise InvalidCommandError("Usage: event <description> /from <start> /to <end>")
    return state.task_list.add_event(m.group("desc"), m.group("start") or "", m.group("end") or "")


def cmd_list(state: AppState, args: str) -> str:
    return state.task_list.list_tasks()


def cmd_mark(state: AppState, args: str) -> str:
    return state.task_list.mark_done(_task_index(args, "mark <task number>"))


def cmd_unmark(state: AppState, args: str) -> str:
    return state.task_list.mark_not_done(_task_index(args, "unmark <task number>"))


def cmd_delete(state: AppState, args: str) -> str:
    return state.task_list.delete(_task_index(args, "delete <task number>"))


def cmd_find(state: AppState, args: str) -> str:
    return state.task_list.find(args)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("todo", cmd_todo, help_text="Add a to-do: todo <description>.")
registry.register(
    "deadline", cmd_deadline, help_text="Add a deadline: deadline <description> /by <date>."
)
registry.register(
    "event", cmd_event, help_text="Add an event: event <description> /from <start> /to <end>."
)
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("mark", cmd_mark, help_text="Mark a task as done: mark <task number>.")
registry.register("unmark", cmd_unmark, help_text="Mark a task as not done: unmark <task number>.")
registry.register(
    "delete", cmd_delete, help_text="Remove a task: delete <task number>.", aliases=["rm"]
)
registry.register("find", cmd_find, help_text="Search descriptions: find <keyword>.")
