# src/bob_tracker/ui/formatter.py

"""
Default PresentationGateway: turns store outcomes into Bob's replies.

Pure string building. Printing is the console connector's job.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import Task, render

INDENT = "  "


def _count_phrase(n: int) -> str:
    return f"Now you have {n} {'task' if n == 1 else 'tasks'} in the list."


class Formatter:
    def render_added(self, task: Task, new_count: int) -> str:
        return f"Got it. I've added this task:\n{INDENT}{render(task)}\n{_count_phrase(new_count)}"

    def render_list(self, tasks: Sequence[Task]) -> str:
        if not tasks:
            return self.render_empty()
        lines = ["Here are the tasks in your list:"]
        for i, t in enumerate(tasks, start=1):
            lines.append(f"{i}.{render(t)}")
        return "\n".join(lines)

    def render_marked(self, task: Task) -> str:
        return f"Nice! I've marked this task as done:\n{INDENT}{render(task)}"

    def render_unmarked(self, task: Task) -> str:
        return f"OK, I've marked this task as not done yet:\n{INDENT}{render(task)}"

    def render_deleted(self, task: Task, new_count: int) -> str:
        return f"Noted. I've removed this task:\n{INDENT}{render(task)}\n{_count_phrase(new_count)}"

    def render_empty(self) -> str:
        return "There are no tasks in your list."

    # ---- shell-only helpers (not part of the store contract) ----

    def render_greeting(self, name: str) -> str:
        return f"Hello! I'm {name}.\nWhat can I do for you?"

    def render_farewell(self) -> str:
        return "Bye. Hope to see you again soon!"

    def render_error(self, problem: BaseException | str) -> str:
        return f"OOPS!!! {problem}"
