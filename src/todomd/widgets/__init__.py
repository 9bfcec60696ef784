"""todomd widgets."""

from .header import TodoHeader
from .todo_list import TodoList, render_help

__all__ = [
    "TodoHeader",
    "TodoList",
    "render_help",
]
