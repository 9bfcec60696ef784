"""Navigation stack for moving between linked todo files."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .links import resolve_linked_path
from .todofile import TodoFile

logger = logging.getLogger(__name__)

MAX_NAV_DEPTH = 50


class NavigationError(Exception):
    """A navigation attempt was rejected."""


class SelfLinkError(NavigationError):
    def __init__(self) -> None:
        super().__init__("cannot link to current file")


class LinkTargetNotFoundError(NavigationError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"file not found: {path}")
        self.path = path


class MaxDepthExceededError(NavigationError):
    def __init__(self, max_depth: int) -> None:
        super().__init__(f"maximum navigation depth ({max_depth}) reached")
        self.max_depth = max_depth


@dataclass
class NavigationEntry:
    """File and cursor position to return to."""

    file_path: Path
    cursor: int = 0


class NavigationStack:
    """Bounded stack-based history for linked file navigation."""

    def __init__(self, max_depth: int = MAX_NAV_DEPTH) -> None:
        self.max_depth = max_depth
        self._stack: list[NavigationEntry] = []

    @classmethod
    def from_paths(
        cls, paths: Iterable[Path], max_depth: int = MAX_NAV_DEPTH
    ) -> "NavigationStack":
        """Build a stack from return paths, oldest first, each at cursor 0."""
        stack = cls(max_depth)
        for path in paths:
            if len(stack) >= max_depth:
                logger.warning("Ignoring return paths beyond depth %d", max_depth)
                break
            stack._stack.append(NavigationEntry(Path(path)))
        return stack

    def resolve_target(self, current_path: Path, target: str) -> Path:
        """Resolve and validate a link target before navigating.

        Raises:
            SelfLinkError: If the target is the current file.
            LinkTargetNotFoundError: If the target does not exist.
            MaxDepthExceededError: If the stack is full.
        """
        resolved = resolve_linked_path(current_path, target)

        if os.path.abspath(resolved) == os.path.abspath(current_path):
            raise SelfLinkError()

        if not resolved.exists():
            raise LinkTargetNotFoundError(resolved)

        if len(self._stack) >= self.max_depth:
            raise MaxDepthExceededError(self.max_depth)

        return resolved

    def push(self, entry: NavigationEntry) -> None:
        """Push an entry onto the stack.

        Raises:
            MaxDepthExceededError: If the stack is full.
        """
        if len(self._stack) >= self.max_depth:
            raise MaxDepthExceededError(self.max_depth)
        self._stack.append(entry)

    def pop(self) -> NavigationEntry | None:
        """Pop and return the most recent entry, or None if empty."""
        if self._stack:
            return self._stack.pop()
        return None

    def navigate(self, todo_file: TodoFile, cursor: int, target: str) -> TodoFile:
        """Open a linked file, remembering where we came from.

        The stack is only changed once the target has been parsed.

        Raises:
            NavigationError: If the target is rejected.
            OSError: If the target cannot be read.
        """
        resolved = self.resolve_target(todo_file.path, target)
        new_file = TodoFile.parse(resolved)
        self.push(NavigationEntry(todo_file.path, cursor))
        logger.info("Navigated %s -> %s (depth %d)", todo_file.path, resolved, len(self))
        return new_file

    def is_empty(self) -> bool:
        """Check if the navigation stack is empty."""
        return len(self._stack) == 0

    def __len__(self) -> int:
        return len(self._stack)
