"""Editor session state and command handling.

The session owns the open TodoFile, the cursor, the current mode and the
navigation stack. Keys are fed in one at a time through ``handle_key``; the
returned effect tells the UI what to do next (start a text input, load a
file in the background, or quit). Loads come back through ``file_loaded``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .navigation import NavigationEntry, NavigationError, NavigationStack
from .todofile import TodoFile, TodoItem

logger = logging.getLogger(__name__)

HEADER_ICONS = [
    "◆", "◇", "●", "○", "■", "□", "▲", "△",
    "★", "☆", "✦", "※", "›", "»", "→", "•", "‣", "⌘",
    "⌬", "⌭", "⏚", "⎈", "⌖", "⌑", "⏏", "⏍", "☊",
    "⚀", "⚁", "⚂", "⚃", "⚄", "⚅",
    "☽", "☿", "♃", "♄", "♅", "⚶", "⚷",
]


class Mode(Enum):
    """Interaction mode of the session."""

    NORMAL = "normal"
    EDITING = "editing"
    CREATING = "creating"
    REARRANGE = "rearrange"


@dataclass
class LoadFile:
    """Request to load a file off the command stream.

    forward: opening a link; the cursor starts at 0 and a failed load
        pops the entry pushed for it.
    reload: re-reading the current file after an external change.
    """

    path: Path
    cursor: int = 0
    forward: bool = False
    reload: bool = False


@dataclass
class StartInput:
    """Request to show the text input prefilled with value."""

    value: str = ""


@dataclass
class Quit:
    """Request to end the session."""


Effect = LoadFile | StartInput | Quit | None


class EditorSession:
    """State of one interactive editing session."""

    def __init__(
        self,
        todo_file: TodoFile,
        nav_stack: NavigationStack | None = None,
        header_icon: str | None = None,
    ) -> None:
        self.todo_file = todo_file
        self.nav_stack = nav_stack if nav_stack is not None else NavigationStack()
        self.cursor = 0
        self.mode = Mode.NORMAL
        self.pending_delete = False
        self.status_message = ""
        self.header_icon = header_icon or random.choice(HEADER_ICONS)

    @property
    def depth(self) -> int:
        return len(self.nav_stack)

    def _save(self) -> None:
        try:
            self.todo_file.save()
        except (OSError, UnicodeError) as e:
            logger.error("Failed to save %s: %s", self.todo_file.path, e)
            self.status_message = f"Error saving: {e}"

    def _clamp_cursor(self) -> None:
        count = self.todo_file.todo_count()
        if count == 0:
            self.cursor = 0
        elif self.cursor >= count:
            self.cursor = count - 1

    def handle_key(self, key: str) -> Effect:
        """Process a single key press."""
        self.status_message = ""

        if self.mode is Mode.NORMAL:
            return self._handle_normal(key)
        if self.mode is Mode.REARRANGE:
            return self._handle_rearrange(key)

        # Text modes: everything but escape belongs to the input
        if key == "escape":
            self.mode = Mode.NORMAL
        return None

    def _handle_normal(self, key: str) -> Effect:
        count = self.todo_file.todo_count()

        if self.pending_delete:
            self.pending_delete = False
            if key == "d":
                self.todo_file.delete_todo(self.cursor)
                self._save()
                if self.cursor >= self.todo_file.todo_count() and self.cursor > 0:
                    self.cursor -= 1
                return None

        if key in ("q", "escape"):
            return self.go_back()
        elif key in ("j", "down"):
            if self.cursor < count - 1:
                self.cursor += 1
        elif key in ("k", "up"):
            if self.cursor > 0:
                self.cursor -= 1
        elif key in ("space", "enter"):
            if count > 0:
                target = self.todo_file.get_todo(self.cursor).linked_path
                if target:
                    return self.open_link(target)
                self.todo_file.toggle_todo(self.cursor)
                self._save()
        elif key == "x":
            if count > 0:
                self.todo_file.toggle_todo(self.cursor)
                self._save()
        elif key == "e":
            if count > 0:
                self.mode = Mode.EDITING
                return StartInput(self.todo_file.get_todo(self.cursor).text)
        elif key == "c":
            self.mode = Mode.CREATING
            return StartInput("")
        elif key == "r":
            if count > 0:
                self.mode = Mode.REARRANGE
        elif key == "d":
            if count > 0:
                self.pending_delete = True
        return None

    def _handle_rearrange(self, key: str) -> Effect:
        count = self.todo_file.todo_count()
        if key in ("j", "down"):
            if self.cursor < count - 1:
                self.todo_file.swap_todos(self.cursor, self.cursor + 1)
                self._save()
                self.cursor += 1
        elif key in ("k", "up"):
            if self.cursor > 0:
                self.todo_file.swap_todos(self.cursor, self.cursor - 1)
                self._save()
                self.cursor -= 1
        elif key in ("r", "escape"):
            self.mode = Mode.NORMAL
        return None

    def submit_text(self, value: str) -> None:
        """Apply the text entered in EDITING or CREATING mode."""
        if self.mode is Mode.EDITING:
            self.todo_file.set_todo_text(self.cursor, value)
            self._save()
        elif self.mode is Mode.CREATING:
            text = value.strip()
            if text:
                was_empty = self.todo_file.todo_count() == 0
                self.todo_file.insert_todo(self.cursor, TodoItem(text=text))
                self._save()
                self.cursor = 0 if was_empty else self.cursor + 1
        self.mode = Mode.NORMAL

    def open_link(self, target: str) -> Effect:
        """Validate a link target and push the current position."""
        try:
            resolved = self.nav_stack.resolve_target(self.todo_file.path, target)
            self.nav_stack.push(NavigationEntry(self.todo_file.path, self.cursor))
        except NavigationError as e:
            logger.warning("Link %r rejected: %s", target, e)
            self.status_message = f"Error: {e}"
            return None
        return LoadFile(resolved, forward=True)

    def go_back(self) -> Effect:
        """Return to the previous file, or quit at the bottom of the stack."""
        entry = self.nav_stack.pop()
        if entry is None:
            return Quit()
        return LoadFile(entry.file_path, cursor=entry.cursor)

    def external_change(self) -> Effect:
        """Request a reload if the open file was changed by someone else."""
        if self.mode is not Mode.NORMAL or not self.todo_file.differs_from_disk():
            return None
        return LoadFile(self.todo_file.path, cursor=self.cursor, reload=True)

    def file_loaded(
        self,
        request: LoadFile,
        todo_file: TodoFile | None = None,
        error: Exception | None = None,
    ) -> None:
        """Apply the outcome of a LoadFile request."""
        if request.reload and request.path != self.todo_file.path:
            return

        if error is not None or todo_file is None:
            logger.warning("Failed to load %s: %s", request.path, error)
            self.status_message = f"Error: {error}"
            if request.forward:
                self.nav_stack.pop()
            return

        self.todo_file = todo_file
        self.cursor = 0 if request.forward else request.cursor
        self._clamp_cursor()
        self.pending_delete = False
        if not request.reload:
            self.mode = Mode.NORMAL
            self.status_message = ""
        logger.info("Loaded %s", todo_file.path)
