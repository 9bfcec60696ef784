"""Line-preserving model of a markdown checklist file."""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from .links import linked_path

logger = logging.getLogger(__name__)

# Pattern for checklist lines: optional indent, "- [", one of " xX", "] ", text.
# Indent is ASCII whitespace only; \s would also accept \xa0 and \v.
TODO_PATTERN = re.compile(r"^([\t\n\f\r ]*)- \[([ xX])\] (.*)$")

# Bytes that are not valid UTF-8 decode to lone surrogates and encode back unchanged
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


@dataclass
class TodoItem:
    """A single parsed checklist item."""

    text: str = ""
    checked: bool = False

    @property
    def is_linked(self) -> bool:
        """Whether the item text links to another todo file."""
        return linked_path(self.text) is not None

    @property
    def linked_path(self) -> str:
        """Link target of the item, or an empty string."""
        return linked_path(self.text) or ""


def parse_todo_line(line: str) -> TodoItem | None:
    """Parse a raw line into a TodoItem, or None if it is not a checklist line."""
    match = TODO_PATTERN.match(line)
    if match is None:
        return None
    return TodoItem(text=match.group(3), checked=match.group(2) != " ")


def format_todo_line(item: TodoItem, indent: str = "") -> str:
    """Encode a TodoItem as a checklist line."""
    check = "x" if item.checked else " "
    return f"{indent}- [{check}] {item.text}"


def is_todo_line(line: str) -> bool:
    """Check if a raw line is a checklist line."""
    return TODO_PATTERN.match(line) is not None


def printable_text(text: str) -> str:
    """Replace undecodable bytes in text with U+FFFD for display."""
    return text.encode(ENCODING, ENCODING_ERRORS).decode(ENCODING, "replace")


def _read_text(path: Path) -> str:
    # newline="" keeps any \r as part of the line content
    with open(path, encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
        return f.read()


class TodoFile:
    """An entire markdown file held as raw lines plus a derived todo index.

    ``lines`` is the source of truth. ``todo_indices`` maps logical todo
    positions to line positions and is rebuilt by rescanning after every
    change to the line count.
    """

    def __init__(self, path: Path, lines: list[str]) -> None:
        self.path = Path(path)
        self.lines = lines
        self.todo_indices: list[int] = []
        self._rebuild_indices()

    @classmethod
    def parse(cls, path: Path) -> "TodoFile":
        """Read and parse the file at path.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
        """
        content = _read_text(Path(path))
        todo_file = cls(path, content.split("\n"))
        logger.debug("Parsed %s: %d todo(s)", path, todo_file.todo_count())
        return todo_file

    @property
    def title(self) -> str | None:
        """Document title from a leading ``# `` heading, if any."""
        if not self.lines:
            return None
        first = self.lines[0].strip()
        if first.startswith("# "):
            return first[2:]
        return None

    def _rebuild_indices(self) -> None:
        self.todo_indices = [i for i, line in enumerate(self.lines) if is_todo_line(line)]

    def todo_count(self) -> int:
        return len(self.todo_indices)

    def get_todo(self, todo_idx: int) -> TodoItem:
        """Return the item at a logical position."""
        item = parse_todo_line(self.lines[self.todo_indices[todo_idx]])
        if item is None:
            return TodoItem()
        return item

    def _rewrite(self, todo_idx: int, item: TodoItem) -> None:
        line_idx = self.todo_indices[todo_idx]
        match = TODO_PATTERN.match(self.lines[line_idx])
        indent = match.group(1) if match else ""
        self.lines[line_idx] = format_todo_line(item, indent)

    def set_todo_text(self, todo_idx: int, text: str) -> None:
        """Replace the text of an item, keeping its checked state."""
        item = parse_todo_line(self.lines[self.todo_indices[todo_idx]])
        if item is None:
            return
        item.text = text
        self._rewrite(todo_idx, item)

    def toggle_todo(self, todo_idx: int) -> None:
        """Flip the checked state of an item."""
        item = parse_todo_line(self.lines[self.todo_indices[todo_idx]])
        if item is None:
            return
        item.checked = not item.checked
        self._rewrite(todo_idx, item)

    def swap_todos(self, a: int, b: int) -> None:
        """Swap the line contents of two items; the index table is unaffected."""
        line_a = self.todo_indices[a]
        line_b = self.todo_indices[b]
        self.lines[line_a], self.lines[line_b] = self.lines[line_b], self.lines[line_a]

    def delete_todo(self, todo_idx: int) -> None:
        """Remove an item's line and rebuild the index."""
        del self.lines[self.todo_indices[todo_idx]]
        self._rebuild_indices()

    def insert_todo(self, after_todo_idx: int, item: TodoItem) -> None:
        """Insert a new item after the given logical position.

        With -1 or an empty list the item is appended to the end of the
        file, before the trailing empty line if the file ends with a newline.
        """
        new_line = format_todo_line(item)

        if self.todo_count() == 0 or after_todo_idx < 0:
            insert_at = len(self.lines)
            if insert_at > 0 and self.lines[insert_at - 1] == "":
                insert_at -= 1
        else:
            insert_at = self.todo_indices[after_todo_idx] + 1

        self.lines.insert(insert_at, new_line)
        self._rebuild_indices()

    def content(self) -> str:
        """Serialize the line buffer."""
        return "\n".join(self.lines)

    def differs_from_disk(self) -> bool:
        """Check whether the file on disk no longer matches the buffer."""
        try:
            return _read_text(self.path) != self.content()
        except OSError:
            return True

    def save(self) -> None:
        """Write the buffer back to disk with an atomic replace.

        Raises:
            OSError: If the temp file cannot be written or renamed.
            UnicodeError: If the text holds characters that cannot be encoded.
        """
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(temp_path, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
                f.write(self.content())
            os.replace(temp_path, self.path)
        except (OSError, UnicodeError):
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved %s", self.path)
