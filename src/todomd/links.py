"""Linked todo utilities."""

import os
from pathlib import Path

# Prefix marking a todo item as a link to another todo file
LINK_PREFIX = "todo:"


def is_linked_text(text: str) -> bool:
    """Check if item text is a link (starts with ``todo:``, case-sensitive)."""
    return text.startswith(LINK_PREFIX)


def linked_path(text: str) -> str | None:
    """Extract the link target from item text.

    Examples:
        "todo:work.md" -> "work.md"
        "todo:  spaced.md " -> "spaced.md"
        "todo:" -> ""
        "Regular item" -> None

    Returns:
        The trimmed target, an empty string for a link without a target,
        or None if the text is not a link.
    """
    if not is_linked_text(text):
        return None
    return text[len(LINK_PREFIX) :].strip()


def resolve_linked_path(current_file: Path, target: str) -> Path:
    """Resolve a link target relative to the directory of the current file.

    Absolute targets are only cleaned. ``.`` and ``..`` segments are
    collapsed lexically, without following symlinks.
    """
    if os.path.isabs(target):
        return Path(os.path.normpath(target))
    return Path(os.path.normpath(os.path.join(os.path.dirname(current_file), target)))
