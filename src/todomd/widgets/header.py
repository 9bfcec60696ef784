"""Header widget showing navigation depth, file name and date."""

from datetime import datetime
from pathlib import Path

from rich.text import Text

from textual.widgets import Static

from ..session import EditorSession
from ..todofile import printable_text


def file_basename(path: Path) -> str:
    """Get the file name without directory or extension."""
    return Path(path).stem


def build_header(
    session: EditorSession,
    date_format: str = "%b %-d, %Y",
    use_title: bool = False,
    now: datetime | None = None,
) -> Text:
    """Build the header as a Rich Text object.

    The session icon is repeated once per navigation level, so a file
    opened through two links shows three icons.
    """
    now = now or datetime.now()
    name = file_basename(session.todo_file.path)
    if use_title and session.todo_file.title:
        name = printable_text(session.todo_file.title)

    icons = session.header_icon * (session.depth + 1)
    return Text(f"{icons} {name} [{now.strftime(date_format)}]", style="bold color(170)")


class TodoHeader(Static):
    """Application header."""

    DEFAULT_CSS = """
    TodoHeader {
        width: 100%;
        height: 2;
        padding: 0 1;
    }
    """

    def update_header(self, session: EditorSession, date_format: str, use_title: bool) -> None:
        self.update(build_header(session, date_format, use_title))
