"""Todo list widget for displaying and editing checklist items."""

from rich.style import Style
from rich.text import Text

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.message import Message
from textual.widgets import Input, Label, Static

from ..session import EditorSession, Mode
from ..todofile import printable_text

CURSOR_STYLE = Style(color="color(212)")
CHECKED_STYLE = Style(color="color(240)", strike=True)
LINK_STYLE = Style(color="color(39)")
REARRANGE_STYLE = Style(color="color(214)", bold=True)
NUMBER_STYLE = Style(color="color(243)")
DELETE_STYLE = Style(color="color(196)", bold=True)

# Maximum length of text entered for a todo
INPUT_CHAR_LIMIT = 500


def format_line_number(one_based_idx: int, total_items: int) -> str:
    """Right-align a line number to the width of total_items, plus two spaces."""
    width = len(str(total_items))
    return f"{one_based_idx:>{width}}  "


def render_todo_line(session: EditorSession, idx: int) -> Text:
    """Render a single todo item row."""
    item = session.todo_file.get_todo(idx)
    text = printable_text(item.text)
    is_cursor = idx == session.cursor
    marker = " > " if is_cursor else "   "
    number = Text(format_line_number(idx + 1, session.todo_file.todo_count()), style=NUMBER_STYLE)

    if is_cursor and session.pending_delete:
        style = DELETE_STYLE
    elif is_cursor and session.mode is Mode.REARRANGE:
        style = REARRANGE_STYLE
    elif is_cursor:
        style = CURSOR_STYLE + Style(strike=item.checked, underline=item.is_linked)
    else:
        line = Text(marker)
        line.append_text(number)
        if item.is_linked:
            line.append(text, style=LINK_STYLE + Style(strike=item.checked))
        elif item.checked:
            line.append(text, style=CHECKED_STYLE)
        else:
            line.append(text)
        return line

    line = Text(marker, style=style)
    line.append_text(number)
    line.append(text, style=style)
    return line


def render_todo_lines(session: EditorSession, positions: range | None = None) -> Text:
    """Render todo items, one per row. Renders every item by default."""
    count = session.todo_file.todo_count()
    if count == 0:
        if session.mode is Mode.CREATING:
            return Text("")
        return Text("No todos. Press 'c' to create one.")
    if positions is None:
        positions = range(count)
    return Text("\n").join(render_todo_line(session, i) for i in positions)


def split_around_input(session: EditorSession) -> tuple[range, range]:
    """Item positions shown above and below the inline text input.

    Editing replaces the cursor row with the input; creating puts the
    input directly after the cursor row.
    """
    count = session.todo_file.todo_count()
    if count == 0:
        return range(0), range(0)
    above_end = session.cursor if session.mode is Mode.EDITING else session.cursor + 1
    return range(above_end), range(session.cursor + 1, count)


def render_help(session: EditorSession) -> str:
    """Key help for the current mode."""
    if session.mode is Mode.NORMAL:
        if session.pending_delete:
            return "press d again to delete  |  any other key to cancel"
        back_label = "esc/q: back" if session.depth > 0 else "esc/q: quit"
        return (
            "j/k: navigate  space/enter: toggle/open  x: toggle  e: edit  "
            f"c: create  r: rearrange  d: delete  {back_label}"
        )
    if session.mode is Mode.EDITING:
        return "enter: save  esc: cancel"
    if session.mode is Mode.CREATING:
        return "enter: create  esc: cancel"
    return "j/k: swap items  r/esc: done rearranging"


class TodoLines(Static, can_focus=True):
    """Focusable body of the todo list; forwards every key as a command."""

    def on_key(self, event: Key) -> None:
        event.stop()
        event.prevent_default()
        self.post_message(TodoList.KeyPressed(event.key))


class TodoInput(Input):
    """Single-line input for todo text."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def action_cancel(self) -> None:
        self.post_message(TodoList.TextCancelled())


class TodoList(Vertical):
    """Widget displaying the todo items of the open file."""

    DEFAULT_CSS = """
    TodoList {
        width: 1fr;
        height: 1fr;
    }

    TodoList > #todo-lines {
        height: auto;
        padding: 0 1;
    }

    TodoList > #todo-lines-below {
        height: auto;
        padding: 0 1;
        display: none;
    }

    TodoList > #todo-input-row {
        height: 1;
        display: none;
    }

    TodoList #todo-input-number {
        width: auto;
        color: $text-muted;
        padding: 0 0 0 1;
    }

    TodoList #todo-input {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0;
    }
    """

    class KeyPressed(Message):
        """Message emitted for a key pressed on the list."""

        def __init__(self, key: str) -> None:
            super().__init__()
            self.key = key

    class TextSubmitted(Message):
        """Message emitted when the text input is submitted."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class TextCancelled(Message):
        """Message emitted when text entry is cancelled."""

        pass

    def compose(self) -> ComposeResult:
        yield TodoLines(id="todo-lines")
        with Horizontal(id="todo-input-row"):
            yield Label(" > ", id="todo-input-number")
            yield TodoInput(max_length=INPUT_CHAR_LIMIT, id="todo-input")
        yield Static(id="todo-lines-below")

    @property
    def lines_view(self) -> TodoLines:
        return self.query_one("#todo-lines", TodoLines)

    @property
    def lines_below(self) -> Static:
        return self.query_one("#todo-lines-below", Static)

    @property
    def text_input(self) -> TodoInput:
        return self.query_one("#todo-input", TodoInput)

    def update_items(self, session: EditorSession) -> None:
        """Re-render the list from the session state.

        While text is being entered the rows are split around the input
        row, so the input sits at the cursor.
        """
        lines_view = self.lines_view
        lines_below = self.lines_below
        input_row = self.query_one("#todo-input-row", Horizontal)
        if session.mode in (Mode.EDITING, Mode.CREATING):
            above, below = split_around_input(session)
            lines_view.update(render_todo_lines(session, above))
            lines_view.display = len(above) > 0
            lines_below.update(render_todo_lines(session, below))
            lines_below.display = len(below) > 0

            count = session.todo_file.todo_count()
            if session.mode is Mode.EDITING:
                number = format_line_number(session.cursor + 1, count)
            elif count == 0:
                number = format_line_number(1, 1)
            else:
                number = format_line_number(session.cursor + 2, count + 1)
            self.query_one("#todo-input-number", Label).update(f" > {number}")
            input_row.display = True
        else:
            lines_view.update(render_todo_lines(session))
            lines_view.display = True
            lines_below.display = False
            input_row.display = False
            if self.text_input.has_focus:
                lines_view.focus()

    def start_input(self, value: str) -> None:
        """Show the text input prefilled with value and focus it."""
        text_input = self.text_input
        value = printable_text(value)
        text_input.value = value
        text_input.cursor_position = len(value)
        text_input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter in the text input."""
        if event.input.id == "todo-input":
            event.stop()
            self.post_message(self.TextSubmitted(event.value))
