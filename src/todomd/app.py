"""Main Textual application for todomd."""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static
from textual.worker import Worker

from .config import Config
from .session import EditorSession, LoadFile, Quit, StartInput
from .todofile import TodoFile
from .watcher import FileWatcher
from .widgets import TodoHeader, TodoList, render_help


class TodoApp(App):
    """todomd - Markdown Checklist Editor TUI."""

    TITLE = "todomd"
    SUB_TITLE = "Markdown Checklist Editor"

    CSS = """
    #status {
        color: $error;
        padding: 0 1;
        height: auto;
    }

    #todo-list {
        height: 1fr;
    }

    #help {
        color: $text-muted;
        padding: 0 1;
        height: auto;
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, session: EditorSession, config: Config) -> None:
        super().__init__()
        self.session = session
        self.config = config
        self._watcher: FileWatcher | None = None
        self._pending_load: LoadFile | None = None  # Load currently in flight

    def compose(self) -> ComposeResult:
        yield TodoHeader(id="header")
        yield Static("", id="status")
        yield TodoList(id="todo-list")
        yield Static("", id="help")

    def on_mount(self) -> None:
        """Initialize the app after mounting."""
        if self.config.watch:
            self._watcher = FileWatcher(self._on_file_change)
            self._watcher.watch(self.session.todo_file.path)

        self._refresh_view()
        self.query_one("#todo-list", TodoList).lines_view.focus()

    async def on_unmount(self) -> None:
        """Clean up when app closes."""
        if self._watcher:
            self._watcher.stop()

    def _refresh_view(self) -> None:
        """Redraw every part of the screen from the session."""
        session = self.session
        self.query_one("#header", TodoHeader).update_header(
            session, self.config.date_format, self.config.header_title
        )

        status = self.query_one("#status", Static)
        status.update(session.status_message)
        status.display = bool(session.status_message)

        self.query_one("#todo-list", TodoList).update_items(session)
        self.query_one("#help", Static).update(render_help(session))

    def _apply_effect(self, effect) -> None:
        """Carry out what the session asked for after a command."""
        if isinstance(effect, Quit):
            self.exit()
            return

        if isinstance(effect, LoadFile):
            self._load_file(effect)

        self._refresh_view()

        if isinstance(effect, StartInput):
            self.query_one("#todo-list", TodoList).start_input(effect.value)

    def _load_file(self, request: LoadFile) -> None:
        """Parse a file in a background thread."""
        self._pending_load = request
        self.run_worker(
            lambda: TodoFile.parse(request.path),
            name="_load_file",
            thread=True,
            exclusive=True,
            group="load",
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Deliver a finished load to the session."""
        if event.worker.name != "_load_file":
            return

        request = self._pending_load
        if request is None:
            return

        if event.state.name == "SUCCESS":
            self._pending_load = None
            self.session.file_loaded(request, todo_file=event.worker.result)
        elif event.state.name == "ERROR":
            self._pending_load = None
            self.session.file_loaded(request, error=event.worker.error)
        else:
            return

        if self._watcher:
            self._watcher.watch(self.session.todo_file.path)
        self._refresh_view()

    def on_todo_list_key_pressed(self, event: TodoList.KeyPressed) -> None:
        """Handle a command key on the todo list."""
        if self._pending_load is not None:
            return
        self._apply_effect(self.session.handle_key(event.key))

    def on_todo_list_text_submitted(self, event: TodoList.TextSubmitted) -> None:
        """Handle Enter in the text input."""
        self.session.submit_text(event.value)
        self._refresh_view()

    def on_todo_list_text_cancelled(self, event: TodoList.TextCancelled) -> None:
        """Handle Escape in the text input."""
        self._apply_effect(self.session.handle_key("escape"))

    def _on_file_change(self) -> None:
        """Handle file system changes (called from watcher thread)."""
        self.call_from_thread(self._handle_file_change)

    def _handle_file_change(self) -> None:
        """Reload the open file on the main thread if it changed on disk."""
        if self._pending_load is not None:
            return
        effect = self.session.external_change()
        if effect is not None:
            self._load_file(effect)


def run_app(session: EditorSession, config: Config) -> None:
    """Run the todomd application."""
    app = TodoApp(session, config)
    app.run()
