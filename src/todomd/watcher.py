"""File system watcher for reloading the open todo file."""

import logging
import os
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class TodoFileEventHandler(FileSystemEventHandler):
    """Handler for changes to a single file with debouncing."""

    def __init__(
        self,
        path: Path,
        on_change: Callable[[], None],
        debounce_seconds: float = 0.5,
    ):
        super().__init__()
        self.path = os.path.abspath(path)
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def _is_target(self, path: str | bytes) -> bool:
        """Check if an event path is the watched file."""
        return os.path.abspath(os.fsdecode(path)) == self.path

    def _schedule_update(self) -> None:
        """Schedule a debounced change notification."""
        logger.debug("File change detected: %s", self.path)
        with self._lock:
            if self._timer:
                self._timer.cancel()

            self._timer = threading.Timer(self.debounce_seconds, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        self.on_change()

    def cancel(self) -> None:
        """Cancel a pending notification."""
        with self._lock:
            if self._timer:
                self._timer.cancel()
                self._timer = None

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._schedule_update()

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._schedule_update()

    def on_moved(self, event: FileSystemEvent) -> None:
        # Atomic saves land as a rename onto the watched path
        if not event.is_directory and self._is_target(getattr(event, "dest_path", "")):
            self._schedule_update()


class FileWatcher:
    """Watches the directory of a todo file for changes to that file."""

    def __init__(self, on_change: Callable[[], None]):
        self.on_change = on_change
        self._observer: Observer | None = None
        self._handler: TodoFileEventHandler | None = None
        self._path: Path | None = None

    @property
    def path(self) -> Path | None:
        return self._path

    def watch(self, path: Path) -> None:
        """Start watching path, replacing any previously watched file."""
        path = Path(path)
        if self._observer is not None and self._path == path:
            return  # Already watching
        self.stop()

        self._path = path
        self._handler = TodoFileEventHandler(path, self.on_change)

        self._observer = Observer()
        self._observer.schedule(
            self._handler,
            os.path.dirname(os.path.abspath(path)),
            recursive=False,
        )
        self._observer.daemon = True
        self._observer.start()
        logger.info("File watcher started: %s", path)

    def stop(self) -> None:
        """Stop watching."""
        if self._handler is not None:
            self._handler.cancel()
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=1.0)
        self._observer = None
        self._handler = None
        self._path = None
