"""Watching source trees for changed ``.rsx`` files."""

from __future__ import annotations

import os
import queue
from pathlib import Path
from typing import Optional, Union

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

_CHANGE_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}
)

PathLike = Union[str, os.PathLike]


class _QueueHandler(FileSystemEventHandler):
    def __init__(self, events: "queue.Queue[FileSystemEvent]") -> None:
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._events.put(event)


def _rsx_paths(event: FileSystemEvent) -> list[Path]:
    if event.event_type not in _CHANGE_EVENTS:
        return []
    raw = [event.src_path]
    dest = getattr(event, "dest_path", "")
    if dest:
        raw.append(dest)
    paths = [Path(os.fsdecode(p)) for p in raw]
    return [p for p in paths if p.suffix == ".rsx"]


class FileWatcher:
    """Collects changes to ``.rsx`` files below the watched paths."""

    def __init__(self) -> None:
        self._events: "queue.Queue[FileSystemEvent]" = queue.Queue()
        self._handler = _QueueHandler(self._events)
        self._observer = Observer()
        self._observer.daemon = True
        self._observer.start()
        self.watched_files: set[Path] = set()

    def __enter__(self) -> FileWatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def watch_directory(self, path: PathLike) -> None:
        """Watch ``path`` and everything below it."""
        directory = Path(path)
        if not directory.exists():
            raise FileNotFoundError(f"No such directory: {directory}")
        self._observer.schedule(self._handler, str(directory), recursive=True)

    def watch_file(self, path: PathLike) -> None:
        """Watch the directory holding ``path`` and remember the file."""
        file_path = Path(path)
        parent = file_path.parent
        if not parent.exists():
            raise FileNotFoundError(f"No such directory: {parent}")
        self._observer.schedule(self._handler, str(parent), recursive=False)
        self.watched_files.add(file_path)

    def check_for_changes(self) -> list[Path]:
        """Return the ``.rsx`` paths changed since the last call, without blocking."""
        changed: list[Path] = []
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return changed
            changed.extend(_rsx_paths(event))

    def wait_for_change(self, timeout: Optional[float] = None) -> list[Path]:
        """Block for the next event and return its ``.rsx`` paths.

        Returns an empty list if the event concerns no ``.rsx`` file or if
        ``timeout`` seconds pass without any event.
        """
        try:
            event = self._events.get(timeout=timeout)
        except queue.Empty:
            return []
        return _rsx_paths(event)

    def close(self) -> None:
        """Stop watching and release the observer thread."""
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join()