"""
Мост watchdog -> очередь событий трекера.

Observer работает в своём потоке и только кладёт WatchEvent в очередь;
вся логика выполняется потребителем очереди.
"""
from __future__ import annotations

import logging
import queue

from watchdog.events import (
    EVENT_TYPE_CLOSED,
    EVENT_TYPE_CLOSED_NO_WRITE,
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    EVENT_TYPE_OPENED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from sheet_wizard.errors import NotificationError, WatchSetupError
from sheet_wizard.events import EventKind, WatchEvent, paths_of

logger = logging.getLogger(__name__)

# Переименование (сохранение через временный файл) = изменение
EVENT_KINDS = {
    EVENT_TYPE_CREATED: EventKind.CREATE,
    EVENT_TYPE_MODIFIED: EventKind.MODIFY,
    EVENT_TYPE_MOVED: EventKind.MODIFY,
    EVENT_TYPE_DELETED: EventKind.REMOVE,
    EVENT_TYPE_OPENED: EventKind.ACCESS,
    EVENT_TYPE_CLOSED: EventKind.ACCESS,
    EVENT_TYPE_CLOSED_NO_WRITE: EventKind.ACCESS,
}


def to_watch_event(event: FileSystemEvent) -> WatchEvent | None:
    """watchdog event -> WatchEvent, None для неизвестных типов"""
    kind = EVENT_KINDS.get(event.event_type)
    if kind is None:
        return None
    raw_paths = [event.src_path]
    if event.event_type == EVENT_TYPE_MOVED:
        raw_paths.append(event.dest_path)
    return WatchEvent(kind=kind, paths=paths_of(raw_paths))


class QueueEventHandler(FileSystemEventHandler):
    """Кладёт каждое событие watchdog в очередь в порядке поступления."""

    def __init__(self, events: queue.Queue):
        super().__init__()
        self.events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        try:
            watch_event = to_watch_event(event)
        except Exception as e:
            self.events.put(NotificationError(f"Cannot convert {event!r}: {e}"))
            return
        if watch_event is None:
            logger.debug(f"Skipping unsupported event type: {event.event_type}")
            return
        self.events.put(watch_event)


def start_observer(directory: str, events: queue.Queue) -> Observer:
    """
    Запускает рекурсивное наблюдение за directory.

    Raises:
        WatchSetupError: директория недоступна или наблюдение не зарегистрировано
    """
    observer = Observer()
    try:
        observer.schedule(QueueEventHandler(events), directory, recursive=True)
        observer.start()
    except OSError as e:
        raise WatchSetupError(f"Cannot watch {directory}: {e}") from e
    logger.info(f"👀 Watching {directory}")
    return observer
