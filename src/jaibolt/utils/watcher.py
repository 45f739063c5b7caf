import logging
import time
from pathlib import Path
from typing import Callable, Optional
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from ..compiler.driver import is_jai_source

logger = logging.getLogger(__name__)

# Editors commonly emit several events for one save
SAVE_DEBOUNCE_SECONDS = 0.5


class JaiSaveHandler(FileSystemEventHandler):
    """
    Reports saves of one .jai source file, including editors that write a
    temporary file and rename it over the original.
    """
    def __init__(self, source_path: Path, on_save: Callable[[str], None]):
        self.source_path = source_path
        self.on_save = on_save
        self._last_fired: Optional[float] = None

    def _is_source(self, path) -> bool:
        if not path or not is_jai_source(str(path)):
            return False
        return Path(path).resolve() == self.source_path

    def _saved(self, path):
        if not self._is_source(path):
            return
        now = time.monotonic()
        if self._last_fired is not None and now - self._last_fired <= SAVE_DEBOUNCE_SECONDS:
            logger.debug("Ignoring repeated save event for %s", self.source_path)
            return
        self._last_fired = now
        logger.debug("Save detected in %s", self.source_path)
        self.on_save(str(self.source_path))

    def on_modified(self, event):
        if not event.is_directory:
            self._saved(event.src_path)

    def on_created(self, event):
        if not event.is_directory:
            self._saved(event.src_path)

    def on_moved(self, event):
        if not event.is_directory:
            self._saved(getattr(event, "dest_path", None))


class FileWatcher:
    """Runs a watchdog observer on the directory holding the watched .jai file."""

    def __init__(self):
        self.observer: Optional[Observer] = None

    @property
    def running(self) -> bool:
        return self.observer is not None

    def start_watching(self, file_path: str, on_save: Callable[[str], None]):
        source = Path(file_path).resolve()
        if not source.exists():
            raise FileNotFoundError(f"Cannot watch non-existent file: {file_path}")
        if not is_jai_source(str(source)):
            raise ValueError(f"Not a .jai source file: {file_path}")
        if self.running:
            self.stop_watching()

        self.observer = Observer()
        self.observer.schedule(JaiSaveHandler(source, on_save), str(source.parent), recursive=False)
        self.observer.start()
        logger.info("Watching %s", source)

    def stop_watching(self):
        if self.observer is None:
            return
        self.observer.stop()
        self.observer.join()
        self.observer = None
