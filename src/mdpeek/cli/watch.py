"""Watch mode implementation for the mdpeek CLI.

This module re-renders a document whenever it changes on disk. Modification
events arrive on the watchdog observer thread; renders are serialized with a
lock and bursts of events (editors often write a file several times when
saving) are collapsed by a debounce interval.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from mdpeek.constants import DEFAULT_WATCH_DEBOUNCE
from mdpeek.exceptions import MdpeekError

logger = logging.getLogger(__name__)


class RenderEventHandler(FileSystemEventHandler):
    """File system event handler that re-renders one document.

    Parameters
    ----------
    document : Path
        The document to watch; events for other files are ignored
    on_change : callable
        Called without arguments to re-render and write the output
    debounce_seconds : float, default 0.2
        Minimum delay between two renders

    """

    def __init__(
        self,
        document: Path,
        on_change: Callable[[], None],
        debounce_seconds: float = DEFAULT_WATCH_DEBOUNCE,
    ) -> None:
        """Initialize the handler for a single document."""
        super().__init__()
        self.document = document.resolve()
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self.render_count = 0

        self._last_rendered: float | None = None
        self._pending: threading.Timer | None = None
        self._lock = threading.Lock()

    def matches(self, path: str | bytes) -> bool:
        """Return True if ``path`` refers to the watched document."""
        return Path(os.fsdecode(path)).resolve() == self.document

    def should_render(self) -> bool:
        """Check the debounce interval since the last render."""
        if self._last_rendered is None:
            return True
        return time.monotonic() - self._last_rendered >= self.debounce_seconds

    def rerender(self) -> None:
        """Re-render the document, or once the debounce interval ends if a render just happened.

        Events that arrive within the interval are collapsed into one trailing
        render, so the last write of a burst is always shown. Render failures
        are logged; whatever was last written stays in place.
        """
        with self._lock:
            if not self.should_render():
                self._schedule_trailing_render()
                return
            self._render()

    def cancel_pending(self) -> None:
        """Drop a scheduled trailing render."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None

    def _schedule_trailing_render(self) -> None:
        if self._pending is not None:
            logger.debug("Render of %s already scheduled", self.document)
            return
        elapsed = time.monotonic() - (self._last_rendered or 0.0)
        delay = max(self.debounce_seconds - elapsed, 0.0)
        logger.debug("Scheduling render of %s in %.2fs", self.document, delay)
        self._pending = threading.Timer(delay, self._trailing_render)
        self._pending.daemon = True
        self._pending.start()

    def _trailing_render(self) -> None:
        with self._lock:
            self._pending = None
            self._render()

    def _render(self) -> None:
        # Caller holds the lock
        self._last_rendered = time.monotonic()
        logger.info("Re-rendering %s", self.document)
        try:
            self.on_change()
        except MdpeekError as e:
            logger.error("Re-render of %s failed: %s", self.document, e)
            return
        except OSError as e:
            logger.error("Could not write output for %s: %s", self.document, e)
            return
        self.render_count += 1

    def on_modified(self, event: Any) -> None:
        """Handle file modification events."""
        if not event.is_directory and self.matches(event.src_path):
            self.rerender()

    def on_created(self, event: Any) -> None:
        """Handle file creation events (editors that replace the file on save)."""
        if not event.is_directory and self.matches(event.src_path):
            self.rerender()

    def on_moved(self, event: Any) -> None:
        """Handle file move events; only the destination path matters."""
        if not event.is_directory and self.matches(event.dest_path):
            self.rerender()


def run_watch_mode(
    document: Path,
    on_change: Callable[[], None],
    debounce: float = DEFAULT_WATCH_DEBOUNCE,
) -> int:
    """Watch a document and call ``on_change`` whenever it changes.

    Blocks until interrupted with Ctrl+C.

    Parameters
    ----------
    document : Path
        Document to watch
    on_change : callable
        Re-render callback
    debounce : float, default 0.2
        Debounce delay in seconds

    Returns
    -------
    int
        Exit code (0 for success)

    """
    handler = RenderEventHandler(document, on_change, debounce_seconds=debounce)

    # Watch the parent directory; editors often replace files instead of writing them in place
    observer = Observer()
    observer.schedule(handler, str(handler.document.parent), recursive=False)
    observer.start()
    logger.info("Watching %s. Press Ctrl+C to stop.", document)

    try:
        while observer.is_alive():
            time.sleep(0.5)
    except KeyboardInterrupt:
        logger.info("Stopping watch mode")
    finally:
        handler.cancel_pending()
        observer.stop()
        observer.join()

    return 0
