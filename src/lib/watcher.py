"""
Watch loop: rebuild the project when its sources change

A watchdog observer thread reports filesystem events; each event for a
required source is handed to the asyncio loop, where a rebuild gate owned
by the Watcher lets at most one build run at a time. Events arriving while
a rebuild is in flight are dropped, not queued.

State machine:
    Idle --change (gate clear)--> Rebuilding --build settles--> Idle
"""

import asyncio
import contextvars
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ..config import appsettings, AppSettings
from ..models.assets import REQUIRED_FILES
from .builder import Builder
from .errors import MissingSourcesError
from .log import LOG, LOG_error
from .reader import sources_missing


class ChangeHandler(FileSystemEventHandler):
    """Forwards changes to a fixed set of files, ignoring everything else"""

    def __init__(self, paths: Iterable[Path], notify: Callable[[str], Any]):
        self.paths = {os.path.realpath(p) for p in paths}
        self.notify = notify

    def _changed(self, path: Any) -> None:
        path = os.path.realpath(os.fsdecode(path))
        if path in self.paths:
            self.notify(path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._changed(event.src_path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._changed(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # editors that save through a temp file and rename
        if not event.is_directory:
            self._changed(event.dest_path)


class Watcher:
    """
    Watches the required sources of a project and rebuilds on change.

    Attributes:
        paths: Absolute paths of the watched sources
        rebuilding: Rebuild gate; True while a build is in flight
    """

    def __init__(
        self,
        cwd: Optional[Path] = None,
        settings: Optional[AppSettings] = None,
        build: Optional[Callable[[], Awaitable[Any]]] = None,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        """
        Initialize watcher

        Args:
            cwd: Project working directory (default: process cwd)
            settings: Settings to use (default: the application singleton)
            build: Coroutine function running one build (default: Builder)
            observer_factory: Creates the watchdog observer
        """
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.settings = settings or appsettings
        self.sources_dir = self.settings.sourcesDir_get(self.cwd)
        self.paths = [self.sources_dir / name for name in REQUIRED_FILES]
        self._build = build or self._build_default
        self.observer_factory = observer_factory
        self.rebuilding = False
        self._task: Optional[asyncio.Task] = None
        self._stop: Optional[asyncio.Event] = None
        self._stop_requested = False

    async def _build_default(self) -> Path:
        return await Builder(cwd=self.cwd, settings=self.settings).build()

    def change_handle(self, path: Optional[str] = None) -> Optional[asyncio.Task]:
        """
        React to one change event. Must run on the event loop thread.

        The gate is set before the build task is created, so a second event
        handled right after this one is dropped.

        Args:
            path: Source that changed, for logging

        Returns:
            The rebuild task, or None if the event was dropped
        """
        if self.rebuilding:
            LOG(f"Ignoring change to {path}: rebuild in progress", level=3)
            return None
        self.rebuilding = True
        LOG(f"Files changed on {datetime.now().strftime('%c')}.", level=1)
        LOG("Rebuilding...", level=1)
        self._task = asyncio.get_running_loop().create_task(self._rebuild())
        return self._task

    async def _rebuild(self) -> bool:
        """
        Run one build and clear the gate however it ends.

        Returns:
            True if the build succeeded
        """
        try:
            if self.settings.watch_debounce_ms:
                await asyncio.sleep(self.settings.watch_debounce_ms / 1000)
            await self._build()
            return True
        except Exception as e:
            # the loop must survive a broken source; the next save retries
            LOG_error(f"Rebuild failed: {e}")
            return False
        finally:
            self.rebuilding = False

    def stop(self) -> None:
        """Ask run() to return; honoured even if run() has not started yet"""
        self._stop_requested = True
        if self._stop is not None:
            self._stop.set()

    async def run(self) -> None:
        """
        Observe the sources directory until stop() or cancellation.

        Raises:
            MissingSourcesError: If the sources directory does not exist
        """
        if not self.sources_dir.is_dir():
            raise MissingSourcesError(sources_missing(self.sources_dir))

        loop = asyncio.get_running_loop()
        context = contextvars.copy_context()
        self._stop = asyncio.Event()
        if self._stop_requested:
            self._stop.set()

        def notify(path: str) -> None:
            loop.call_soon_threadsafe(self.change_handle, path, context=context)

        observer = self.observer_factory()
        observer.schedule(ChangeHandler(self.paths, notify), str(self.sources_dir), recursive=False)
        observer.start()
        LOG(f"Watching {self.settings.sources_dir}/ for changes...", level=1)
        try:
            await self._stop.wait()
        finally:
            observer.stop()
            observer.join()
            if self._task is not None and not self._task.done():
                await self._task


def watch(cwd: Optional[Path] = None, settings: Optional[AppSettings] = None) -> None:
    """Synchronous entry point: watch until interrupted"""
    try:
        asyncio.run(Watcher(cwd=cwd, settings=settings).run())
    except KeyboardInterrupt:
        LOG("Stopped watching.", level=1)
