"""
Background execution of import runs.

:class:`TagImporter` is the trigger surface: ``import_tags_from_csv()``
takes no arguments, reads its inputs from :class:`ImporterSettings`, and
starts the run on a worker thread so the caller is never blocked.  Only one
run is active per importer; triggering again disposes the previous task
(stop at the next record boundary, then join) before starting a new one.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from .config import ImporterSettings
from .importer import ImportPreconditionError, ImportRunner
from .models import ImportSummary
from .namespace import HostTree
from .report import Reporter

logger = logging.getLogger(__name__)


class LongRunningTask:
    """Runs *target* once on a daemon worker thread.

    *target* receives the task's stop event and should return promptly once
    it is set.  The return value is kept on :attr:`result`; an exception is
    kept on :attr:`error`.
    """

    def __init__(self, target: Callable[[threading.Event], Any], name: str = 'slc-tag-import'):
        self._target = target
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.result: Any = None
        self.error: Optional[BaseException] = None

    @property
    def stop_event(self) -> threading.Event:
        return self._stop

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError(f"Task '{self._name}' was already started")
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            self.result = self._target(self._stop)
        except ImportPreconditionError as e:
            # Already reported by the runner.
            self.error = e
        except Exception as e:
            logger.exception("Task '%s' failed", self._name)
            self.error = e

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the task finishes.  Returns ``False`` on timeout."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def dispose(self, timeout: Optional[float] = None) -> None:
        """Ask the task to stop and wait for its thread to exit."""
        self._stop.set()
        self.wait(timeout)


class TagImporter:
    """Parameterless import trigger bound to a host tree and settings."""

    def __init__(
        self,
        tree: HostTree,
        settings: ImporterSettings,
        reporter: Optional[Reporter] = None,
    ):
        self.tree = tree
        self.settings = settings
        self.reporter = reporter if reporter is not None else Reporter()
        self._task: Optional[LongRunningTask] = None

    @property
    def task(self) -> Optional[LongRunningTask]:
        return self._task

    def import_tags_from_csv(self) -> LongRunningTask:
        """Start an import run in the background, replacing any active run."""
        if self._task is not None:
            self._task.dispose()
        self._task = LongRunningTask(self._run_import)
        self._task.start()
        return self._task

    def _run_import(self, stop_event: threading.Event) -> ImportSummary:
        runner = ImportRunner(self.tree, self.reporter, stop_event=stop_event)
        return runner.run(
            self.settings.csv_path,
            self.settings.driver,
            self.settings.station,
        )

    def wait(self, timeout: Optional[float] = None) -> Optional[ImportSummary]:
        """Wait for the current run and return its summary, if it produced one."""
        if self._task is None:
            return None
        self._task.wait(timeout)
        return self._task.result

    def dispose(self) -> None:
        if self._task is not None:
            self._task.dispose()
            self._task = None
