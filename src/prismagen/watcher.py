"""Watch mode: regenerate the schema whenever source files change.

File events come from ``watchfiles``, which batches changes that arrive
within the debounce window. Each qualifying batch asks the
``RegenerationScheduler`` for a pass; the scheduler guarantees that passes
never overlap and that requests arriving mid-pass collapse into a single
follow-up pass.
"""

import logging
import threading
from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

from watchfiles import Change, watch

from prismagen.errors import PrismagenError, WatchStartError
from prismagen.generator import SchemaGenerator
from prismagen.models import GenerationResult
from prismagen.sources import FilesystemSourceProvider

logger = logging.getLogger(__name__)

type FileChanges = set[tuple[Change, str]]
type WatchFunction = Callable[..., Iterator[FileChanges]]

_CHANGE_LABELS = {
    Change.added: "added",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


class RegenerationScheduler:
    """Single-slot coalescing queue for generation passes.

    At most one pass runs at a time. A request made while a pass is running
    marks the scheduler dirty and returns immediately; the thread running
    the current pass then runs exactly one more pass, however many requests
    arrived in the meantime.
    """

    def __init__(self, run_pass: Callable[[], object]) -> None:
        """Initialise the scheduler.

        Args:
            run_pass: Callable performing one full pass

        """
        self._run_pass = run_pass
        self._lock = threading.Lock()
        self._running = False
        self._pending = False
        self._passes_run = 0

    @property
    def passes_run(self) -> int:
        """Number of passes completed so far."""
        return self._passes_run

    @property
    def is_running(self) -> bool:
        """Whether a pass is currently in progress."""
        with self._lock:
            return self._running

    def request(self) -> bool:
        """Ask for a pass.

        Returns:
            True if this call ran the pass (and any coalesced follow-ups),
            False if the request was folded into a pass already running

        """
        with self._lock:
            self._pending = True
            if self._running:
                logger.debug("Pass in progress, coalescing regeneration request")
                return False
            self._running = True

        drained = False
        try:
            while self._take_pending():
                self._run_pass()
                self._passes_run += 1
            drained = True
        finally:
            if not drained:
                with self._lock:
                    self._running = False
        return True

    def _take_pending(self) -> bool:
        """Consume the pending flag, releasing the slot when there is none."""
        with self._lock:
            if self._pending:
                self._pending = False
                return True
            self._running = False
            return False


def describe_changes(changes: Iterable[tuple[Change, str]]) -> str:
    """Summarise a batch of file events, e.g. ``1 added, 2 modified``."""
    counts = Counter(change for change, _ in changes)
    return ", ".join(
        f"{counts[change]} {label}"
        for change, label in _CHANGE_LABELS.items()
        if counts[change]
    )


class SchemaWatcher:
    """Runs an initial pass, then regenerates on every qualifying batch."""

    def __init__(
        self,
        generator: SchemaGenerator,
        watch_fn: WatchFunction = watch,
        on_result: Callable[[GenerationResult], None] | None = None,
    ) -> None:
        """Initialise the watcher.

        Args:
            generator: Generator whose configuration supplies the root,
                excludes and debounce window
            watch_fn: Change stream factory with the ``watchfiles.watch``
                signature
            on_result: Called with the result of every successful pass

        """
        self._generator = generator
        self._watch_fn = watch_fn
        self._on_result = on_result
        self._root = generator.config.root_dir.resolve()
        self._filter_provider = FilesystemSourceProvider(
            self._root, generator.config.exclude_patterns
        )
        self._scheduler = RegenerationScheduler(self._regenerate)
        self._stop_event = threading.Event()

    @property
    def scheduler(self) -> RegenerationScheduler:
        """Scheduler serialising this watcher's passes."""
        return self._scheduler

    def should_watch(self, change: Change, path: str) -> bool:
        """Filter passed to ``watchfiles``: source files outside excludes."""
        return self._filter_provider.is_candidate(Path(path))

    def stop(self) -> None:
        """Ask the change stream to finish."""
        self._stop_event.set()

    def run(self) -> None:
        """Run the initial pass and watch until interrupted or stopped.

        Raises:
            WatchStartError: If the change stream cannot be started

        """
        self._scheduler.request()

        if not self._root.is_dir():
            raise WatchStartError(f"Cannot watch {self._root}: not a directory")

        logger.info("Watching %s for changes", self._root)
        try:
            for changes in self._watch_fn(self._root, **self._watch_options()):
                self.handle_changes(changes)
        except KeyboardInterrupt:
            logger.info("Stopped watching %s", self._root)
        except (OSError, RuntimeError) as e:
            raise WatchStartError(f"Failed to watch {self._root}: {e}") from e

    def handle_changes(self, changes: FileChanges) -> None:
        """Log a batch of events and request a regeneration pass."""
        relevant = {(c, p) for c, p in changes if self.should_watch(c, p)}
        if not relevant:
            return
        logger.info("Detected changes: %s", describe_changes(relevant))
        self._scheduler.request()

    def _watch_options(self) -> dict[str, Any]:
        return {
            "watch_filter": self.should_watch,
            "debounce": self._generator.config.debounce_ms,
            "stop_event": self._stop_event,
        }

    def _regenerate(self) -> None:
        """Run one pass, logging failures instead of ending the watch."""
        try:
            result = self._generator.run_pass()
        except PrismagenError as e:
            logger.error("Regeneration failed: %s", e)
            return

        logger.info(
            "Regenerated %s with %d models in %.2fs",
            result.output_path,
            len(result.models),
            result.duration_seconds,
        )
        if self._on_result is not None:
            self._on_result(result)
