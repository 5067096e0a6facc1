# src/sinkwatch/engine/tailer.py
"""FileTailer publishes the newest line of a metrics sink file.

The tailer owns one background thread that repeatedly:
1. Reads the whole sink file (absent or unreadable -> no update yet)
2. Takes the last non-empty line
3. Publishes a new RawUpdate if that line differs from the published one
4. Waits poll_interval on its stop event

Thread Safety:
    The published state is a single immutable RawUpdate. The tailer
    thread is the only writer and replaces it whole under _lock; readers
    take the reference under the same lock. A reader can therefore never
    see a version paired with a different line, and versions seen by one
    reader never go backwards.
"""

from __future__ import annotations

import threading
from pathlib import Path
from types import TracebackType

import structlog

from sinkwatch.contracts.updates import INITIAL_UPDATE, RawUpdate

logger = structlog.get_logger(__name__)

DEFAULT_POLL_INTERVAL = 0.25


def last_non_empty_line(text: str) -> str | None:
    """Return the final line of ``text`` that is not blank, without its newline."""
    for line in reversed(text.splitlines()):
        if line.strip():
            return line
    return None


class FileTailer:
    """Continuously observe one sink file and expose its newest line.

    Example:
        >>> with FileTailer(Path("/tmp/gc.metrics")) as tailer:
        ...     update = wait_for_update(tailer)
        ...     sample = parse_line(update.line)
    """

    def __init__(self, path: Path | str, *, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        """Initialize the tailer. Nothing is read until start() or poll_once().

        Args:
            path: Sink file to observe. It need not exist yet.
            poll_interval: Seconds between reads.

        Raises:
            ValueError: If poll_interval is not positive.
        """
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {poll_interval}")
        self._path = Path(path)
        self._poll_interval = poll_interval

        self._lock = threading.Lock()
        self._snapshot: RawUpdate = INITIAL_UPDATE

        self._stop_event = threading.Event()
        self._ready = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def latest(self) -> RawUpdate:
        """Return the current published snapshot."""
        with self._lock:
            return self._snapshot

    @property
    def latest_line(self) -> str | None:
        return self.latest().line

    @property
    def latest_version(self) -> int:
        return self.latest().version

    @property
    def updates_published(self) -> int:
        """Number of distinct lines published so far."""
        return self.latest_version

    def _read_last_line(self) -> str | None:
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug("Sink file unreadable, treating as no update", path=str(self._path), error=str(e))
            return None
        return last_non_empty_line(data.decode("utf-8", errors="replace"))

    def poll_once(self) -> RawUpdate | None:
        """Read the sink file once and publish if its last line changed.

        Called by the background loop; also usable directly for
        deterministic, single-threaded use.

        Returns:
            The newly published update, or None if nothing changed.
        """
        line = self._read_last_line()
        if line is None:
            return None

        # Single writer: only the comparison-and-swap needs the lock
        with self._lock:
            current = self._snapshot
            if line == current.line:
                return None
            update = RawUpdate(version=current.version + 1, line=line)
            self._snapshot = update

        logger.debug("Published sink update", path=str(self._path), version=update.version)
        return update

    def _run(self) -> None:
        """Background thread: read, publish, wait until stopped."""
        self._ready.set()
        while not self._stop_event.is_set():
            self.poll_once()
            self._stop_event.wait(self._poll_interval)

    def start(self) -> FileTailer:
        """Start the background thread.

        Returns:
            self, so ``tailer = FileTailer(path).start()`` reads naturally.

        Raises:
            RuntimeError: If the tailer was already started.
        """
        if self._thread is not None:
            raise RuntimeError(f"Tailer for {self._path} already started")

        # Daemon so an abandoned tailer never blocks interpreter exit
        self._thread = threading.Thread(
            target=self._run,
            name=f"sink-tailer-{self._path.name}",
            daemon=True,
        )
        self._thread.start()
        self._ready.wait(timeout=5.0)
        logger.info("Started tailing sink file", path=str(self._path), poll_interval=self._poll_interval)
        return self

    def stop(self, timeout: float = 5.0) -> None:
        """Ask the background thread to exit and wait for it.

        Safe to call more than once. A no-op before start().
        """
        if self._thread is None:
            return
        self._stop_event.set()
        if not self._thread.is_alive():
            return
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Tailer thread did not stop in time", path=str(self._path), timeout=timeout)
        else:
            logger.info("Stopped tailing sink file", path=str(self._path), updates_published=self.updates_published)

    def __enter__(self) -> FileTailer:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


def tail_file(path: Path | str, *, poll_interval: float = DEFAULT_POLL_INTERVAL) -> FileTailer:
    """Start tailing ``path`` and return the running tailer.

    The caller owns the tailer and must stop() it.
    """
    return FileTailer(path, poll_interval=poll_interval).start()
