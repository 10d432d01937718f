"""
Background puzzle generation.

PuzzleWorker runs one build at a time on a single worker thread so a front end
never blocks on generation. Submitting a new request cancels the build that is
still running; cancellation is cooperative and takes effect at the next check
between generator restarts or builder removals, where the build raises
BuildCancelled through its Future.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from hexkudo.app.engine import new_puzzle
from hexkudo.config import EngineConfig
from hexkudo.core.puzzle import Puzzle

logger = logging.getLogger(__name__)


class PuzzleWorker:
    """
    Single-thread puzzle builder with cancel-on-resubmit.

    Usage:
        with PuzzleWorker() as worker:
            future = worker.submit("hexagon", 3, "medium")
            puzzle = future.result()
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hexkudo-build")
        self._lock = threading.Lock()
        self._cancel: Optional[threading.Event] = None
        self._future: Optional[Future] = None

    def submit(self, shape: str, size: int, difficulty, seed: Optional[int] = None,
               callback: Optional[Callable[[Future], None]] = None) -> Future:
        """
        Queue a build, cancelling the previous one.

        Args:
            callback: Called with the finished Future (on the worker thread)

        Returns:
            Future resolving to a Puzzle, or raising BuildCancelled,
            GenerationFailed or InvalidShape
        """
        cancel = threading.Event()
        with self._lock:
            self._cancel_current()
            self._cancel = cancel
            future = self._executor.submit(self._run, shape, size, difficulty, seed, cancel)
            self._future = future
        if callback is not None:
            future.add_done_callback(callback)
        return future

    def _run(self, shape, size, difficulty, seed, cancel: threading.Event) -> Puzzle:
        logger.debug(f"Building {shape} size {size} ({difficulty}) seed={seed}")
        return new_puzzle(shape, size, difficulty, seed=seed, config=self.config, cancel=cancel)

    def _cancel_current(self) -> None:
        if self._cancel is not None:
            self._cancel.set()
        if self._future is not None and self._future.cancel():
            logger.debug("Dropped queued build before it started")

    def cancel(self) -> None:
        """Cancel the running or queued build, if any."""
        with self._lock:
            self._cancel_current()

    @property
    def busy(self) -> bool:
        return self._future is not None and not self._future.done()

    def shutdown(self, wait: bool = True) -> None:
        self.cancel()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "PuzzleWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
