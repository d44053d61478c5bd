"""
Landmark Worker
===============
Runs hand-landmark inference off the render loop with at most one request
in flight.

The render loop calls ``submit()`` every frame (it is refused while busy or
throttled) and ``poll()`` to collect a finished result. Results are handed
over on the loop's own thread, so the worker never touches shared state.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait as wait_futures
from typing import Callable, Optional

from config import LANDMARK_INTERVAL_MS

logger = logging.getLogger(__name__)


class LandmarkWorker:
    """Single-in-flight wrapper around a blocking ``detect(frame)`` callable."""

    def __init__(self, detect: Callable, min_interval_ms: float = LANDMARK_INTERVAL_MS):
        self._detect = detect
        self.min_interval_ms = min_interval_ms
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="landmarks")
        self._future: Optional[Future] = None
        self._last_send: Optional[float] = None
        self.closed = False

    @property
    def busy(self) -> bool:
        return self._future is not None

    def submit(self, frame, now: float) -> bool:
        """
        Start a request for *frame* unless one is already outstanding.

        Args:
            frame: Image handed to ``detect`` (copied, the caller may reuse it)
            now: Monotonic timestamp in milliseconds

        Returns:
            True if a request was started
        """
        if self.closed or self.busy:
            return False
        if self._last_send is not None and now - self._last_send <= self.min_interval_ms:
            return False

        self._last_send = now
        self._future = self._executor.submit(self._detect, frame.copy())
        return True

    def poll(self):
        """
        Collect the finished result, if any.
        Returns: the detect() result once, or None (still running, failed,
        closed, or nothing submitted)
        """
        future = self._future
        if future is None or not future.done():
            return None
        self._future = None

        if self.closed or future.cancelled():
            return None
        error = future.exception()
        if error is not None:
            logger.warning("[HANDS] landmark request failed: %s", error)
            return None
        return future.result()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the outstanding request finishes. True if none is pending."""
        future = self._future
        if future is None:
            return True
        done, _ = wait_futures([future], timeout=timeout)
        return bool(done)

    def close(self, wait: bool = False) -> None:
        """Stop accepting work; any in-flight result is discarded."""
        self.closed = True
        if self._future is not None:
            self._future.cancel()
        self._executor.shutdown(wait=wait, cancel_futures=True)
