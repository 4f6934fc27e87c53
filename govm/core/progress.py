"""
Console progress indicator for long-running transfers.

The spinner runs on a daemon thread and only writes to the stream it was
given. It carries no data back to the caller: stopping it is a single-shot
event observed at the spinner's own cadence.
"""

import logging
import threading
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

LOADING_INTERVAL = 0.25
SPINNER_CHARS = "|/-\\"


class Spinner:
    """
    Background spinner drawn as '\\r<message>... <char>'.

    Usage:
        with Spinner(sys.stdout, "Downloading"):
            do_work()

    Passing stream=None makes every method a no-op, so non-interactive
    callers can use the same code path.
    """

    def __init__(
        self,
        stream: Optional[TextIO],
        message: str = "Downloading",
        interval: float = LOADING_INTERVAL,
    ):
        self.stream = stream
        self.message = message
        self.interval = interval
        self.ticks = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "Spinner":
        if self.stream is None or self._thread is not None:
            return self
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._spin, name="govm-spinner", daemon=True
        )
        self._thread.start()
        return self

    def stop(self) -> None:
        """Signal the spinner and wait for it to exit (at most one interval)."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _spin(self) -> None:
        # The first frame is always drawn, even if stop() races the thread start
        while True:
            char = SPINNER_CHARS[self.ticks % len(SPINNER_CHARS)]
            try:
                self.stream.write(f"\r{self.message}... {char}")
                self.stream.flush()
            except (OSError, ValueError) as e:
                # Stream closed underneath us; progress is cosmetic
                logger.debug(f"Spinner stopped writing: {e}")
                return
            self.ticks += 1
            if self._stop.wait(self.interval):
                return

    def __enter__(self) -> "Spinner":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
