"""Terminal progress spinner."""

from __future__ import annotations

import itertools
import sys
import threading
from typing import TextIO

DOTS9_FRAMES = ("⢹", "⢺", "⢼", "⣸", "⣇", "⡧", "⡗", "⡏")
DONE_SYMBOL = "✔"


class Spinner:
    """An animated spinner drawn on a background thread."""

    def __init__(
        self,
        message: str,
        stream: TextIO | None = None,
        frames: tuple[str, ...] = DOTS9_FRAMES,
        interval: float = 0.08,
    ) -> None:
        self.message = message
        self.stream = stream if stream is not None else sys.stdout
        self.frames = frames
        self.interval = interval
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _write(self, text: str) -> None:
        with self._lock:
            self.stream.write(text)
            self.stream.flush()

    def _run(self) -> None:
        for frame in itertools.cycle(self.frames):
            self._write(f"\r{frame} {self.message}")
            if self._stop.wait(self.interval):
                break

    def start(self) -> Spinner:
        """Start animating; a spinner can be started only once."""
        if self._thread is not None:
            raise RuntimeError("spinner already started")
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        return self

    def stop_and_persist(self, symbol: str, message: str) -> None:
        """Stop animating and leave ``symbol message`` on its own line."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
        self._write(f"\x1b[2K\r{symbol} {message}\n")

    def __enter__(self) -> Spinner:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop_and_persist(DONE_SYMBOL, self.message)


def create_spinner(message: str, stream: TextIO | None = None) -> Spinner:
    """Create and start a spinner showing ``message``."""
    return Spinner(message, stream).start()


def stop_and_persist(spinner: Spinner, message: str) -> None:
    """Stop a spinner, leaving a check mark and ``message``."""
    spinner.stop_and_persist(DONE_SYMBOL, message)