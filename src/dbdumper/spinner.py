"""
Console spinner shown while a client program runs.

The spinner runs on its own daemon thread and only ever receives a single
stop signal from the foreground. ``stop()`` does not wait for the thread;
the final line break is written by the spinner thread itself.
"""

import sys
import threading
from typing import TextIO

from dbdumper.constants import SPINNER_FRAMES, SPINNER_INTERVAL


class Spinner:
    """
    Rotating ``| / - \\`` indicator redrawn in place with carriage returns.

    Example:
        with Spinner(sys.stdout, prefix="Loading database..."):
            run_command(...)
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        prefix: str = "",
        frames: tuple[str, ...] = SPINNER_FRAMES,
        interval: float = SPINNER_INTERVAL,
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.prefix = prefix
        self.frames = frames
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> str:
        if self._thread is None:
            return "idle"
        if self._stop_event.is_set():
            return "stopped"
        return "running"

    def start(self) -> "Spinner":
        if self._thread is not None:
            return self
        self._thread = threading.Thread(target=self._run, name="dbdumper-spinner", daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        """Signal the spinner to finish. Returns immediately."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _write(self, data: str) -> None:
        try:
            self.stream.write(data)
            self.stream.flush()
        except (OSError, ValueError):
            # Stream closed or detached
            pass

    def _run(self) -> None:
        if self.prefix:
            self._write(f"{self.prefix} ")
        idx = 0
        while not self._stop_event.wait(self.interval):
            self._write("\r" + self.frames[idx % len(self.frames)])
            idx += 1
        self._write("\r\n")

    def __enter__(self) -> "Spinner":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
