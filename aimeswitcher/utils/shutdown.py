"""Wait-for-shutdown primitive driven by SIGINT/SIGTERM."""

import signal
import threading

import structlog

log = structlog.stdlib.get_logger()


class ShutdownSignal:
    """Event set when the process is asked to stop.

    Used as a context manager it installs SIGINT/SIGTERM handlers on entry and
    restores the previous handlers on exit. Must be entered from the main thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._original_handlers: dict[int, object] = {}

    def __enter__(self) -> "ShutdownSignal":
        for signum in (signal.SIGINT, signal.SIGTERM):
            self._original_handlers[signum] = signal.getsignal(signum)
            signal.signal(signum, self._handle_signal)
        return self

    def __exit__(self, *exc_info: object) -> None:
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()

    def _handle_signal(self, signum: int, frame: object) -> None:
        log.info("shutdown_signal_received", signal=signal.Signals(signum).name)
        self.set()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until shutdown is requested; returns False if the timeout expired."""
        return self._event.wait(timeout)
