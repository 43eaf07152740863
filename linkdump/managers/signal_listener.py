"""
Signal-triggered flushes.

OS signal handlers only enqueue the signal number; a background thread
drains that channel and calls the same `FlushController.flush` the HTTP
layer uses. Default mapping:

  SIGUSR1           -> flush, threshold respected
  SIGUSR2           -> forced flush
  SIGTERM, SIGINT   -> forced flush, then shutdown (even if the flush failed)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Optional
import logging
import queue
import signal
import threading

from .flush_manager import FlushController


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


@dataclass
class SignalListener:
    """
    Background consumer of flush/shutdown signals.

    Attributes:
        flush_ctl: Controller shared with the HTTP layer.
        on_exit: Called once after the final flush of a termination signal.
        logger: Logger for signal activity.
        soft_signals: Signals that flush without forcing.
        force_signals: Signals that force a flush and keep running.
        exit_signals: Signals that force a flush and then call `on_exit`.
    """
    flush_ctl: FlushController
    on_exit: Callable[[], None]
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("linkdump"))
    soft_signals: FrozenSet[int] = frozenset({signal.SIGUSR1})
    force_signals: FrozenSet[int] = frozenset({signal.SIGUSR2})
    exit_signals: FrozenSet[int] = frozenset({signal.SIGTERM, signal.SIGINT})

    thread: Optional[threading.Thread] = None

    _events: "queue.Queue[Optional[int]]" = field(default_factory=queue.Queue, init=False, repr=False)
    _previous: Dict[int, object] = field(default_factory=dict, init=False, repr=False)

    @property
    def handled_signals(self) -> FrozenSet[int]:
        return self.soft_signals | self.force_signals | self.exit_signals

    # ---------------------------- Control plane ----------------------------

    def install(self) -> None:
        """
        Register OS handlers for every handled signal and start the thread.

        Must be called from the main thread (a CPython restriction).
        """
        self.logger.info("Registering signal handlers")
        for signum in sorted(self.handled_signals):
            self._previous[signum] = signal.signal(signum, self._handle)
        self.start()

    def uninstall(self) -> None:
        """Restore the handlers that were active before `install`."""
        for signum, previous in self._previous.items():
            if previous is not None:
                signal.signal(signum, previous)
        self._previous.clear()

    def start(self) -> None:
        if self.thread and self.thread.is_alive():
            return
        self.thread = threading.Thread(target=self._run, name="linkdump-signals", daemon=True)
        self.thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Ask the listener thread to finish and wait for it."""
        self._events.put(None)
        if self.thread:
            self.thread.join(timeout=timeout)
        self.uninstall()

    def notify(self, signum: int) -> None:
        """Queue a signal for the listener thread (also usable without OS handlers)."""
        self._events.put(signum)

    # --------------------------- Private helpers ---------------------------

    def _handle(self, signum: int, _frame) -> None:
        self.notify(signum)

    def _run(self) -> None:
        while True:
            signum = self._events.get()
            if signum is None:
                break
            if signum not in self.handled_signals:
                self.logger.debug("Ignoring %s", _signal_name(signum))
                continue

            self.logger.info("Caught %s", _signal_name(signum))
            force = signum not in self.soft_signals
            try:
                self.flush_ctl.flush(force)
            except Exception:
                self.logger.exception("Flush triggered by %s crashed", _signal_name(signum))

            if signum in self.exit_signals:
                self.logger.info("Exiting...")
                self.on_exit()
                break
