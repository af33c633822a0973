"""Signal-driven shutdown: save the todo list and exit"""
import os
import signal
import sys
import threading
from typing import Callable, Optional

from core.dispatcher import Dispatcher, ShutdownResult
from utils.logging_config import get_logger

logger = get_logger('shutdown')

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownRequested(Exception):
    """Raised in the main thread where signals cannot be waited on in a thread"""

    def __init__(self, signum: int):
        self.signum = signum
        super().__init__(f"signal {signum}")


def _default_report(message: str) -> None:
    print(message, flush=True)


class SignalWatcher:
    """
    Runs the shutdown path when SIGINT or SIGTERM arrives.

    On POSIX the signals are blocked in the main thread and a daemon thread
    waits for them with sigwait, so the read loop is never interrupted
    mid-command; the thread takes the dispatcher lock, saves and exits.
    Elsewhere a regular handler raises ShutdownRequested and the read loop
    calls ``shutdown`` itself.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        exit_func: Callable[[int], None] = os._exit,
        report: Callable[[str], None] = _default_report,
    ):
        self.dispatcher = dispatcher
        self.exit_func = exit_func
        self.report = report
        self._thread: Optional[threading.Thread] = None

    @staticmethod
    def threaded_supported() -> bool:
        return hasattr(signal, 'pthread_sigmask') and hasattr(signal, 'sigwait')

    def install(self) -> None:
        """Must be called from the main thread before other threads start"""
        if self.threaded_supported():
            signal.pthread_sigmask(signal.SIG_BLOCK, SHUTDOWN_SIGNALS)
            self._thread = threading.Thread(target=self._wait, name='todo-signal-watcher', daemon=True)
            self._thread.start()
            logger.debug("Signal watcher thread started")
            return

        def _raise(signum, _frame):
            raise ShutdownRequested(signum)

        for signum in SHUTDOWN_SIGNALS:
            try:
                signal.signal(signum, _raise)
            except (ValueError, OSError) as e:
                # SIGTERM is not available everywhere
                logger.debug(f"Cannot install handler for {signum}: {e}")

    def _wait(self) -> None:
        signum = signal.sigwait(set(SHUTDOWN_SIGNALS))
        self.exit_func(self.shutdown(signum))

    def shutdown(self, signum: Optional[int] = None) -> int:
        """Save under the dispatcher lock and return the process exit code"""
        logger.info(f"Signal {signum} received, saving todos")
        result: ShutdownResult = self.dispatcher.shutdown()
        if result.error:
            self.report(f"\nError saving todos during shutdown: {result.error}")
        sys.stdout.flush()
        return result.exit_code
