"""Shutdown signal handling."""

from __future__ import annotations

import os
import signal
import sys
import threading

_SHUTDOWN_SIGNALS = (
    (signal.SIGINT,) if sys.platform == "win32" else (signal.SIGINT, signal.SIGTERM)
)

_installed = False
_install_lock = threading.Lock()


def setup_signal_handler() -> threading.Event:
    """Install handlers for the shutdown signals and return a stop event.

    The event is set on the first signal; a second signal ends the process
    with exit code 1. Installing the handlers twice raises RuntimeError.
    """
    global _installed
    with _install_lock:
        if _installed:
            raise RuntimeError("signal handler already set up")
        _installed = True

    stop = threading.Event()

    def _handle(signum, frame):
        if stop.is_set():
            os._exit(1)
        stop.set()

    for sig in _SHUTDOWN_SIGNALS:
        signal.signal(sig, _handle)
    return stop