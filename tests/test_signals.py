import signal
from unittest import mock

import pytest

from jobcommon.signals import setup_signal_handler


@pytest.fixture
def restore_handlers():
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)


def test_signal_handler_lifecycle(restore_handlers):
    stop = setup_signal_handler()
    assert not stop.is_set()

    signal.raise_signal(signal.SIGINT)
    assert stop.wait(timeout=5)

    with mock.patch("os._exit") as exit_mock:
        signal.raise_signal(signal.SIGINT)
    exit_mock.assert_called_once_with(1)

    with pytest.raises(RuntimeError):
        setup_signal_handler()