"""Tests for the SIGINT/SIGTERM shutdown signal."""

import signal
from collections.abc import Iterator

import pytest

from aimeswitcher.utils.shutdown import ShutdownSignal

SIGNALS = (signal.SIGINT, signal.SIGTERM)


def previous_handler(signum, frame) -> None:
    pass


@pytest.fixture
def installed_previous_handler() -> Iterator[None]:
    originals = {signum: signal.getsignal(signum) for signum in SIGNALS}
    for signum in SIGNALS:
        signal.signal(signum, previous_handler)
    yield
    for signum, handler in originals.items():
        signal.signal(signum, handler)


@pytest.mark.usefixtures("installed_previous_handler")
class TestShutdownSignal:
    def test_handlers_installed_inside_context(self) -> None:
        with ShutdownSignal() as shutdown:
            for signum in SIGNALS:
                assert signal.getsignal(signum) == shutdown._handle_signal

    def test_exit_restores_previous_handlers(self) -> None:
        with ShutdownSignal():
            pass

        for signum in SIGNALS:
            assert signal.getsignal(signum) is previous_handler

    def test_exit_restores_handlers_after_error(self) -> None:
        with pytest.raises(RuntimeError):
            with ShutdownSignal():
                raise RuntimeError("stop")

        for signum in SIGNALS:
            assert signal.getsignal(signum) is previous_handler

    @pytest.mark.parametrize("signum", SIGNALS)
    def test_signal_sets_shutdown(self, signum: int) -> None:
        with ShutdownSignal() as shutdown:
            assert not shutdown.is_set()

            signal.raise_signal(signum)

            assert shutdown.wait(1.0)

    def test_wait_times_out_without_signal(self) -> None:
        with ShutdownSignal() as shutdown:
            assert shutdown.wait(0.01) is False

    def test_set_without_signal(self) -> None:
        shutdown = ShutdownSignal()

        shutdown.set()

        assert shutdown.is_set()
        assert signal.getsignal(signal.SIGINT) is previous_handler
