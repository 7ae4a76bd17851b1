import logging

from sweepopt.observer import LoggingProgressObserver, ProgressEvent, ProgressObserver, RecordingObserver


def test_observers_satisfy_the_protocol():
    assert isinstance(RecordingObserver(), ProgressObserver)
    assert isinstance(LoggingProgressObserver(), ProgressObserver)


def test_recording_observer_keeps_order():
    observer = RecordingObserver()
    observer.on_progress(ProgressEvent("init", 1, 10))
    observer.on_progress(ProgressEvent("iter", 2, 20))
    assert [e.phase for e in observer.events] == ["init", "iter"]


def test_logging_observer_format(caplog):
    logger = logging.getLogger("sweepopt.tests.progress")
    caplog.set_level(logging.DEBUG, logger="sweepopt.tests.progress")
    LoggingProgressObserver(logger, level=logging.DEBUG).on_progress(ProgressEvent("iter", 3, 150))
    assert [r.getMessage() for r in caplog.records] == ["iter / 3 / 150"]
    assert caplog.records[0].levelno == logging.DEBUG
