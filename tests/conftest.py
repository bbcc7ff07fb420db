import logging

import pytest

from arbor_ioc import Injector
from arbor_ioc._state import default_pending
from arbor_ioc.constants import LOGGER

log_capture: list[str] = []


class ListLogHandler(logging.Handler):
    def emit(self, record):
        log_capture.append(self.format(record))


@pytest.fixture(autouse=True)
def clean_engine_state():
    Injector.reset()
    level = LOGGER.level
    log_capture.clear()
    yield
    leftover = default_pending().chain()
    LOGGER.setLevel(level)
    Injector.reset()
    assert leftover == ()


@pytest.fixture
def captured_logs():
    handler = ListLogHandler()
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)
    try:
        yield log_capture
    finally:
        LOGGER.removeHandler(handler)
