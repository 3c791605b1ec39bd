"""Shared test fixtures.

configure_structlog() binds log output to whatever sys.stderr is at call
time, which under pytest is a capture stream closed after the test. Reset
logging after every test so later tests never write to a stale stream.
"""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
