"""Pytest configuration and fixtures."""

import logging

import pytest

from rog.reporting.console import Style


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Detach handlers from rog loggers after each test so setup_logger can run again."""
    yield

    # Library modules keep references to their loggers, so clear instead of deleting.
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("rog"):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()


class RecordingConsole:
    """Line sink that keeps what the reporter wrote."""

    def __init__(self):
        self.lines: list[tuple[str, Style]] = []

    def write_line(self, text: str, style: Style = Style.PLAIN) -> None:
        self.lines.append((text, style))

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.lines]


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()
