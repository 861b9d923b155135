import logging

from relief.core.logging_config import LOG_FORMAT, configure_logging


def test_configure_logging_replaces_previous_handlers():
    configure_logging("debug")
    logger = configure_logging("warning")

    assert logger is logging.getLogger("relief")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT
