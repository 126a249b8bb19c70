import logging
import pytest


@pytest.fixture
def jett_logger_state():
    """Put the jett logger's handlers and settings back after a test reconfigures it."""
    logger = logging.getLogger("jett")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers, level, propagate = saved
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
