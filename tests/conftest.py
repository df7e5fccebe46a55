import logging

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test."""
    logger = logging.getLogger("codecov_mcp")

    original_handlers = logger.handlers[:]
    original_propagate = logger.propagate
    original_level = logger.level

    # Clear handlers and ensure propagation so caplog sees records
    logger.handlers.clear()
    logger.propagate = True

    yield

    logger.handlers = original_handlers
    logger.propagate = original_propagate
    logger.setLevel(original_level)
