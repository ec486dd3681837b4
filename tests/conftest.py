"""Shared fixtures"""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo any setup_logging() a test performed on the package logger"""
    logger = logging.getLogger("minibank")
    handlers = logger.handlers[:]
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in logger.handlers[:]:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
