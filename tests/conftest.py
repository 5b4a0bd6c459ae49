"""Shared fixtures for the concourse_resource test suite."""

import logging

import pytest

from concourse_resource.utils.logging_utils import LOGGER_NAME


@pytest.fixture
def package_logger():
    """Package logger without handlers, restored after the test."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    logger.handlers = []
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
