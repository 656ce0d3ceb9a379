"""Shared fixtures for the lockkeeper test suite."""

from __future__ import annotations

import logging
from typing import Generator

import pytest

import lockkeeper.utils.logger as logger_module
from lockkeeper.utils.console import reconfigure_console


@pytest.fixture(autouse=True)
def reset_global_output_state() -> Generator[None, None, None]:
    """Undo logging and console setup done by a previous test.

    CLI invocations install a stream handler on the ``lockkeeper`` logger
    and stop propagation, which would hide records from ``caplog``.
    """
    yield

    root_logger = logging.getLogger(logger_module.ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False
    reconfigure_console()
