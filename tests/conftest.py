from __future__ import annotations

import logging
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_codingrules_logger() -> Iterator[None]:
    """Undo CLI logging configuration so caplog keeps receiving records."""
    yield
    logger = logging.getLogger("codingrules")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
