from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _library_logging_disabled() -> Iterator[None]:
    """Restore the package default after the CLI turned logging on."""
    yield
    logger.disable("bridgedays")


@pytest.fixture
def log_records() -> Iterator[list[dict[str, object]]]:
    """Collect loguru records emitted during a test."""
    records: list[dict[str, object]] = []
    logger.enable("bridgedays")
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
