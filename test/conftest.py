import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """The cli replaces the sinks, so put the default one back after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def logs():
    """Collect the (level, message) of everything logged during the test."""
    records = []
    handler = logger.add(
        lambda m: records.append((m.record["level"].name, m.record["message"])),
        level="TRACE",
    )
    yield records
    logger.remove(handler)
