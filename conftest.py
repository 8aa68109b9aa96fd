from typing import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def quiet_structlog() -> Iterator[None]:
    # structlog's default config prints events to stdout, which breaks doctest output checks;
    # discard the rendered output while keeping events visible to structlog.testing.capture_logs
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()
