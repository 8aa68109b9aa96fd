import json
import logging
from typing import Iterator

import pytest
import structlog

from licensefeatures.utils.logging import LoggingOutput, setup_logging


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


def test_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(logging_output=LoggingOutput.JSON)
    structlog.get_logger('licensefeatures.test').info('loaded {count} features', count=3)
    structlog.get_logger('licensefeatures.test').debug('hidden')

    lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry['event'] == 'loaded 3 features'
    assert entry['count'] == 3
    assert entry['level'] == 'info'
    assert entry['logger'] == 'licensefeatures.test'


def test_debug_enables_debug_level(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(logging_output=LoggingOutput.JSON, debug=True)
    structlog.get_logger('licensefeatures.test').debug('shown')

    assert 'shown' in capsys.readouterr().err


def test_null_output(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(logging_output=LoggingOutput.NULL)
    structlog.get_logger('licensefeatures.test').warning('nothing to see')

    assert 'nothing to see' not in capsys.readouterr().err


def test_pretty_output(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(logging_output=LoggingOutput.PRETTY)
    structlog.get_logger('licensefeatures.test').info('pretty event', key='value')

    assert 'pretty event' in capsys.readouterr().err
