"""Tests for logging setup."""
import json
import logging
import sys

import pytest

from field_ops.logging_config import setup_logging, ColorFormatter, StructuredFormatter


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_level_argument_overrides_environment(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'ERROR')
    monkeypatch.delenv('LOG_FILE', raising=False)
    logger = setup_logging('debug')
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'WARNING')
    assert setup_logging().level == logging.WARNING

    monkeypatch.setenv('LOG_LEVEL', 'nonsense')
    assert setup_logging().level == logging.INFO


def test_log_file_gets_json_lines(tmp_path, monkeypatch):
    monkeypatch.delenv('LOG_FILE', raising=False)
    log_file = tmp_path / 'logs' / 'field_ops.log'
    logger = setup_logging('INFO', str(log_file))
    assert len(logger.handlers) == 2

    logging.getLogger('ActivitySessionController').info(
        'Started session', extra={'extra_fields': {'session_key': 'activity-tracker-draft-h1-turn'}}
    )
    for handler in logger.handlers:
        handler.flush()

    entry = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert entry['level'] == 'INFO'
    assert entry['logger'] == 'ActivitySessionController'
    assert entry['message'] == 'Started session'
    assert entry['session_key'] == 'activity-tracker-draft-h1-turn'


def test_structured_formatter_includes_exception():
    try:
        raise ValueError('bad photo')
    except ValueError:
        record = logging.LogRecord('uploads', logging.ERROR, __file__, 1, 'Upload failed', None, None)
        record.exc_info = sys.exc_info()
    entry = json.loads(StructuredFormatter().format(record))
    assert 'ValueError: bad photo' in entry['exception']


def test_color_formatter_wraps_level_name():
    record = logging.LogRecord('x', logging.WARNING, __file__, 1, 'careful', None, None)
    output = ColorFormatter('%(levelname)s %(message)s').format(record)
    assert output == '\033[33mWARNING\033[0m careful'
