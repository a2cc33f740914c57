import json

import pytest

from kube_capacity.util import logging as log


def test_logging_level_filtering(capsys):
    log.configure_logging('INFO', 'json')
    log.debug('debug message')
    assert capsys.readouterr().err == ''
    log.info('info message')
    assert 'info message' in capsys.readouterr().err
    log.configure_logging('DEBUG', 'json')
    log.debug('debug message')
    assert 'debug message' in capsys.readouterr().err


def test_warning_alias_and_error_threshold(capsys):
    log.configure_logging('warning', 'text')
    log.info('quiet')
    log.warn('loud', hpa='h1')
    err = capsys.readouterr().err
    assert 'quiet' not in err
    assert '[WARN] loud hpa=h1' in err
    log.configure_logging('ERROR', 'text')
    log.warn('hidden')
    assert capsys.readouterr().err == ''


def test_logging_format_text(capsys):
    log.configure_logging('INFO', 'text')
    log.info('test message', key='value')
    output = capsys.readouterr().err
    assert '[INFO]' in output
    assert 'test message' in output
    assert 'key=value' in output
    assert not output.startswith('{')


def test_logging_format_json(capsys):
    log.configure_logging('INFO', 'json')
    log.info('test message', key='value', count=3)
    rec = json.loads(capsys.readouterr().err.strip())
    assert rec['level'] == 'INFO'
    assert rec['msg'] == 'test message'
    assert rec['key'] == 'value'
    assert rec['count'] == 3
    assert 'ts' in rec


def test_stdout_is_untouched(capsys):
    log.info('to stderr')
    assert capsys.readouterr().out == ''


def test_invalid_settings_rejected():
    with pytest.raises(ValueError):
        log.configure_logging('VERBOSE', 'json')
    with pytest.raises(ValueError):
        log.configure_logging('INFO', 'yaml')
