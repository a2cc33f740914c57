from __future__ import annotations
import json, sys, time
from typing import Any

LEVELS = {'DEBUG': 0, 'INFO': 1, 'WARN': 2, 'ERROR': 3}
FORMATS = ('json', 'text')
_ALIASES = {'WARNING': 'WARN'}

_LOG_LEVEL = 'INFO'
_LOG_FORMAT = 'json'


def normalize_level(level: str) -> str:
    lvl = str(level).upper()
    lvl = _ALIASES.get(lvl, lvl)
    if lvl not in LEVELS:
        raise ValueError(f'Unknown log level: {level}. Expected one of {", ".join(LEVELS)}')
    return lvl


def configure_logging(level: str = 'INFO', format: str = 'json'):
    global _LOG_LEVEL, _LOG_FORMAT
    fmt = str(format).lower()
    if fmt not in FORMATS:
        raise ValueError(f'Unknown log format: {format}. Expected json or text')
    _LOG_LEVEL = normalize_level(level)
    _LOG_FORMAT = fmt


def _should_log(level: str) -> bool:
    return LEVELS[level] >= LEVELS[_LOG_LEVEL]


def log(level: str, message: str, **fields: Any):
    lvl = normalize_level(level)
    if not _should_log(lvl):
        return
    ts = time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime())
    if _LOG_FORMAT == 'json':
        rec = {'ts': ts, 'level': lvl, 'msg': message}
        if fields: rec.update(fields)
        print(json.dumps(rec, sort_keys=True, default=str), file=sys.stderr)
    else:
        extra = ' '.join(f'{k}={v}' for k, v in fields.items()) if fields else ''
        line = f"{ts} [{lvl}] {message}" + (f" {extra}" if extra else '')
        print(line, file=sys.stderr)

def debug(message: str, **fields: Any): log('debug', message, **fields)

def info(message: str, **fields: Any): log('info', message, **fields)

def warn(message: str, **fields: Any): log('warn', message, **fields)

def error(message: str, **fields: Any): log('error', message, **fields)
