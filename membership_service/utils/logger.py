"""
Logging utilities for the membership service

structlog on top of stdlib logging, plus a bounded in-memory buffer of recent
lines that backs the log viewer page.
"""

import logging
import logging.config
import os
import sys
import threading
from collections import deque
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
import yaml

# Keys added by processors that are already part of the line prefix
_PREFIX_KEYS = ('event', 'level', 'timestamp', 'logger')


class LogBuffer:
    """
    Ring buffer of formatted log lines, newest first.

    Installed as a structlog processor: it records a copy of each event and
    passes the event dict through untouched.
    """

    def __init__(self, max_entries: int = 100):
        self._entries: deque = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def __call__(self, logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        self.append(self.format_line(method_name, event_dict))
        return event_dict

    @staticmethod
    def format_line(method_name: str, event_dict: Dict[str, Any]) -> str:
        level = str(event_dict.get('level') or method_name).upper()
        timestamp = event_dict.get('timestamp') or datetime.now().strftime('%H:%M:%S')
        extras = ' '.join(
            f"{key}={value}" for key, value in event_dict.items() if key not in _PREFIX_KEYS
        )
        message = str(event_dict.get('event', ''))
        if extras:
            message = f"{message} {extras}"
        return f"[{timestamp}] [{level}] {message}"

    def append(self, line: str):
        with self._lock:
            self._entries.appendleft(line)

    def entries(self) -> List[str]:
        """Snapshot of buffered lines, newest first"""
        with self._lock:
            return list(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)


def _load_config_file(config_path: str) -> Optional[Dict[str, Any]]:
    """Load a stdlib dictConfig from a YAML file"""
    try:
        with open(config_path, 'r') as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        return None


def setup_stdlib_logging(log_level: str = 'INFO', config_path: Optional[str] = None) -> None:
    """
    Setup the stdlib handlers structlog writes through

    Args:
        log_level: root level name
        config_path: optional YAML dictConfig file
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    config = None
    if config_path and os.path.exists(config_path):
        config = _load_config_file(config_path)

    if config:
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(
            level=level,
            format='%(message)s',
            stream=sys.stdout,
        )
    logging.getLogger().setLevel(level)


def configure_logging(
    log_level: str = 'INFO',
    log_format: str = 'console',
    buffer: Optional[LogBuffer] = None,
    config_path: Optional[str] = None,
) -> None:
    """
    Configure structured logging

    Args:
        log_level: minimum level name
        log_format: 'console' or 'json'
        buffer: ring buffer that receives a copy of every event
        config_path: optional YAML dictConfig for the stdlib handlers
    """
    setup_stdlib_logging(log_level, config_path)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if buffer is not None:
        processors.append(buffer)

    if log_format == 'json':
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )