"""Structured logging configuration for Todo Manager"""
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

ROOT_LOGGER = 'todo_manager'

CONTEXT_FIELDS = ['todo_id', 'command', 'operation', 'duration_ms', 'path']


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for development"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy: the same record is also written by the JSON handler
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    json_output: bool = True,
    console_output: bool = False
) -> logging.Logger:
    """
    Setup application logging

    Args:
        log_dir: Directory for log files (default: Config.LOG_DIR)
        level: Logging level
        json_output: Enable JSON file logging
        console_output: Enable console logging (stderr, keeps the prompt on stdout clean)

    Returns:
        Configured application logger
    """
    from config import Config

    if log_dir is None:
        log_dir = Config.LOG_DIR

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_formatter = ColoredFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    if json_output:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        json_file = log_dir / f'todo_manager_{datetime.now():%Y%m%d}.log'
        file_handler = logging.FileHandler(json_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

        # Error-only file
        error_file = log_dir / f'errors_{datetime.now():%Y%m%d}.log'
        error_handler = logging.FileHandler(error_file, encoding='utf-8')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        logger.addHandler(error_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger with the given name"""
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')


class LogTimer:
    """Context manager for logging operation duration"""

    def __init__(self, logger: logging.Logger, operation: str, **extra):
        self.logger = logger
        self.operation = operation
        self.extra = extra
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"Starting: {self.operation}", extra=self.extra)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        extra = {**self.extra, 'duration_ms': round(duration_ms, 2), 'operation': self.operation}

        if exc_type:
            self.logger.error(
                f"Failed: {self.operation} ({duration_ms:.0f}ms): {exc_val}",
                extra=extra
            )
        else:
            self.logger.debug(
                f"Completed: {self.operation} ({duration_ms:.0f}ms)",
                extra=extra
            )

        return False  # Don't suppress exceptions
