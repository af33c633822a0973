"""Конфигурация приложения Todo Manager"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


class Config:
    """Конфигурация приложения"""

    # Пути
    PROJECT_ROOT = Path(__file__).parent
    TODOS_FILE = Path(os.getenv("TODOS_FILE", "todos.json"))
    LOG_DIR = Path(os.getenv("TODOS_LOG_DIR", str(PROJECT_ROOT / "logs")))

    # Схема todos.json: отклонять неизвестные поля
    STRICT_SCHEMA = _env_flag("TODOS_STRICT_SCHEMA", True)

    # Логирование
    LOG_LEVEL = os.getenv("TODOS_LOG_LEVEL", "INFO").upper()
    LOG_JSON = _env_flag("TODOS_LOG_JSON", True)
    LOG_CONSOLE = _env_flag("TODOS_LOG_CONSOLE", False)

    @classmethod
    def log_level(cls, name: str = None) -> int:
        """Resolve a level name ("debug", "WARNING") to its numeric value"""
        level = logging.getLevelName((name or cls.LOG_LEVEL).upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name or cls.LOG_LEVEL}")
        return level
