"""Менеджер хранения данных для Todo Manager"""
import json
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Sequence, Type, Union

from pydantic import ValidationError

from core.errors import StorageError
from core.models import LenientTodo, Todo
from utils.logging_config import LogTimer, get_logger

logger = get_logger('storage')

DEFAULT_FILE_MODE = 0o644


class TodoStorage:
    """Менеджер хранения данных

    Keeps the whole list in a single JSON array. Every save goes through a
    temporary file in the same directory followed by ``os.replace``, so the
    canonical file is either the previous version or the new one.
    """

    def __init__(self, path: Union[str, Path] = "todos.json", strict: bool = True):
        self.path = Path(path)
        self.strict = strict

    @property
    def model(self) -> Type[Todo]:
        return Todo if self.strict else LenientTodo

    def load(self) -> List[Todo]:
        """Загрузка задач

        A missing file is created empty. Any other problem raises
        StorageError: the caller must not continue with a guessed list.
        """
        if not self.path.exists():
            logger.info(f"Creating empty todos file: {self.path}", extra={'path': str(self.path)})
            self.save([])
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise StorageError(f"Unable to open todos file: {e}") from e
        except json.JSONDecodeError as e:
            raise StorageError(f"Unable to unmarshal todos file: {e}") from e

        if not isinstance(data, list):
            raise StorageError(
                f"Unable to unmarshal todos file: expected a JSON array, got {type(data).__name__}"
            )

        todos = []
        for index, item in enumerate(data):
            try:
                todos.append(self.model.model_validate(item))
            except ValidationError as e:
                raise StorageError(f"Unable to unmarshal todos file: entry {index}: {_describe(e)}") from e

        logger.info(f"Loaded {len(todos)} todos from {self.path}", extra={'path': str(self.path)})
        return todos

    def dumps(self, todos: Sequence[Todo]) -> str:
        """Serialize todos exactly as they are written to disk"""
        data = [todo.to_dict() for todo in todos]
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"

    def save(self, todos: Sequence[Todo]) -> None:
        """Сохранение списка задач (атомарная замена файла)"""
        try:
            # Lone surrogates (undecodable stdin bytes) fail here, before any file exists
            payload = self.dumps(todos).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise StorageError(f"Unable to marshal todos: {e}") from e

        directory = self.path.parent
        with LogTimer(logger, f"save {len(todos)} todos", path=str(self.path)):
            try:
                fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=str(directory))
            except OSError as e:
                raise StorageError(f"failed to create temp file: {e}") from e

            replaced = False
            try:
                try:
                    with os.fdopen(fd, 'wb') as tmp:
                        tmp.write(payload)
                        tmp.flush()
                        os.fsync(tmp.fileno())
                    os.chmod(tmp_name, self._file_mode())
                except OSError as e:
                    raise StorageError(f"failed to write temp file: {e}") from e

                try:
                    os.replace(tmp_name, self.path)
                except OSError as e:
                    raise StorageError(f"failed to rename file: {e}") from e
                replaced = True
            finally:
                # Also runs for KeyboardInterrupt / ShutdownRequested mid-write
                if not replaced:
                    _remove_quietly(tmp_name)

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except OSError:
            return DEFAULT_FILE_MODE


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get('loc', ()))
        parts.append(f"{location}: {err['msg']}" if location else err['msg'])
    return "; ".join(parts)


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(f"Unable to remove temp file {path}: {e}", extra={'path': path})
