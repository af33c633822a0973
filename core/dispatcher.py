"""Command dispatcher: validated commands -> TodoAPI -> TodoStorage"""
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from core.api import TodoAPI
from core.commands import validate_command
from core.errors import DomainError, StorageError
from core.models import Todo
from core.storage import TodoStorage
from utils.logging_config import get_logger

logger = get_logger('dispatcher')

# Команды, после которых файл не перезаписывается
NON_PERSISTING = frozenset({'list', 'exit'})


@dataclass
class CommandResult:
    """Outcome of one command, rendered by the CLI"""
    command: str
    message: Optional[str] = None
    todos: Optional[List[Todo]] = None
    error: Optional[str] = None
    warning: Optional[str] = None
    stop: bool = False
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ShutdownResult:
    exit_code: int
    error: Optional[str] = None
    todos_saved: int = 0


class Dispatcher:
    """
    Executes one command at a time against the in-memory todo list.

    The list is guarded by ``lock``; the shutdown path takes the same lock
    before it reads or saves the list.
    """

    def __init__(self, todos: List[Todo], storage: TodoStorage):
        self.storage = storage
        self.lock = threading.Lock()
        self._api = TodoAPI(todos)
        self._handlers: Dict[str, Callable[..., CommandResult]] = {
            'add': self._add,
            'list': self._list,
            'delete': self._delete,
            'completed': self._completed,
            'incomplete': self._incomplete,
            'edit': self._edit,
            'exit': self._exit,
        }

    @property
    def todos(self) -> List[Todo]:
        with self.lock:
            return self._api.todos

    def execute(self, command: str, args: List[str]) -> CommandResult:
        """
        Validate and run one command.

        Raises:
            CommandValidationError: before anything is locked or mutated
        """
        typed_args = validate_command(command, args)
        logger.debug(f"Executing {command} {typed_args}", extra={'command': command})

        with self.lock:
            handler = self._handlers.get(command)
            if handler is None:
                return CommandResult(command, error=f"invalid command: '{command}'")

            try:
                result = handler(*typed_args)
            except DomainError as e:
                logger.info(f"{command} failed: {e}", extra={'command': command})
                result = CommandResult(command, error=str(e))

            if command not in NON_PERSISTING:
                result.warning = self._persist()

        return result

    def shutdown(self) -> ShutdownResult:
        """Save under the lock; used by the signal path"""
        with self.lock:
            return self._final_save()

    # ==================== Handlers ====================

    def _add(self, description: str) -> CommandResult:
        self._api.add_todo(description)
        return CommandResult('add', message="Todo added successfully.")

    def _list(self) -> CommandResult:
        todos = self._api.list_todos()
        return CommandResult('list', message=None if todos else "No todos found.", todos=todos)

    def _delete(self, todo_id: int) -> CommandResult:
        self._api.delete_todo(todo_id)
        return CommandResult('delete', message="Todo deleted successfully.")

    def _completed(self, todo_id: int) -> CommandResult:
        self._api.toggle_todo(todo_id)
        return CommandResult('completed', message="Todo marked as completed.")

    def _incomplete(self, todo_id: int) -> CommandResult:
        # Same toggle as `completed`
        self._api.toggle_todo(todo_id)
        return CommandResult('incomplete', message="Todo marked as incomplete.")

    def _edit(self, todo_id: int, description: str) -> CommandResult:
        self._api.edit_todo(todo_id, description)
        return CommandResult('edit', message="Todo updated successfully.")

    def _exit(self) -> CommandResult:
        saved = self._final_save()
        if saved.error:
            return CommandResult('exit', error=f"failed to save todos: {saved.error}", stop=True, exit_code=1)
        return CommandResult('exit', stop=True)

    # ==================== Persistence ====================

    def _persist(self) -> Optional[str]:
        """Save after a mutating command; failure is only a warning"""
        try:
            self.storage.save(self._api.todos)
        except StorageError as e:
            logger.warning(f"failed to save todos: {e}", extra={'path': str(self.storage.path)})
            return f"Warning: failed to save todos: {e}"
        return None

    def _final_save(self) -> ShutdownResult:
        todos = self._api.todos
        try:
            self.storage.save(todos)
        except StorageError as e:
            logger.error(f"Final save failed: {e}", extra={'path': str(self.storage.path)})
            return ShutdownResult(exit_code=1, error=str(e))
        return ShutdownResult(exit_code=0, todos_saved=len(todos))
