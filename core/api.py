"""Functional API for Todo Manager - operations on the in-memory todo list"""
from typing import List, Optional

from core.errors import InvalidIdError, TodoNotFoundError
from core.models import Todo
from utils.logging_config import get_logger

logger = get_logger('api')


class TodoAPI:
    """
    Domain operations over a list of todos.

    The API does not persist anything and does no locking; the Dispatcher
    owns both concerns. Every failing operation raises before it touches
    the list.

    Usage:
        api = TodoAPI()
        todo = api.add_todo("Review PR")
        api.toggle_todo(todo.id)
        api.edit_todo(todo.id, "Review PR #42")
        api.delete_todo(todo.id)
    """

    def __init__(self, todos: Optional[List[Todo]] = None):
        self._todos: List[Todo] = list(todos) if todos else []

    @property
    def todos(self) -> List[Todo]:
        """Snapshot of the current list (models are copied)"""
        return [todo.model_copy() for todo in self._todos]

    def __len__(self) -> int:
        return len(self._todos)

    # ==================== Todo Operations ====================

    def add_todo(self, description: str) -> Todo:
        """
        Append a new todo.

        The id is len(todos) + 1, so an id freed by a deletion can be handed
        out again.
        """
        todo = Todo(id=len(self._todos) + 1, description=description)
        self._todos.append(todo)
        logger.info(f"Todo added: {todo.id}", extra={'todo_id': todo.id})
        return todo

    def list_todos(self) -> List[Todo]:
        return self.todos

    def get_todo(self, todo_id: int) -> Todo:
        """Return the first todo with the given id"""
        return self._todos[self._index_of(todo_id)]

    def delete_todo(self, todo_id: int) -> Todo:
        index = self._index_of(todo_id)
        todo = self._todos.pop(index)
        logger.info(f"Todo deleted: {todo_id}", extra={'todo_id': todo_id})
        return todo

    def toggle_todo(self, todo_id: int) -> Todo:
        """Flip the completed flag; used by both `completed` and `incomplete`"""
        todo = self.get_todo(todo_id)
        todo.completed = not todo.completed
        logger.info(f"Todo {todo_id} completed={todo.completed}", extra={'todo_id': todo_id})
        return todo

    def edit_todo(self, todo_id: int, description: str) -> Todo:
        todo = self.get_todo(todo_id)
        todo.description = description
        logger.info(f"Todo updated: {todo_id}", extra={'todo_id': todo_id})
        return todo

    # ==================== Helpers ====================

    def _index_of(self, todo_id: int) -> int:
        if todo_id <= 0:
            raise InvalidIdError(todo_id)
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise TodoNotFoundError(todo_id)
