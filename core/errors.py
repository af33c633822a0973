"""Exception hierarchy for Todo Manager"""


class TodoError(Exception):
    """Base class for all user-facing errors"""


class ParseError(TodoError):
    """Malformed input line (quotes, empty command)"""


class CommandValidationError(TodoError):
    """Unknown command, wrong argument count or non-numeric id"""


class DomainError(TodoError):
    """Operation refers to a todo that cannot be acted upon"""


class InvalidIdError(DomainError):
    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"Invalid id: {todo_id}")


class TodoNotFoundError(DomainError):
    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"Todo with id {todo_id} not found")


class StorageError(TodoError):
    """Backing file could not be read, parsed or written"""
