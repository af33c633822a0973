"""Core module for Todo Manager"""
from core.errors import (
    TodoError,
    ParseError,
    CommandValidationError,
    DomainError,
    InvalidIdError,
    TodoNotFoundError,
    StorageError,
)
from core.models import Todo, LenientTodo
from core.storage import TodoStorage
from core.commands import ArgType, CommandSpec, COMMAND_SPECS, validate_command
from core.api import TodoAPI
from core.dispatcher import CommandResult, Dispatcher

__all__ = [
    # Errors
    'TodoError',
    'ParseError',
    'CommandValidationError',
    'DomainError',
    'InvalidIdError',
    'TodoNotFoundError',
    'StorageError',
    # Models
    'Todo',
    'LenientTodo',
    # Storage
    'TodoStorage',
    # Commands
    'ArgType',
    'CommandSpec',
    'COMMAND_SPECS',
    'validate_command',
    # API
    'TodoAPI',
    'CommandResult',
    'Dispatcher',
]
