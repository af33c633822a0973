"""Command table and argument validation"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from core.errors import CommandValidationError


class ArgType(Enum):
    """Тип аргумента команды"""
    INT = "int"
    TEXT = "string"


@dataclass(frozen=True)
class CommandSpec:
    """Arity and per-argument types of one command"""
    name: str
    arg_types: Tuple[ArgType, ...] = field(default_factory=tuple)
    help: str = ""

    @property
    def num_args(self) -> int:
        return len(self.arg_types)


COMMAND_SPECS: Dict[str, CommandSpec] = {
    spec.name: spec for spec in (
        CommandSpec("add", (ArgType.TEXT,), "add <description>"),
        CommandSpec("list", (), "list"),
        CommandSpec("delete", (ArgType.INT,), "delete <id>"),
        CommandSpec("completed", (ArgType.INT,), "completed <id>"),
        CommandSpec("incomplete", (ArgType.INT,), "incomplete <id>"),
        CommandSpec("edit", (ArgType.INT, ArgType.TEXT), "edit <id> <description>"),
        CommandSpec("exit", (), "exit"),
    )
}


INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def _parse_int(value: str) -> int:
    # int() would also accept "1_000" and surrounding whitespace
    text = value[1:] if value[:1] in ('+', '-') else value
    if not text.isdigit() or not text.isascii():
        raise ValueError(value)
    number = int(value)
    # Signed 64-bit, so huge ids are not a number rather than "not found"
    if not INT_MIN <= number <= INT_MAX:
        raise ValueError(value)
    return number


def validate_command(command: str, args: List[str]) -> List[Any]:
    """
    Validate a parsed command against COMMAND_SPECS.

    Args:
        command: Command name (case-sensitive)
        args: Raw string arguments

    Returns:
        Arguments converted to their declared types

    Raises:
        CommandValidationError: unknown command, wrong arity or bad integer
    """
    spec = COMMAND_SPECS.get(command)
    if spec is None:
        raise CommandValidationError(f"invalid command: '{command}'")

    if len(args) != spec.num_args:
        raise CommandValidationError(
            f"command '{command}' requires exactly {spec.num_args} argument(s)"
        )

    typed: List[Any] = []
    for arg, arg_type in zip(args, spec.arg_types):
        if arg_type is ArgType.INT:
            try:
                typed.append(_parse_int(arg))
            except ValueError:
                raise CommandValidationError(f"invalid ID: '{arg}' is not a number") from None
        else:
            typed.append(arg)
    return typed
