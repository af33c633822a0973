"""CLI интерфейс для Todo Manager"""
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.markup import escape

from config import Config
from core.commands import COMMAND_SPECS
from core.dispatcher import CommandResult, Dispatcher
from core.errors import StorageError, TodoError
from core.models import Todo
from core.shutdown import ShutdownRequested, SignalWatcher
from core.storage import TodoStorage
from parsers.command_parser import parse_command
from utils.logging_config import get_logger, setup_logging

console = Console(highlight=False)
logger = get_logger('cli')

PROMPT = "> "


def format_todo(todo: Todo) -> str:
    """Checkbox line in rich markup; completed text is struck through"""
    description = escape(todo.description)
    if todo.completed:
        return f"[✓] {todo.id}. [strike]{description}[/strike]"
    return f"[ ] {todo.id}. {description}"


def render_result(result: CommandResult) -> None:
    if result.todos:
        for todo in result.todos:
            console.print(format_todo(todo), soft_wrap=True)
    if result.message:
        console.print(escape(result.message), soft_wrap=True)
    if result.error:
        console.print(f"[red]Error: {escape(result.error)}[/red]", soft_wrap=True)
    if result.warning:
        console.print(f"[yellow]{escape(result.warning)}[/yellow]", soft_wrap=True)


def _read_line() -> str:
    return console.input(PROMPT)


def run_loop(
    dispatcher: Dispatcher,
    read_line: Callable[[], str] = _read_line,
    watcher: Optional[SignalWatcher] = None,
) -> int:
    """
    Read-eval loop. Returns the process exit code.

    End of input leaves the loop without saving.
    """
    while True:
        try:
            try:
                line = read_line()
            except EOFError:
                console.print()
                logger.info("End of input, leaving without save")
                return 0
            except UnicodeDecodeError as e:
                logger.warning(f"Undecodable input line: {e}")
                console.print(f"[red]Error: invalid input encoding: {escape(str(e))}[/red]", soft_wrap=True)
                continue

            if not line.strip():
                continue

            try:
                command, args = parse_command(line)
                result = dispatcher.execute(command, args)
            except TodoError as e:
                console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
                continue

            render_result(result)
            if result.stop:
                return result.exit_code
        except ShutdownRequested as e:
            if watcher is None:
                raise
            return watcher.shutdown(e.signum)


def _commands_epilog() -> str:
    usages = ", ".join(spec.help for spec in COMMAND_SPECS.values())
    return f"Commands: {usages}"


@click.command(epilog=_commands_epilog())
@click.option('--file', 'todos_file', type=click.Path(dir_okay=False, path_type=Path),
              default=Config.TODOS_FILE, show_default=True, help='Файл со списком задач')
@click.option('--lenient', is_flag=True, default=not Config.STRICT_SCHEMA,
              help='Игнорировать неизвестные поля в файле')
@click.option('--log-dir', type=click.Path(file_okay=False, path_type=Path),
              default=Config.LOG_DIR, help='Каталог для логов')
@click.option('--log-level', default=Config.LOG_LEVEL, show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False))
def cli(todos_file, lenient, log_dir, log_level):
    """Todo Manager - интерактивный список задач"""
    setup_logging(
        log_dir=log_dir,
        level=Config.log_level(log_level),
        json_output=Config.LOG_JSON,
        console_output=Config.LOG_CONSOLE,
    )

    storage = TodoStorage(todos_file, strict=not lenient)
    try:
        todos = storage.load()
    except StorageError as e:
        logger.error(f"Load failed: {e}", extra={'path': str(todos_file)})
        console.print(f"[red]Error reading JSON file: {escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(1)

    dispatcher = Dispatcher(todos, storage)
    watcher = SignalWatcher(dispatcher, report=lambda message: console.print(f"[red]{escape(message)}[/red]"))
    watcher.install()

    sys.exit(run_loop(dispatcher, watcher=watcher))

