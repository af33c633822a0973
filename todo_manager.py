#!/usr/bin/env python3
"""
Todo Manager - интерактивный список задач в todos.json

Команды (по одной на строку после приглашения "> "):
    add "описание"          - Добавить задачу
    list                    - Показать все задачи
    delete <id>             - Удалить задачу
    completed <id>          - Переключить отметку выполнения
    incomplete <id>         - Переключить отметку выполнения
    edit <id> "описание"    - Изменить описание
    exit                    - Сохранить и выйти

Использование:
    python todo_manager.py [--file todos.json] [--lenient]
"""

from core.cli_interface import cli


def main():
    """Главная точка входа"""
    cli()


if __name__ == '__main__':
    main()
