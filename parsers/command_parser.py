"""Парсер командной строки REPL"""
from typing import List, Tuple

from core.errors import ParseError


class CommandParser:
    """Tokenizer for one line of REPL input.

    Whitespace (space, tab) separates tokens outside quotes. A double quote
    opens a token that may contain whitespace; it may only open at the start
    of a token. A backslash makes the next character literal.

    Пример:
        add "buy milk"      -> ('add', ['buy milk'])
        add buy\\ milk       -> ('add', ['buy milk'])
        edit 2 "say \\"hi\\"" -> ('edit', ['2', 'say "hi"'])
    """

    QUOTE = '"'
    ESCAPE = '\\'
    WHITESPACE = (' ', '\t')

    def tokenize(self, line: str) -> List[str]:
        line = line.strip()
        if not line:
            raise ParseError("empty command")

        tokens = []
        current = []
        in_quotes = False
        escaped = False

        for position, char in enumerate(line):
            if escaped:
                current.append(char)
                escaped = False
                continue

            if char == self.ESCAPE:
                escaped = True
                continue

            if char == self.QUOTE:
                if in_quotes:
                    # Закрывающая кавычка завершает токен, даже пустой
                    tokens.append(''.join(current))
                    current = []
                    in_quotes = False
                else:
                    if current:
                        raise ParseError(f"unexpected quote at position {position}")
                    in_quotes = True
                continue

            if char in self.WHITESPACE:
                if in_quotes:
                    current.append(char)
                elif current:
                    tokens.append(''.join(current))
                    current = []
                continue

            current.append(char)

        if in_quotes:
            raise ParseError("unclosed quote")

        if current:
            tokens.append(''.join(current))

        if not tokens:
            raise ParseError("empty command")

        return tokens

    def parse(self, line: str) -> Tuple[str, List[str]]:
        """Split a line into (command, args)"""
        tokens = self.tokenize(line)
        return tokens[0], tokens[1:]


_parser = CommandParser()


def parse_command(line: str) -> Tuple[str, List[str]]:
    """Module-level shortcut for CommandParser().parse"""
    return _parser.parse(line)
