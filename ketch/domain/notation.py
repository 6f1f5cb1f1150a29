"""Parser for the parenthesized notation used by the ketchfile.

A file is a sequence of forms. A form is either a bare identifier or a
keyed list ``(key form ...)``. There is no quoting: identifiers end at
whitespace or at a closing parenthesis.
"""
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from returns.io import IOResult, IOResultE, impure_safe
from returns.result import safe

from ketch.errors import ConfigReadError, NotationSyntaxError


@dataclass(frozen=True)
class Identifier:
    text: str


@dataclass(frozen=True)
class List:
    values: tuple["ConfigValue", ...] = ()


@dataclass(frozen=True)
class KeyedList:
    key: str
    body: List


@dataclass(frozen=True)
class Empty:
    """Result of parsing pure whitespace. Never kept in a returned list."""


ConfigValue = Identifier | List | KeyedList | Empty

_TERMINATING = frozenset(" \t\r\n)")


class NotationParser:
    def __init__(self, text: str):
        self.text = text
        self.current = 0
        self.line = 1

    def _is_at_end(self) -> bool:
        return self.current >= len(self.text)

    def _peek(self) -> str | None:
        return None if self._is_at_end() else self.text[self.current]

    def _advance(self) -> str:
        c = self.text[self.current]
        self.current += 1
        return c

    def _identifier(self) -> str:
        start = self.current
        while not self._is_at_end() and self.text[self.current] not in _TERMINATING:
            self.current += 1
        return self.text[start : self.current]

    def _keyed_list(self) -> KeyedList:
        key = self._identifier()
        body: list[ConfigValue] = []
        while not self._is_at_end() and self._peek() != ")":
            match self._form():
                case Empty():
                    pass
                case value:
                    body.append(value)
        if self._is_at_end():
            raise NotationSyntaxError(self.line, "expected `)`, found end of input.")
        self._advance()
        return KeyedList(key, List(tuple(body)))

    def _form(self) -> ConfigValue:
        match self._advance():
            case " " | "\t" | "\r":
                return Empty()
            case "\n":
                self.line += 1
                return Empty()
            case "(":
                return self._keyed_list()
            case c:
                return Identifier(c + self._identifier())

    def parse(self) -> tuple[ConfigValue, ...]:
        output: list[ConfigValue] = []
        while not self._is_at_end():
            match self._form():
                case Empty():
                    pass
                case value:
                    output.append(value)
        return tuple(output)


@safe((NotationSyntaxError,))
def parse(text: str) -> tuple[ConfigValue, ...]:
    parser = NotationParser(text)
    try:
        return parser.parse()
    except RecursionError:
        raise NotationSyntaxError(parser.line, "forms are nested too deeply.") from None


def parse_file(path: Path) -> IOResultE[tuple[ConfigValue, ...]]:
    return (
        impure_safe(path.read_text)()
        .alt(lambda e: ConfigReadError(f"Failed to read file: {path}: {_reason(e)}."))
        .bind(lambda text: IOResult.from_result(parse(text)))
    )


def _reason(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)


def find(forms: Iterable[ConfigValue], key: str) -> List | None:
    """Body of the first top-level keyed list named `key`."""
    for form in forms:
        match form:
            case KeyedList(k, body) if k == key:
                return body
    return None


def _dump_value(value: ConfigValue) -> str:
    match value:
        case Identifier(text):
            return text
        case List(values):
            return " ".join(_dump_value(v) for v in values if v != Empty())
        case KeyedList(key, body) if body.values:
            return f"({key} {_dump_value(body)})"
        case KeyedList(key, _):
            return f"({key})"
        case Empty():
            return ""


def dump(forms: Iterable[ConfigValue]) -> str:
    return "".join(f"{_dump_value(form)}\n" for form in forms if form != Empty())
