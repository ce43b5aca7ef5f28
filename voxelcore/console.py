"""An interactive console for chat lines and slash commands."""

from __future__ import annotations

import argparse
import enum
import string
import sys
import threading
from dataclasses import dataclass
from fractions import Fraction
from typing import TextIO

from voxelcore.timing import DeltaTime

_RESET = "\x1b[0m"
_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)
_WHITESPACE = frozenset(" \n\t")


def _style(text: str, code: str, enabled: bool) -> str:
    return f"{code}{text}{_RESET}" if enabled else text


class CommandError(Exception):
    """A console line that could not be turned into a command."""

    message = "Command error"

    def __str__(self) -> str:
        return f"ERROR: {self.message}"


class UnknownCommandError(CommandError):
    message = "Unknown command"


class InvalidCharacterError(CommandError):
    """A character that may not appear in a command name."""

    def __init__(self, char: str) -> None:
        super().__init__(char)
        self.char = char

    @property
    def message(self) -> str:  # type: ignore[override]
        return f"Invalid character: {self.char}"


class NumberParsingError(CommandError):
    """A character that does not belong in a number literal."""

    def __init__(self, char: str | None) -> None:
        super().__init__(char)
        self.char = char

    @property
    def message(self) -> str:  # type: ignore[override]
        if self.char is None:
            return "Empty number"
        return f"Invalid character in number: {self.char}"


class Base(enum.IntEnum):
    BINARY = 2
    SEXIMAL = 6
    OCTAL = 8
    DECIMAL = 10
    DOZENAL = 12
    HEXADECIMAL = 16


_BASE_PREFIXES = {
    "b": Base.BINARY,
    "s": Base.SEXIMAL,
    "o": Base.OCTAL,
    "d": Base.DOZENAL,
    "x": Base.HEXADECIMAL,
}


class CommandType(enum.Enum):
    STATUS = "status"
    QUIT = "quit"

    @classmethod
    def from_name(cls, name: str) -> CommandType | None:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Command:
    kind: CommandType
    args: tuple[Fraction | str, ...] = ()


def _digit(char: str, base: int) -> int | None:
    if char not in _ASCII_ALNUM:
        return None
    value = int(char, 36)
    return value if value < base else None


def parse_number(text: str) -> Fraction:
    """Parse a number literal with an optional 0b/0s/0o/0d/0x base prefix.

    Underscores are ignored and a single point starts the fraction digits.
    """
    if not text:
        raise NumberParsingError(None)
    first = _digit(text[0], 10)
    if first is None:
        raise NumberParsingError(text[0])
    result = Fraction(first)
    rest = iter(text[1:])
    base = Base.DECIMAL
    if text[0] == "0":
        second = next(rest, None)
        if second is None:
            return Fraction(0)
        if second in _BASE_PREFIXES:
            base = _BASE_PREFIXES[second]
        else:
            value = _digit(second, 10)
            if value is None:
                raise NumberParsingError(second)
            result = Fraction(value)

    after_point = False
    for char in rest:
        value = _digit(char, base)
        if value is not None:
            numerator, denominator = result.numerator, result.denominator
            if after_point:
                denominator *= int(base)
            result = Fraction(numerator * int(base) + value, denominator)
        elif char == ".":
            after_point = True
        elif char != "_":
            raise NumberParsingError(char)
    return result


def parse_command(raw_command: str) -> Command:
    """Parse a command name followed by whitespace-separated arguments.

    Arguments that start with a digit are read as numbers.
    """
    name_chars = []
    rest = ""
    for index, char in enumerate(raw_command):
        if char in _ASCII_ALNUM:
            name_chars.append(char)
        elif char in _WHITESPACE:
            rest = raw_command[index + 1:]
            break
        else:
            raise InvalidCharacterError(char)
    kind = CommandType.from_name("".join(name_chars))
    if kind is None:
        raise UnknownCommandError()
    args = tuple(
        parse_number(token) if token[0] in string.digits else token
        for token in rest.split()
    )
    return Command(kind, args)


class Console:
    """Reads lines, echoes chat messages and runs slash commands."""

    def __init__(
        self,
        delta_time: DeltaTime,
        name: str = "Mika",
        output: TextIO | None = None,
        color: bool | None = None,
        prompt: str = ">> ",
    ) -> None:
        self.delta_time = delta_time
        self.name = name
        self.output = output if output is not None else sys.stdout
        if color is None:
            isatty = getattr(self.output, "isatty", None)
            color = bool(isatty and isatty())
        self.color = color
        self.prompt = prompt

    def _print(self, text: str) -> None:
        print(text, file=self.output)

    def _status(self) -> None:
        seconds = self.delta_time.get()
        fps = 1.0 / seconds if seconds else float("inf")
        msg = f"FPS: {fps}"
        if fps < 10.0:
            msg = _style(msg, "\x1b[31m", self.color)
        elif fps < 60.0:
            msg = _style(msg, "\x1b[38;2;200;180;0m", self.color)
        else:
            self._print("Everything alright!")
            msg = _style(msg, "\x1b[32m", self.color)
        self._print(_style(msg, "\x1b[1m", self.color))

    def handle_line(self, line: str) -> bool:
        """Handle one line; return False once the console should stop."""
        if not line.startswith("/"):
            self._print(f"{_style(self.name + ':', chr(27) + '[1m', self.color)} {line}")
            return True
        rest = line[1:]
        if not rest:
            return True
        try:
            command = parse_command(rest)
        except CommandError as err:
            label = _style("ERROR:", "\x1b[31m", self.color)
            self._print(f"{label} {err.message}")
            return True
        if command.kind is CommandType.QUIT:
            return False
        self._status()
        return True

    def run(self) -> None:
        """Read lines from standard input until quit or end of input."""
        try:
            import readline  # noqa: F401  (enables line editing and history)
        except ImportError:
            pass
        while True:
            try:
                line = input(self.prompt)
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_line(line):
                break

    def start(self) -> threading.Thread:
        """Run the console on a background thread named "console"."""
        thread = threading.Thread(target=self.run, name="console", daemon=True)
        thread.start()
        return thread


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive game console.")
    parser.add_argument("--name", default="Mika", help="name shown before chat lines")
    args = parser.parse_args(argv)
    Console(DeltaTime(), name=args.name).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())