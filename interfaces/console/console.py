from __future__ import annotations

from typing import Protocol


class Console(Protocol):
    """
    Line-oriented text I/O used by the console commands.

    `read_line` raises `EOFError` once input is exhausted.
    """

    def read_line(self, prompt: str = "") -> str:
        ...

    def write_line(self, text: str = "") -> None:
        ...


class StdConsole(Console):
    """`Console` backed by stdin/stdout."""

    def read_line(self, prompt: str = "") -> str:
        return input(prompt)

    def write_line(self, text: str = "") -> None:
        print(text)
