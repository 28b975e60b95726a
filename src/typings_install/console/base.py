"""Port: interactive terminal (questions in, messages out)."""

from __future__ import annotations

from typing import Protocol

from typings_install.models import Question


class ConsolePort(Protocol):
    """Port for asking the user questions and printing progress."""

    async def ask(self, question: Question) -> object:
        """Ask one question and return the answer.

        ``confirm`` -> bool, ``input`` -> str, ``list`` -> the chosen ``Choice.value``.
        """
        ...

    def echo(self, message: str = "") -> None:
        """Print a line to standard output."""
        ...

    def error(self, message: str) -> None:
        """Print a line to standard error."""
        ...
