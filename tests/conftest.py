"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import click
import pytest

from typings_install.models import Question


class FakeConsole:
    """ConsolePort double: scripted answers, captured output (styles stripped)."""

    def __init__(self, answers: list[object] | None = None) -> None:
        self.answers = list(answers or [])
        self.questions: list[Question] = []
        self.lines: list[str] = []
        self.errors: list[str] = []

    async def ask(self, question: Question) -> object:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected question: {question.message}")
        return self.answers.pop(0)

    def echo(self, message: str = "") -> None:
        self.lines.append(click.unstyle(message))

    def error(self, message: str) -> None:
        self.errors.append(click.unstyle(message))

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def make_console() -> Callable[..., FakeConsole]:
    def _make(*answers: object) -> FakeConsole:
        return FakeConsole(list(answers))

    return _make
