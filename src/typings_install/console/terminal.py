"""Terminal console backed by click prompts."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import click

from typings_install.models import Question, QuestionKind


@dataclass(frozen=True, slots=True)
class ClickConsole:
    """Asks questions on the controlling terminal.

    click prompts block, so each one runs in a worker thread to keep the
    event loop free. Ctrl-C surfaces as ``click.Abort``.
    """

    async def ask(self, question: Question) -> object:
        return await asyncio.to_thread(self._ask_blocking, question)

    def echo(self, message: str = "") -> None:
        click.echo(message)

    def error(self, message: str) -> None:
        click.echo(message, err=True)

    @staticmethod
    def _ask_blocking(question: Question) -> object:
        if question.kind is QuestionKind.CONFIRM:
            default = True if question.default is None else bool(question.default)
            return click.confirm(question.message, default=default)

        if question.kind is QuestionKind.INPUT:
            if question.default:
                return click.prompt(question.message, default=str(question.default))
            return click.prompt(question.message)

        if not question.choices:
            raise ValueError(f"List question '{question.name}' has no choices")

        click.echo(f"{question.message}:")
        for index, choice in enumerate(question.choices, start=1):
            click.echo(f"  {index}) {choice.name}")
        picked = click.prompt(
            "Select",
            type=click.IntRange(1, len(question.choices)),
        )
        return question.choices[picked - 1].value
