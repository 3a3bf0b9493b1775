# prompter.py
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Iterable, List, Optional, Sequence

import click

from .errors import PromptError

# A validator raises ValueError with a user facing message when the answer is rejected.
Validator = Callable[[str], None]


class Prompter(ABC):
    """The questions an import may need to ask the user."""

    @abstractmethod
    def confirm(self, message: str, default: bool = True) -> bool:
        ...

    @abstractmethod
    def input(
        self,
        message: str,
        default: Optional[str] = None,
        validator: Optional[Validator] = None,
        hide: bool = False,
    ) -> str:
        ...

    @abstractmethod
    def select(self, message: str, options: Sequence[str], default: Optional[str] = None) -> str:
        ...


def _validate(value: str, validator: Optional[Validator]) -> Optional[str]:
    """Return the rejection message, or None if the value is accepted."""
    if validator is None:
        return None
    try:
        validator(value)
    except ValueError as e:
        return str(e) or "invalid value"
    return None


class ClickPrompter(Prompter):
    """Interactive prompts on the terminal."""

    def confirm(self, message: str, default: bool = True) -> bool:
        return click.confirm(message, default=default)

    def input(
        self,
        message: str,
        default: Optional[str] = None,
        validator: Optional[Validator] = None,
        hide: bool = False,
    ) -> str:
        while True:
            value = click.prompt(
                message,
                default=default or None,
                hide_input=hide,
                show_default=not hide,
            )
            value = value.strip()
            problem = _validate(value, validator)
            if problem is None:
                return value
            click.echo(f"Error: {problem}", err=True)

    def select(self, message: str, options: Sequence[str], default: Optional[str] = None) -> str:
        if not options:
            raise PromptError(f"{message} (no options to choose from)")
        click.echo(message)
        for i, option in enumerate(options, start=1):
            click.echo(f"  {i}) {option}")
        default_index = options.index(default) + 1 if default in options else 1
        choice = click.prompt(
            "Enter choice",
            type=click.IntRange(1, len(options)),
            default=default_index,
        )
        return options[choice - 1]


class BatchPrompter(Prompter):
    """
    Non-interactive answers for --batch-mode.

    Every question is answered with its default; a question without a usable
    default is an error instead of a hang.
    """

    def confirm(self, message: str, default: bool = True) -> bool:
        return default

    def input(
        self,
        message: str,
        default: Optional[str] = None,
        validator: Optional[Validator] = None,
        hide: bool = False,
    ) -> str:
        value = (default or "").strip()
        problem = _validate(value, validator)
        if problem is not None:
            raise PromptError(f"{message.strip()} cannot be answered in batch mode: {problem}")
        return value

    def select(self, message: str, options: Sequence[str], default: Optional[str] = None) -> str:
        if default is not None and default in options:
            return default
        if not options:
            raise PromptError(f"{message} (no options to choose from)")
        raise PromptError(f"{message.strip()} cannot be answered in batch mode: no default among {len(options)} options")


class ScriptedPrompter(Prompter):
    """
    Replays pre-programmed answers, in order, for tests.

    An answer of None means "accept the default". Every question asked is
    recorded in `asked` as (kind, message).
    """

    def __init__(self, answers: Iterable[Any] = ()):
        self.answers = deque(answers)
        self.asked: List[tuple[str, str]] = []

    def _next(self, kind: str, message: str) -> Any:
        self.asked.append((kind, message))
        if not self.answers:
            raise PromptError(f"no scripted answer for {kind} prompt: {message}")
        return self.answers.popleft()

    def confirm(self, message: str, default: bool = True) -> bool:
        answer = self._next("confirm", message)
        return default if answer is None else bool(answer)

    def input(
        self,
        message: str,
        default: Optional[str] = None,
        validator: Optional[Validator] = None,
        hide: bool = False,
    ) -> str:
        answer = self._next("input", message)
        value = (default or "") if answer is None else str(answer)
        problem = _validate(value, validator)
        if problem is not None:
            raise PromptError(f"scripted answer {value!r} rejected: {problem}")
        return value

    def select(self, message: str, options: Sequence[str], default: Optional[str] = None) -> str:
        answer = self._next("select", message)
        if answer is None:
            answer = default if default is not None else options[0]
        if answer not in options:
            raise PromptError(f"scripted answer {answer!r} is not one of {list(options)}")
        return answer
