"""Interactive question loop on top of a Rich console."""

import importlib.util
import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, TextIO

from rich.console import Console
from rich.text import Text

from typo3_console.console.formatter import to_markup
from typo3_console.console.question import ChoiceQuestion, Question
from typo3_console.exceptions import HiddenInputError, MissingInputError

logger = logging.getLogger(__name__)


@contextmanager
def _autocompletion(candidates: list[str] | None) -> Iterator[None]:
    """Install a readline completer for the duration of one answer.

    Only the completer is swapped; key bindings are left as they are.
    """
    if not candidates or importlib.util.find_spec("readline") is None:
        yield
        return

    import readline

    def complete(text: str, state: int) -> str | None:
        matches = [candidate for candidate in candidates if candidate.startswith(text)]
        return matches[state] if state < len(matches) else None

    previous = readline.get_completer()
    readline.set_completer(complete)
    try:
        yield
    finally:
        readline.set_completer(previous)


def _styled(text: str) -> Text:
    return Text.from_markup(to_markup(text), emoji=False)


class QuestionHelper:
    """Ask questions until a valid answer is given or attempts run out.

    Validators signal invalid input by raising ValueError. The error is shown
    and the question asked again; once the attempts are exhausted the last
    error propagates to the caller.
    """

    def __init__(self, default_attempts: int | None = None):
        """Initialize the helper.

        Args:
            default_attempts: Attempt limit for questions that set none (None = unlimited).
        """
        self.default_attempts = default_attempts

    def ask(self, input_stream: TextIO, console: Console, question: Question) -> Any:
        """Ask the question and return the validated answer."""
        remaining = question.max_attempts or self.default_attempts
        last_error: ValueError | None = None

        while remaining is None or remaining > 0:
            if last_error is not None:
                self._write_error(console, last_error)

            answer = self._do_ask(input_stream, console, question)
            if question.validator is None:
                return answer
            try:
                return question.validator(answer)
            except ValueError as error:
                logger.debug(f"Answer rejected: {error}")
                last_error = error

            if remaining is not None:
                remaining -= 1

        raise last_error

    def _do_ask(self, input_stream: TextIO, console: Console, question: Question) -> Any:
        prompt = self._write_prompt(console, question)

        autocomplete = question.autocomplete
        if autocomplete is None and isinstance(question, ChoiceQuestion):
            autocomplete = question.autocomplete_values

        answer = self._read(input_stream, console, prompt, question, autocomplete)

        answer = answer.rstrip("\r\n")
        if question.trimmable:
            answer = answer.strip()
        if answer == "":
            return question.default
        return answer

    def _write_prompt(self, console: Console, question: Question) -> Text:
        """Print every line but the last; return the last as the input prompt."""
        lines = question.lines
        if not isinstance(question, ChoiceQuestion):
            for line in lines[:-1]:
                console.print(_styled(line), emoji=False)
            return _styled(lines[-1])

        for line in lines:
            console.print(_styled(line), emoji=False)
        width = max(len(str(key)) for key in question.choices)
        for key, value in question.choices.items():
            padding = " " * (width - len(str(key)))
            console.print(Text(f"  [{key}{padding}] {value}"), emoji=False)
        return Text(" > ")

    def _read(
        self,
        input_stream: TextIO,
        console: Console,
        prompt: Text,
        question: Question,
        autocomplete: list[str] | None,
    ) -> str:
        """Read one answer through the console.

        Hidden answers need a terminal; without one they are read visibly
        when the question allows it.

        Raises:
            HiddenInputError: If the answer cannot be hidden and fallback is off
            MissingInputError: If the input ends before an answer is given
        """
        interactive = input_stream is sys.stdin and input_stream.isatty()
        password = question.hidden and interactive
        if question.hidden and not interactive:
            if not question.hidden_fallback:
                raise HiddenInputError("Unable to hide the response.")
            logger.debug("Input is not a terminal, reading hidden response visibly")

        try:
            if interactive:
                with _autocompletion(None if password else autocomplete):
                    answer = console.input(prompt, emoji=False, password=password)
            else:
                answer = console.input(prompt, emoji=False, stream=input_stream)
        except EOFError:
            raise MissingInputError("Aborted.")

        # A stream read returns "" only at end of input
        if answer == "" and not interactive:
            raise MissingInputError("Aborted.")
        return answer

    def _write_error(self, console: Console, error: Exception) -> None:
        console.print(Text(str(error), style="error"), emoji=False)
