"""Console output and input facade."""

import logging
import sys
import textwrap
from typing import Any, Sequence, TextIO

from rich.console import Console

from typo3_console.config import is_sub_process
from typo3_console.console.formatter import create_theme, to_markup
from typo3_console.console.progress import ProgressBar
from typo3_console.console.question import (
    ChoiceQuestion,
    ConfirmationQuestion,
    Question,
    Validator,
)
from typo3_console.console.question_helper import QuestionHelper
from typo3_console.console.table import TableRenderer
from typo3_console.exceptions import CliContextError

logger = logging.getLogger(__name__)


class ConsoleOutput:
    """A wrapper for a Rich console and the related helpers.

    Text may contain style tags such as <b>, <success> or <error> (see
    typo3_console.console.formatter.STYLES). The question helper, progress
    bar and table renderer are created on first use.

    Usage:
        io = ConsoleOutput()
        io.output_line("Hello <b>%s</b>", ["world"])
        name = io.ask("Name: ", default="admin")
    """

    def __init__(
        self,
        console: Console | None = None,
        input_stream: TextIO | None = None,
        default_attempts: int | None = None,
    ):
        """Initialize the console output.

        Args:
            console: Rich Console to write to (a new stdout console if not provided).
            input_stream: Stream answers are read from (sys.stdin if not provided).
            default_attempts: Attempt limit for questions asked without one.
        """
        if console is None:
            console = Console(theme=create_theme())
        else:
            console.push_theme(create_theme())
        self.console = console
        self.default_attempts = default_attempts

        self._input = input_stream
        self._question_helper: QuestionHelper | None = None
        self._progress_bar: ProgressBar | None = None
        self._table: TableRenderer | None = None

    @property
    def input_stream(self) -> TextIO:
        return self._get_input()

    @property
    def maximum_line_length(self) -> int:
        """Desired maximum line length for console output."""
        return self.console.width - 2

    def output(self, text: str, arguments: Sequence[Any] | None = None) -> None:
        """Output text to the console.

        Args:
            text: Text to output
            arguments: Optional arguments substituted into text printf-style
        """
        if arguments:
            text = text % tuple(arguments)

        if is_sub_process():
            # Parent process does the formatting
            self.console.file.write(text)
            self.console.file.flush()
        else:
            self.console.print(
                to_markup(text), end="", highlight=False, soft_wrap=True, emoji=False
            )

    def output_line(self, text: str = "", arguments: Sequence[Any] | None = None) -> None:
        """Output text followed by a line break.

        See output().
        """
        if arguments:
            text = text % tuple(arguments)
        self.output(text + "\n")

    def output_formatted(
        self,
        text: str = "",
        arguments: Sequence[Any] | None = None,
        left_padding: int = 0,
    ) -> None:
        """Wrap text to the maximum line length and output it line by line.

        Args:
            text: Text to output
            arguments: Optional arguments substituted into text printf-style
            left_padding: Number of spaces to indent every line with
        """
        if arguments:
            text = text % tuple(arguments)

        width = max(self.maximum_line_length - left_padding, 1)
        padding = " " * left_padding
        for line in text.split("\n"):
            wrapped = textwrap.wrap(
                line, width=width, break_long_words=True, break_on_hyphens=False
            )
            for segment in wrapped or [""]:
                self.output_line(padding + segment)

    def output_table(
        self, rows: Sequence[Sequence[Any]], headers: Sequence[Any] | None = None
    ) -> None:
        """Render the rows as a table, optionally with headers."""
        table = self._get_table()
        if headers is not None:
            table.set_headers(headers)
        table.set_rows(rows)
        table.render()

    def select(
        self,
        question: str | list[str],
        choices: dict[Any, Any] | list[Any],
        default: Any = None,
        multi_select: bool = False,
        attempts: int | None = None,
    ) -> Any:
        """Ask the user to select a value.

        Args:
            question: The question; a list is asked as one line per item
            choices: Choices to pick from (a list is keyed by index)
            default: Key used when the user enters nothing
            multi_select: Accept comma separated answers and return a list of keys
            attempts: Max number of times to ask (None means unlimited)

        Returns:
            The selected key, or a list of keys with multi_select

        Raises:
            InvalidValueError: After the last invalid answer
        """
        return self._ask(
            ChoiceQuestion(
                question,
                default=default,
                max_attempts=attempts,
                choices=choices,
                multiselect=multi_select,
            )
        )

    def ask(
        self,
        question: str | list[str],
        default: str | None = None,
        autocomplete: list[str] | None = None,
    ) -> str | None:
        """Ask a question, autocomplete only works on an interactive terminal."""
        return self._ask(Question(question, default=default, autocomplete=autocomplete))

    def ask_confirmation(self, question: str | list[str], default: bool = True) -> bool:
        """Ask a yes/no question until it is answered by nothing, yes or no."""
        return self._ask(ConfirmationQuestion(question, default=default))

    def ask_hidden_response(self, question: str | list[str], fallback: bool = True) -> str | None:
        """Ask a question without echoing the response.

        Args:
            question: The question
            fallback: Read visibly when the response cannot be hidden

        Raises:
            HiddenInputError: If the response cannot be hidden and fallback is False
        """
        return self._ask(Question(question, hidden=True, hidden_fallback=fallback))

    def ask_and_validate(
        self,
        question: str | list[str],
        validator: Validator,
        attempts: int | None = None,
        default: str | None = None,
        autocomplete: list[str] | None = None,
    ) -> Any:
        """Ask for a value and validate the response.

        The validator receives the answer and returns the (transformed) value,
        or raises ValueError when it is not valid.
        """
        return self._ask(
            Question(
                question,
                default=default,
                validator=validator,
                max_attempts=attempts,
                autocomplete=autocomplete,
            )
        )

    def ask_hidden_response_and_validate(
        self,
        question: str | list[str],
        validator: Validator,
        attempts: int | None = None,
        fallback: bool = True,
    ) -> Any:
        """Ask for a hidden value and validate the response."""
        return self._ask(
            Question(
                question,
                validator=validator,
                max_attempts=attempts,
                hidden=True,
                hidden_fallback=fallback,
            )
        )

    def progress_start(self, max_steps: int | None = None) -> None:
        """Start the progress output, indeterminate when max_steps is None."""
        self._get_progress_bar().start(max_steps)

    def progress_advance(self, step: int = 1) -> None:
        self._get_progress_bar().advance(step)

    def progress_set(self, current: int) -> None:
        self._get_progress_bar().set_progress(current)

    def progress_finish(self) -> None:
        self._get_progress_bar().finish()

    def _ask(self, question: Question) -> Any:
        return self._get_question_helper().ask(self._get_input(), self.console, question)

    def _get_input(self) -> TextIO:
        if self._input is None:
            if sys.stdin is None or getattr(sys, "argv", None) is None:
                raise CliContextError("Cannot read input without CLI context.")
            self._input = sys.stdin
        return self._input

    def _get_question_helper(self) -> QuestionHelper:
        if self._question_helper is None:
            self._question_helper = QuestionHelper(self.default_attempts)
        return self._question_helper

    def _get_progress_bar(self) -> ProgressBar:
        if self._progress_bar is None:
            self._progress_bar = ProgressBar(self.console)
        return self._progress_bar

    def _get_table(self) -> TableRenderer:
        if self._table is None:
            self._table = TableRenderer(self.console)
        return self._table
