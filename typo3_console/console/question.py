"""Question definitions passed to the question helper."""

import re
from dataclasses import dataclass, field
from typing import Any, Callable

from typo3_console.exceptions import InvalidValueError

Validator = Callable[[Any], Any]


@dataclass
class Question:
    """A free-text question.

    Attributes:
        text: Question text, or a list of lines for a multi-line question.
        default: Answer used when the user enters nothing.
        validator: Callable returning the normalized answer or raising ValueError.
        max_attempts: Number of tries before the last error propagates (None = unlimited).
        hidden: Read the answer without echo.
        hidden_fallback: Read visibly when the answer cannot be hidden.
        autocomplete: Candidates offered for tab completion.
        trimmable: Strip surrounding whitespace from the answer.
    """

    text: str | list[str]
    default: Any = None
    validator: Validator | None = None
    max_attempts: int | None = None
    hidden: bool = False
    hidden_fallback: bool = True
    autocomplete: list[str] | None = None
    trimmable: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("Maximum number of attempts must be a positive value.")
        if self.hidden and self.autocomplete:
            raise ValueError("A hidden question cannot use the autocompleter.")

    @property
    def lines(self) -> list[str]:
        if isinstance(self.text, str):
            return [self.text]
        return list(self.text)


@dataclass
class ChoiceQuestion(Question):
    """A question answered by picking one (or several) of the given choices.

    Choices given as a list are keyed by their index. Answers may name either
    the key or the value; the resolved key is returned.
    """

    choices: dict[Any, Any] | list[Any] = field(default_factory=dict)
    multiselect: bool = False
    error_message: str = 'Value "%s" is invalid'

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.choices:
            raise ValueError("Choice question must have at least 1 choice available.")
        if isinstance(self.choices, list):
            self.choices = dict(enumerate(self.choices))
        if self.validator is None:
            self.validator = self._validate_choice

    @property
    def autocomplete_values(self) -> list[str]:
        return [str(key) for key in self.choices] + [
            str(value) for value in self.choices.values()
        ]

    def _resolve(self, answer: str) -> Any:
        for key, value in self.choices.items():
            if str(value) == answer:
                return key
        for key in self.choices:
            if str(key) == answer:
                return key
        raise InvalidValueError(self.error_message % answer)

    def _validate_choice(self, answer: Any) -> Any:
        if answer is None:
            raise InvalidValueError(self.error_message % "")
        answer = str(answer)

        if self.multiselect:
            if not re.fullmatch(r"[^,]+(?:,[^,]+)*", answer):
                raise InvalidValueError(self.error_message % answer)
            return [self._resolve(part.strip()) for part in answer.split(",")]

        return self._resolve(answer.strip())


_YES = re.compile(r"^y(es)?$", re.IGNORECASE)
_NO = re.compile(r"^no?$", re.IGNORECASE)


@dataclass
class ConfirmationQuestion(Question):
    """A yes/no question. Unrecognized answers are asked again."""

    default: bool = True

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.validator is None:
            self.validator = self._validate_confirmation

    @staticmethod
    def _validate_confirmation(answer: Any) -> bool:
        if isinstance(answer, bool):
            return answer
        if answer is not None:
            if _YES.match(answer):
                return True
            if _NO.match(answer):
                return False
        raise InvalidValueError(f'Please answer "yes" or "no" (got "{answer}")')
