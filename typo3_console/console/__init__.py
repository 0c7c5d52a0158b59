"""Console I/O for commands.

This package provides:
- ConsoleOutput: facade for styled output, tables, progress and questions
- QuestionHelper: the question/validation loop
- Question, ChoiceQuestion, ConfirmationQuestion: question definitions
- ProgressBar and TableRenderer: the lazily created helpers
"""

from typo3_console.console.output import ConsoleOutput
from typo3_console.console.progress import ProgressBar
from typo3_console.console.question import (
    ChoiceQuestion,
    ConfirmationQuestion,
    Question,
)
from typo3_console.console.question_helper import QuestionHelper
from typo3_console.console.table import TableRenderer

__all__ = [
    # Facade
    "ConsoleOutput",
    # Helpers
    "QuestionHelper",
    "ProgressBar",
    "TableRenderer",
    # Questions
    "Question",
    "ChoiceQuestion",
    "ConfirmationQuestion",
]
