"""Table renderer for row/column output."""

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from typo3_console.console.formatter import to_markup


def _cell(value: Any) -> Text:
    return Text.from_markup(to_markup(str(value)), emoji=False)


class TableRenderer:
    """Render rows as a table.

    Uses Rich's Table class. Headers and rows are kept between renders so the
    renderer can be reused; cells may contain console style tags.
    """

    def __init__(self, console: Console):
        self.console = console
        self.headers: list[Any] = []
        self.rows: list[Sequence[Any]] = []

    def set_headers(self, headers: Sequence[Any]) -> "TableRenderer":
        self.headers = list(headers)
        return self

    def set_rows(self, rows: Sequence[Sequence[Any]]) -> "TableRenderer":
        self.rows = list(rows)
        return self

    def build(self) -> Table:
        """Build the Rich table for the current headers and rows."""
        table = Table(show_header=bool(self.headers), header_style="bold")

        column_count = max(
            [len(self.headers)] + [len(row) for row in self.rows], default=0
        )
        for index in range(column_count):
            header = self.headers[index] if index < len(self.headers) else ""
            table.add_column(_cell(header))

        for row in self.rows:
            table.add_row(*(_cell(cell) for cell in row))

        return table

    def render(self) -> None:
        self.console.print(self.build())
