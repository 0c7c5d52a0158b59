"""Progress bar on top of Rich's progress display."""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    Task,
    TimeElapsedColumn,
)

from typo3_console.exceptions import ProgressNotStartedError


class ProgressBar:
    """Single-task progress bar.

    Without a maximum the bar is indeterminate (pulsing) until finished.
    """

    def __init__(self, console: Console):
        self.console = console
        self._progress: Progress | None = None
        self._task_id = None

    @property
    def started(self) -> bool:
        return self._progress is not None

    @property
    def current(self) -> int:
        return int(self._task().completed)

    @property
    def max_steps(self) -> int | None:
        total = self._task().total
        return None if total is None else int(total)

    def start(self, max_steps: int | None = None) -> None:
        """Start (or restart) the progress display."""
        if self._progress is not None:
            self._progress.stop()

        self._progress = Progress(
            SpinnerColumn(),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
        )
        self._task_id = self._progress.add_task("", total=max_steps)
        self._progress.start()

    def advance(self, step: int = 1) -> None:
        self.set_progress(self.current + step)

    def set_progress(self, current: int) -> None:
        """Set the current step, raising the maximum when it is exceeded."""
        task = self._task()
        if task.total is not None and current > task.total:
            self._progress.update(self._task_id, total=current)
        self._progress.update(self._task_id, completed=max(current, 0))

    def finish(self) -> None:
        """Complete the bar and stop the display."""
        task = self._task()
        total = task.completed if task.total is None else task.total
        self._progress.update(self._task_id, total=total, completed=total)
        self._progress.stop()
        self._progress = None
        self._task_id = None

    def _task(self) -> Task:
        if self._progress is None:
            raise ProgressNotStartedError(
                "Progress has not been started, call progress_start() first."
            )
        return self._progress.tasks[0]
